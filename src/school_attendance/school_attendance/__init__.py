"""School Attendance package.

Feature modules (roster, attendance, reports, scanning, qr) sit on top of a
small storage bridge, with a thin Flask controller layer wired by the container.
"""
