from __future__ import annotations

from src.school_attendance.school_attendance.core.enums import AttendanceStatus
from src.school_attendance.school_attendance.scanning.session import ScanSession


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class CountingRepo:
    """Wraps a repository and counts check-in calls."""

    def __init__(self, inner):
        self._inner = inner
        self.calls = 0

    def check_in_by_scanned_id(self, class_id, scanned_id, iso_date):
        self.calls += 1
        return self._inner.check_in_by_scanned_id(class_id, scanned_id, iso_date)


def _setup(repo):
    school = repo.add_school("Escola")
    turma = repo.add_class(school.id, "A")
    ana = repo.add_student(turma.id, "Ana")
    return turma, ana


def test_duplicate_deliveries_inside_window_check_in_once(repo):
    turma, ana = _setup(repo)
    counting = CountingRepo(repo)
    clock = FakeClock()
    session = ScanSession(counting, turma.id, date_provider=lambda: "2024-02-01", clock=clock, debounce_seconds=2.0)

    first = session.deliver(ana.id)
    clock.now += 0.5
    second = session.deliver(ana.id)
    clock.now += 1.0
    third = session.deliver(ana.id)

    assert first.success and first.message == "Presente: Ana"
    assert second is None and third is None
    assert counting.calls == 1
    assert ana.status_on("2024-02-01") == AttendanceStatus.PRESENT


def test_delivery_accepted_again_after_window(repo):
    turma, ana = _setup(repo)
    bob = repo.add_student(turma.id, "Bob")
    clock = FakeClock()
    session = ScanSession(repo, turma.id, date_provider=lambda: "2024-02-01", clock=clock, debounce_seconds=2.0)

    session.deliver(ana.id)
    clock.now += 2.0
    result = session.deliver(bob.id)

    assert result.student_name == "Bob"
    assert session.is_showing_result


def test_unknown_code_is_reported_and_also_debounced(repo):
    turma, ana = _setup(repo)
    clock = FakeClock()
    session = ScanSession(repo, turma.id, date_provider=lambda: "2024-02-01", clock=clock)

    result = session.deliver("garbage")

    assert result.success is False
    assert result.message == "QR Code não reconhecido"
    assert session.deliver(ana.id) is None
    assert ana.attendance == {}
