import os

STORAGE_PATH = os.getenv("STORAGE_PATH", "data/test-storage.json")
STORAGE_KEY = "attendance-schools-v3"
LEGACY_STORAGE_KEY = "attendance-classes-v2"
LEGACY_SCHOOL_NAME = "Minha Escola"

REPORT_VARIANT = "class"

SCAN_DEBOUNCE_SECONDS = 2.0
SCANNER_REAR_DEVICE = 0
SCANNER_FRONT_DEVICE = 1

QR_BOX_SIZE = 4
QR_BORDER = 1

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
