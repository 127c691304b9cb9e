import os

STORAGE_PATH = os.getenv("STORAGE_PATH", "data/storage.json")
STORAGE_KEY = os.getenv("STORAGE_KEY", "attendance-schools-v3")
LEGACY_STORAGE_KEY = os.getenv("LEGACY_STORAGE_KEY", "attendance-classes-v2")
LEGACY_SCHOOL_NAME = os.getenv("LEGACY_SCHOOL_NAME", "Minha Escola")

REPORT_VARIANT = os.getenv("REPORT_VARIANT", "class")

SCAN_DEBOUNCE_SECONDS = float(os.getenv("SCAN_DEBOUNCE_SECONDS", "2.0"))
SCANNER_REAR_DEVICE = int(os.getenv("SCANNER_REAR_DEVICE", "0"))
SCANNER_FRONT_DEVICE = int(os.getenv("SCANNER_FRONT_DEVICE", "1"))

QR_BOX_SIZE = int(os.getenv("QR_BOX_SIZE", "8"))
QR_BORDER = int(os.getenv("QR_BORDER", "2"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
