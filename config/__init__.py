import importlib
import os

SETTING_NAMES = (
    "STORAGE_PATH",
    "STORAGE_KEY",
    "LEGACY_STORAGE_KEY",
    "LEGACY_SCHOOL_NAME",
    "REPORT_VARIANT",
    "SCAN_DEBOUNCE_SECONDS",
    "SCANNER_REAR_DEVICE",
    "SCANNER_FRONT_DEVICE",
    "QR_BOX_SIZE",
    "QR_BORDER",
    "DEBUG",
    "LOG_LEVEL",
)


def get_settings_module() -> str:
    # APP_ENV picks the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def load_settings() -> dict:
    """Settings of the active module as a plain dict (only the known names)."""
    settings = importlib.import_module(get_settings_module())
    return {name: getattr(settings, name) for name in SETTING_NAMES if hasattr(settings, name)}
