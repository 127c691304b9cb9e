from __future__ import annotations

import logging

from dotenv import load_dotenv
from flask import Flask

from config import load_settings, get_settings_module

from .attendance.controller import register as register_attendance
from .container import build_container
from .roster.controller import register as register_roster

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: dict | None = None) -> Flask:
    load_dotenv(override=False)
    settings = settings if settings is not None else load_settings()
    configure_logging(settings.get("LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config["DEBUG"] = bool(settings.get("DEBUG", False))
    app.json.ensure_ascii = False

    container = build_container(settings=settings)
    app.extensions["school_attendance"] = container

    logger.info(
        "settings=%s storage=%s schools=%d",
        get_settings_module(),
        settings.get("STORAGE_PATH"),
        len(container.repository.schools),
    )

    register_roster(app, container)
    register_attendance(app, container)

    return app


def main() -> None:
    app = create_app()
    app.run(host="127.0.0.1", port=5000)


if __name__ == "__main__":
    main()
