"""
Logging Configuration — Console and file handlers for the paydesk logger tree.
"""
import logging
import os
import sys

from paydesk.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def setup_logging() -> None:
    """Attach console and file handlers to the ``paydesk`` logger (idempotent)."""
    settings = get_settings()
    logger = logging.getLogger("paydesk")
    logger.setLevel(settings.LOG_LEVEL.upper())

    if getattr(logger, "_paydesk_configured", False):
        return

    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    logger.addHandler(console)

    os.makedirs(settings.LOG_DIR, exist_ok=True)
    file_handler = logging.FileHandler(os.path.join(settings.LOG_DIR, "server.log"), encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    logger._paydesk_configured = True
