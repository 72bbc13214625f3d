import os
import sys
import logging

from core.config import settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_FILE = "archiver.log"


def configure_logging(level: str = None):
    """Configure root logging to stderr and a file under LOGGING_DIR"""
    root = logging.getLogger()
    if getattr(root, "_archiver_configured", False):
        return

    os.makedirs(settings.LOGGING_DIR, exist_ok=True)

    # stdout is reserved for the archive report
    handlers = [
        logging.StreamHandler(sys.stderr),
        logging.FileHandler(os.path.join(settings.LOGGING_DIR, LOG_FILE), encoding="utf-8"),
    ]
    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.setLevel((level or settings.LOG_LEVEL).upper())

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    root._archiver_configured = True
