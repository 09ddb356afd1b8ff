"""Root logger setup driven by Settings (LOG_LEVEL, LOG_FILE)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(root: Optional[logging.Logger] = None) -> logging.Logger:
    """Attach console (and optional file) handlers once; later calls are no-ops."""
    settings = get_settings()
    root = root or logging.getLogger()
    if root.handlers:
        return root

    root.setLevel(getattr(logging, settings.log_level, logging.INFO))
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.log_file:
        handlers.append(logging.FileHandler(Path(settings.log_file).resolve(), encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    return root
