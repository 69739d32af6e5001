"""File logging, kept off the terminal so it never draws over the Textual screen."""

from __future__ import annotations

import logging
from pathlib import Path

from deliverybook.config import resolve_log_level, resolve_log_path

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(log_path: str | None = None, level: str | None = None) -> None:
    path = Path(log_path or resolve_log_path())
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FORMAT))

    root = logging.getLogger("deliverybook")
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(level or resolve_log_level())
    root.propagate = False
