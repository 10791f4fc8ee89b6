# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
JSON-lines logging for kustom.

Every record leaves the process as one JSON object per line:

  {"ts": "2026-...", "level": "INFO", "module": "kustom.training.engine",
   "msg": "Epoch finished", "epoch": 3, "loss": 2.29}

Fields passed through ``extra=`` become top-level keys, which is how the
training loop attaches epoch numbers and metric values. Nothing in the
library prints; everything goes through a logger built by ``get_logger``.

Handlers live on the top-level package logger (``kustom``) only. Module
loggers carry no handlers and propagate to it, so configuring the package
logger once (``bootstrap`` does this from the config's ``log_level`` and
``log_file``) governs every record the package emits.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

# Attributes every LogRecord carries. Anything else on a record came in
# through ``extra=`` and belongs in the JSON payload.
_RESERVED_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class JsonFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "module": record.name,
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RESERVED_RECORD_ATTRS or key.startswith("_"):
                continue
            payload[key] = value

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


class StdoutHandler(logging.StreamHandler):
    """StreamHandler bound to whatever ``sys.stdout`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(stream=sys.stdout)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stdout

    @stream.setter
    def stream(self, value) -> None:
        pass


def _level_from_name(level_name: str) -> int:
    upper = level_name.upper()
    if upper not in LOG_LEVELS:
        raise ValueError(
            f"Invalid log level '{level_name}'. Must be one of: {', '.join(LOG_LEVELS)}"
        )
    return getattr(logging, upper)


def _ensure_handlers(package_logger: logging.Logger, log_file: Optional[Path]) -> None:
    """Attach the stdout handler once, and point the file handler at ``log_file``."""
    formatter = JsonFormatter()

    if not any(isinstance(h, StdoutHandler) for h in package_logger.handlers):
        stdout_handler = StdoutHandler()
        stdout_handler.setFormatter(formatter)
        package_logger.addHandler(stdout_handler)
        if package_logger.level == logging.NOTSET:
            package_logger.setLevel(logging.INFO)
        package_logger.propagate = False

    if log_file is None:
        return

    target = os.path.abspath(log_file)
    file_handlers = [h for h in package_logger.handlers if isinstance(h, logging.FileHandler)]
    if any(h.baseFilename == target for h in file_handlers):
        return
    for handler in file_handlers:
        package_logger.removeHandler(handler)
        handler.close()

    Path(target).parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(target, encoding="utf-8")
    file_handler.setFormatter(formatter)
    package_logger.addHandler(file_handler)


def get_logger(
    name: str,
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
) -> logging.Logger:
    """
    Return a logger whose records come out as JSON lines on stdout.

    The handlers sit on the top-level logger of ``name`` (``kustom`` for
    ``kustom.training.engine.core``) and are attached only once, no matter
    how many times this is called. ``log_file`` adds a file mirror to that
    top-level logger, replacing any earlier one.

    Args:
        name: Logger name, usually the caller's ``__name__``.
        log_level: Level for this logger. Left unset, a module logger
            inherits the level of the package logger.
        log_file: Extra destination for every record of the package.

    Returns:
        The ``logging.Logger`` for ``name``.

    Raises:
        ValueError: If ``log_level`` is not a known level name.
    """
    level = _level_from_name(log_level) if log_level is not None else None
    logger = logging.getLogger(name)
    package_logger = logging.getLogger(name.split(".", 1)[0])

    _ensure_handlers(package_logger, log_file)
    if level is not None:
        logger.setLevel(level)
    return logger


def configure_logging(log_level: str, log_file: Optional[Path] = None) -> logging.Logger:
    """Set the level (and optional file mirror) for every kustom logger."""
    return get_logger("kustom", log_level=log_level, log_file=log_file)
