"""Structured local logging and crash hook setup."""

from __future__ import annotations

import faulthandler
import json
import logging
import logging.handlers
import os
import platform
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


_LOGGER_NAME = "chaosgame"
_EXTRA_FIELDS = ("event", "crash_id", "exit_code")


def _data_root() -> Path:
    if platform.system() == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "ChaosGame"
    if platform.system() == "Darwin":
        return Path.home() / "Library" / "Application Support" / "ChaosGame"
    return Path.home() / ".config" / "chaosgame"


def log_dir(create: bool = True) -> Path:
    path = _data_root() / "logs"
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


class JsonFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` fields in ``_EXTRA_FIELDS`` are kept."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts_utc": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        for name in _EXTRA_FIELDS:
            if hasattr(record, name):
                payload[name] = getattr(record, name)
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(
    level: int = logging.INFO,
    keep_files: int = 7,
    console: bool = True,
    directory: Path | None = None,
) -> logging.Logger:
    logger = logging.getLogger(_LOGGER_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(level)
    target = directory or log_dir()
    target.mkdir(parents=True, exist_ok=True)
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=str(target / "chaosgame.log"),
        when="midnight",
        backupCount=max(2, keep_files),
        encoding="utf-8",
    )
    file_handler.setFormatter(JsonFormatter())
    logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        logger.addHandler(console_handler)

    logger.info("logging to %s", target, extra={"event": "logging_configured"})
    return logger


def get_logger(suffix: str | None = None) -> logging.Logger:
    if suffix:
        return logging.getLogger(f"{_LOGGER_NAME}.{suffix}")
    return logging.getLogger(_LOGGER_NAME)


def install_crash_hooks() -> None:
    """Log uncaught exceptions with a crash id and dump native faults next to the logs."""
    logger = get_logger()

    def _log_uncaught(exc_type, exc_value, exc_tb) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return
        crash_id = uuid.uuid4().hex[:12]
        logger.critical(
            "uncaught %s crash_id=%s",
            exc_type.__name__,
            crash_id,
            exc_info=(exc_type, exc_value, exc_tb),
            extra={"event": "uncaught_exception", "crash_id": crash_id},
        )

    sys.excepthook = _log_uncaught
    fault_file = (log_dir() / "fault.log").open("a", encoding="utf-8")
    faulthandler.enable(file=fault_file)
