"""Diagnostics payload for the ``doctor`` command."""

from __future__ import annotations

import platform
from datetime import datetime, timezone
from importlib import metadata
from typing import Any

from .config import ChaosGameConfig, config_path, config_to_dict
from .logging_setup import log_dir


_DISTRIBUTIONS = ("numpy", "Pillow", "PySide6", "psutil")


def _installed(name: str) -> str | None:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return None


def build_doctor_payload(cfg: ChaosGameConfig) -> dict[str, Any]:
    cfg_file = config_path()
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "libraries": {name: _installed(name) for name in _DISTRIBUTIONS},
        "config_path": str(cfg_file),
        "config_file_present": cfg_file.exists(),
        "log_dir": str(log_dir(create=False)),
        "config": config_to_dict(cfg),
    }
