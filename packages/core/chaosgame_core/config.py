"""Immutable startup configuration schema and loader."""

from __future__ import annotations

import json
import math
import os
import platform
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any

from chaosgame_renderer import Color


CONFIG_VERSION = 1


class ConfigError(ValueError):
    """Raised when configuration is unreadable or describes an impossible setup."""


@dataclass(frozen=True)
class RenderConfig:
    horizontal_resolution: int = 249
    # Fits an equilateral triangle.
    aspect_ratio: float = 2 / 3**0.5

    @property
    def logical_height(self) -> float:
        return self.horizontal_resolution / self.aspect_ratio

    @property
    def buffer_width(self) -> int:
        return math.floor(self.horizontal_resolution)

    @property
    def buffer_height(self) -> int:
        return math.floor(self.logical_height)


@dataclass(frozen=True)
class ColorConfig:
    red: int = 128
    green: int = 0
    blue: int = 192
    opacity: int = 255

    def to_color(self) -> Color:
        return Color(self.red, self.green, self.blue, self.opacity)


@dataclass(frozen=True)
class LoopConfig:
    dots_per_tick: int = 1
    tick_interval_ms: int = 30


@dataclass(frozen=True)
class DisplayConfig:
    surface_id: str = "chaos_game_canvas"
    window_title: str = "Chaos Game"
    initial_width: int = 800
    initial_height: int = 600


@dataclass(frozen=True)
class ChaosGameConfig:
    config_version: int = CONFIG_VERSION
    render: RenderConfig = field(default_factory=RenderConfig)
    color: ColorConfig = field(default_factory=ColorConfig)
    loop: LoopConfig = field(default_factory=LoopConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)


DEFAULT_CONFIG = ChaosGameConfig()

_SECTIONS = ("render", "color", "loop", "display")


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "ChaosGame" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "ChaosGame" / "config.json"
    return Path.home() / ".config" / "chaosgame" / "config.json"


def _merge(dataclass_type, raw: Any):
    if not isinstance(raw, dict):
        raise ConfigError(f"Section {dataclass_type.__name__} must be an object, got {type(raw).__name__}")
    known = {f.name for f in fields(dataclass_type)}
    return dataclass_type(**{k: v for k, v in raw.items() if k in known})


def _positive_finite(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def validate_config(cfg: ChaosGameConfig) -> ChaosGameConfig:
    render = cfg.render
    if not _positive_finite(render.horizontal_resolution):
        raise ConfigError(f"render.horizontal_resolution must be positive, got {render.horizontal_resolution!r}")
    if not _positive_finite(render.aspect_ratio):
        raise ConfigError(f"render.aspect_ratio must be positive, got {render.aspect_ratio!r}")
    if not math.isfinite(render.logical_height):
        raise ConfigError("render.horizontal_resolution / render.aspect_ratio overflows")
    if render.buffer_width < 1 or render.buffer_height < 1:
        raise ConfigError(
            f"render settings produce an empty buffer ({render.buffer_width}x{render.buffer_height})"
        )

    try:
        cfg.color.to_color()
    except ValueError as exc:
        raise ConfigError(f"color: {exc}") from exc

    loop = cfg.loop
    if not isinstance(loop.dots_per_tick, int) or loop.dots_per_tick < 1:
        raise ConfigError(f"loop.dots_per_tick must be >= 1, got {loop.dots_per_tick!r}")
    if not isinstance(loop.tick_interval_ms, int) or loop.tick_interval_ms < 1:
        raise ConfigError(f"loop.tick_interval_ms must be >= 1, got {loop.tick_interval_ms!r}")

    if not str(cfg.display.surface_id).strip():
        raise ConfigError("display.surface_id must not be empty")
    return cfg


def load_config(path: Path | None = None) -> ChaosGameConfig:
    path = path or config_path()
    if not path.exists():
        return DEFAULT_CONFIG

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    try:
        cfg = ChaosGameConfig(
            config_version=int(raw.get("config_version", CONFIG_VERSION)),
            render=_merge(RenderConfig, raw.get("render", {})),
            color=_merge(ColorConfig, raw.get("color", {})),
            loop=_merge(LoopConfig, raw.get("loop", {})),
            display=_merge(DisplayConfig, raw.get("display", {})),
        )
    except ConfigError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc
    return validate_config(cfg)


def with_overrides(cfg: ChaosGameConfig, **sections: dict[str, Any]) -> ChaosGameConfig:
    """Return a copy with per-section values replaced; ``None`` values are ignored."""
    changes = {}
    for name, values in sections.items():
        if name not in _SECTIONS:
            raise ConfigError(f"Unknown config section: {name}")
        present = {k: v for k, v in values.items() if v is not None}
        if present:
            changes[name] = replace(getattr(cfg, name), **present)
    return validate_config(replace(cfg, **changes))


def config_to_dict(cfg: ChaosGameConfig) -> dict[str, Any]:
    data = asdict(cfg)
    data["render"]["buffer_width"] = cfg.render.buffer_width
    data["render"]["buffer_height"] = cfg.render.buffer_height
    return data
