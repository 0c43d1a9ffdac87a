"""Viewport sizing and nearest-neighbour presentation of a raster buffer."""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image

from .raster import RasterBuffer


_logger = logging.getLogger("chaosgame.viewport")


def fit_to_aspect(available_width: float, available_height: float, aspect_ratio: float) -> tuple[int, int]:
    """Largest size inside the available area that keeps ``aspect_ratio`` (width / height)."""
    if aspect_ratio <= 0:
        raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
    aw = max(0.0, float(available_width))
    ah = max(0.0, float(available_height))
    width = math.floor(min(aw, ah * aspect_ratio))
    height = math.floor(min(aw / aspect_ratio, ah))
    return (width, height)


class Viewport(ABC):
    """Output surface that tracks its own size and pulls frames from a buffer.

    Subclasses implement ``_present``; ``surface_available`` lets them report a
    surface that cannot currently be drawn on.
    """

    def __init__(self, aspect_ratio: float) -> None:
        if aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {aspect_ratio}")
        self.aspect_ratio = float(aspect_ratio)
        self.display_width = 0
        self.display_height = 0

    @property
    def display_size(self) -> tuple[int, int]:
        return (self.display_width, self.display_height)

    def resize(self, available_width: float, available_height: float) -> tuple[int, int]:
        size = fit_to_aspect(available_width, available_height, self.aspect_ratio)
        if size != self.display_size:
            self.display_width, self.display_height = size
            _logger.debug(
                "viewport resized to %sx%s",
                size[0],
                size[1],
                extra={"event": "viewport_resized"},
            )
        return size

    def surface_available(self) -> bool:
        return True

    def update(self, buffer: RasterBuffer) -> bool:
        if self.display_width <= 0 or self.display_height <= 0:
            return False
        if not self.surface_available():
            return False
        self._present(buffer)
        return True

    @abstractmethod
    def _present(self, buffer: RasterBuffer) -> None:
        """Draw ``buffer`` stretched to the current display size."""


class ImageViewport(Viewport):
    """Headless viewport keeping the latest stretched frame as a Pillow image."""

    def __init__(self, aspect_ratio: float, available_width: float = 0, available_height: float = 0) -> None:
        super().__init__(aspect_ratio)
        self.frame: Image.Image | None = None
        self.presented = 0
        if available_width or available_height:
            self.resize(available_width, available_height)

    def _present(self, buffer: RasterBuffer) -> None:
        self.frame = buffer.to_image().resize(self.display_size, Image.Resampling.NEAREST)
        self.presented += 1

    def save(self, path: Path) -> Path:
        if self.frame is None:
            raise RuntimeError("No frame has been presented yet")
        path.parent.mkdir(parents=True, exist_ok=True)
        self.frame.save(path, format="PNG")
        return path
