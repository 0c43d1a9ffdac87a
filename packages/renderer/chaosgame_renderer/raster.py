"""Owned RGBA pixel buffer that the chaos game plots into."""

from __future__ import annotations

import math

import numpy as np
from PIL import Image

from .models import Color, Point


class RasterBuffer:
    """Fixed-size RGBA8888 grid stored as a flat numpy byte array.

    Plots whose floored coordinates fall outside ``[0, width) x [0, height)``
    are skipped and counted in ``dropped_plots`` rather than written. Writing
    them would wrap into the neighbouring row (``x >= width``) or run past the
    end of the array (``y >= height``).
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"RasterBuffer dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)
        self.pixels = np.zeros(self._width * self._height * 4, dtype=np.uint8)
        self.plotted = 0
        self.dropped_plots = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> tuple[int, int]:
        return (self._width, self._height)

    def offset(self, x: int, y: int) -> int:
        return (y * self._width + x) * 4

    def plot(self, position: Point, color: Color) -> bool:
        x = math.floor(position.x)
        y = math.floor(position.y)
        if not (0 <= x < self._width and 0 <= y < self._height):
            self.dropped_plots += 1
            return False

        base = self.offset(x, y)
        for channel_index, channel_value in color.indexed_channels():
            self.pixels[base + channel_index] = channel_value
        self.plotted += 1
        return True

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        base = self.offset(x, y)
        r, g, b, a = (int(v) for v in self.pixels[base : base + 4])
        return (r, g, b, a)

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", self.size, self.tobytes())
