"""Typed geometry, shape, and color models."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    @staticmethod
    def midpoint(a: Point, b: Point) -> Point:
        return Point((a.x + b.x) / 2, (a.y + b.y) / 2)


def midpoint(a: Point, b: Point) -> Point:
    return Point.midpoint(a, b)


class Shape:
    """Polygon corners with uniform random corner selection."""

    def __init__(self, corners: Iterable[Point], rng: random.Random | None = None) -> None:
        self.corners: tuple[Point, ...] = tuple(corners)
        if not self.corners:
            raise ValueError("Shape requires at least one corner")
        self._rng = rng or random.Random()

    @classmethod
    def triangle(cls, width: float, height: float, rng: random.Random | None = None) -> Shape:
        top_middle = Point(width / 2, 0)
        bottom_left = Point(0, height)
        bottom_right = Point(width, height)
        return cls((top_middle, bottom_left, bottom_right), rng=rng)

    def random_corner(self) -> Point:
        return self.corners[self._rng.randrange(len(self.corners))]

    def __len__(self) -> int:
        return len(self.corners)


CHANNEL_NAMES = ("red", "green", "blue", "opacity")


@dataclass(frozen=True)
class Color:
    red: int
    green: int
    blue: int
    opacity: int = 255

    def __post_init__(self) -> None:
        for name, value in zip(CHANNEL_NAMES, self.channels):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Color channel {name} must be an integer, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"Color channel {name} must be in [0, 255], got {value}")

    @property
    def channels(self) -> tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, self.opacity)

    def indexed_channels(self) -> Iterator[tuple[int, int]]:
        return enumerate(self.channels)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        cleaned = value.strip().lstrip("#")
        if len(cleaned) not in (6, 8):
            raise ValueError(f"Expected #RRGGBB or #RRGGBBAA, got {value!r}")
        try:
            parts = [int(cleaned[i : i + 2], 16) for i in range(0, len(cleaned), 2)]
        except ValueError:
            raise ValueError(f"Invalid hex color: {value!r}") from None
        return cls(*parts)

    def to_hex(self) -> str:
        return "#" + "".join(f"{c:02X}" for c in self.channels)
