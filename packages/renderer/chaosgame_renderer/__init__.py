"""Renderer package: geometry, shapes, colors, raster buffer, and viewports."""

from .models import Color, Point, Shape, midpoint
from .raster import RasterBuffer
from .viewport import ImageViewport, Viewport, fit_to_aspect

__all__ = [
    "Color",
    "ImageViewport",
    "Point",
    "RasterBuffer",
    "Shape",
    "Viewport",
    "fit_to_aspect",
    "midpoint",
]
