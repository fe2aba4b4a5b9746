"""Crop a rectangle out of the image."""

from __future__ import annotations

from blitline_image.core.errors import check
from .base import ImageFunction, require_int


class Crop(ImageFunction):
    name = "crop"
    init_params = ("x", "y", "width", "height")
    required = init_params

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__()
        for param, value in (("x", x), ("y", y)):
            require_int(param, value)
            check(value >= 0, f"{param} must be non-negative, got {value}")
        for param, value in (("width", width), ("height", height)):
            require_int(param, value)
            check(value > 0, f"{param} must be positive, got {value}")
        self._set("x", x)._set("y", y)._set("width", width)._set("height", height)
