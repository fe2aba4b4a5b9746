"""Resize so the image fits inside a bounding box, keeping its aspect ratio."""

from __future__ import annotations

from typing import Optional

from blitline_image.core.errors import check
from .base import ImageFunction, require_bool, require_int


def _require_dimension(param: str, value: int) -> int:
    require_int(param, value)
    check(value > 0, f"{param} must be positive, got {value}")
    return value


class ResizeToFit(ImageFunction):
    name = "resize_to_fit"
    init_params = ("width", "height")
    setter_params = ("only_shrink_larger",)

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None) -> None:
        super().__init__()
        check(width is not None or height is not None, "resize_to_fit needs a width or a height")
        if width is not None:
            _require_dimension("width", width)
        if height is not None:
            _require_dimension("height", height)
        if width is not None:
            self._set("width", width)
        if height is not None:
            self._set("height", height)

    def only_shrink_larger(self, enabled: bool = True) -> "ResizeToFit":
        require_bool("only_shrink_larger", enabled)
        self._set("only_shrink_larger", enabled)
        return self
