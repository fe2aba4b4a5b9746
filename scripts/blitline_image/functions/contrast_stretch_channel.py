"""Contrast stretch between a black point and an optional white point."""

from __future__ import annotations

from typing import Optional

from blitline_image.core.errors import check
from .base import ImageFunction, require_int


class ContrastStretchChannel(ImageFunction):
    name = "contrast_stretch_channel"
    init_params = ("black_point", "white_point")
    required = ("black_point",)

    def __init__(self, black_point: int, white_point: Optional[int] = None) -> None:
        super().__init__()
        require_int("black_point", black_point)
        check(black_point >= 0, f"black_point must be non-negative, got {black_point}")
        self._set("black_point", black_point)
        if white_point is not None:
            self.white_point(white_point)

    def white_point(self, white_point: int) -> "ContrastStretchChannel":
        require_int("white_point", white_point)
        black_point = self._params["black_point"]
        check(
            white_point > black_point,
            f"white_point must be greater than black_point ({black_point}), got {white_point}",
        )
        self._set("white_point", white_point)
        return self
