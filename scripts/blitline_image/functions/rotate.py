"""Rotate by a number of degrees."""

from __future__ import annotations

from blitline_image.core.errors import check
from .base import ImageFunction, require_number


class Rotate(ImageFunction):
    name = "rotate"
    init_params = ("amount",)
    required = init_params

    def __init__(self, amount: float) -> None:
        super().__init__()
        require_number("amount", amount)
        check(-360 <= amount <= 360, f"amount must be between -360 and 360 degrees, got {amount}")
        self._set("amount", amount)
