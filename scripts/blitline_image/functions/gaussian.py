"""Gaussian sharpen and blur.

Both take an optional ``sigma`` and ``radius``; anything left unset falls back to
the service default.
"""

from __future__ import annotations

from typing import Optional

from blitline_image.core.errors import check
from .base import ImageFunction, require_number


class _GaussianFunction(ImageFunction):
    setter_params = ("sigma", "radius")

    def __init__(self, sigma: Optional[float] = None, radius: Optional[float] = None) -> None:
        super().__init__()
        if sigma is not None:
            self.sigma(sigma)
        if radius is not None:
            self.radius(radius)

    def _non_negative(self, param: str, value: float) -> "_GaussianFunction":
        require_number(param, value)
        check(value >= 0, f"{param} must be non-negative, got {value}")
        return self._set(param, value)

    def sigma(self, sigma: float) -> "_GaussianFunction":
        return self._non_negative("sigma", sigma)

    def radius(self, radius: float) -> "_GaussianFunction":
        return self._non_negative("radius", radius)


class Sharpen(_GaussianFunction):
    name = "sharpen"


class Blur(_GaussianFunction):
    name = "blur"
