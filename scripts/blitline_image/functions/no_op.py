"""Pass the image through unchanged, typically to re-save it elsewhere."""

from __future__ import annotations

from .base import ImageFunction


class NoOp(ImageFunction):
    name = "no_op"
