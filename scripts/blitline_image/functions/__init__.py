"""Image function registry."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Type

from blitline_image.core.errors import InvalidArgument
from blitline_image.core.router import normalize_function_name
from .base import ImageFunction
from .contrast_stretch_channel import ContrastStretchChannel
from .crop import Crop
from .gaussian import Blur, Sharpen
from .no_op import NoOp
from .resize_to_fit import ResizeToFit
from .rotate import Rotate


_FUNCTIONS: Dict[str, Type[ImageFunction]] = {
    cls.name: cls
    for cls in (ContrastStretchChannel, ResizeToFit, Crop, Rotate, Sharpen, Blur, NoOp)
}


def available_functions() -> list[str]:
    return sorted(_FUNCTIONS)


def get_function(name: str) -> Type[ImageFunction]:
    key = normalize_function_name(name)
    cls = _FUNCTIONS.get(key)
    if cls is None:
        raise InvalidArgument(f"No image function registered for '{name}'.")
    return cls


def build_function(name: str, params: Optional[Mapping[str, Any]] = None) -> ImageFunction:
    return get_function(name).from_params(params or {})


__all__ = [
    "Blur",
    "ContrastStretchChannel",
    "Crop",
    "ImageFunction",
    "NoOp",
    "ResizeToFit",
    "Rotate",
    "Sharpen",
    "available_functions",
    "build_function",
    "get_function",
]
