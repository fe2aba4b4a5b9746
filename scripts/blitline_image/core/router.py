"""Function name normalization and aliases."""

from __future__ import annotations

import re
from typing import Dict

from .errors import check


FUNCTION_ALIASES: Dict[str, str] = {
    "contrast_stretch": "contrast_stretch_channel",
    "stretch": "contrast_stretch_channel",
    "resize": "resize_to_fit",
    "fit": "resize_to_fit",
    "rotation": "rotate",
    "gaussian_blur": "blur",
    "noop": "no_op",
    "none": "no_op",
}


def normalize_function_name(name: str | None) -> str:
    if not name:
        return ""
    check(isinstance(name, str), f"function name must be a string, got {name!r}")
    slug = re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")
    return FUNCTION_ALIASES.get(slug, slug)
