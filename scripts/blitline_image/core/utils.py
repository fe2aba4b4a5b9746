"""Configuration helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from .errors import InvalidArgument

APPLICATION_ID_ENV = "BLITLINE_APPLICATION_ID"
OUTPUTS_ENV = "BLITLINE_OUTPUTS"


def resolve_application_id(explicit: Optional[str] = None) -> str:
    application_id = explicit or os.getenv(APPLICATION_ID_ENV)
    if not application_id or not application_id.strip():
        raise InvalidArgument(f"An application id is required; pass one or set {APPLICATION_ID_ENV}.")
    return application_id.strip()


def resolve_output_path(path: str | Path) -> Path:
    """Anchor bare or relative paths under ``BLITLINE_OUTPUTS`` (default ``outputs``)."""
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = Path(os.getenv(OUTPUTS_ENV, "outputs")) / candidate
    return candidate.resolve()
