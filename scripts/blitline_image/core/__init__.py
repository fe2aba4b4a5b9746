"""Core contracts and helpers."""

from .contracts import JobRequest, SaveTarget
from .errors import InvalidArgument, check
from .locations import S3Location

__all__ = [
    "InvalidArgument",
    "JobRequest",
    "S3Location",
    "SaveTarget",
    "check",
]
