"""Blitline image client public surface."""

from .api import build_job, build_payload, function_from_dict, resolve_source
from .core import InvalidArgument, JobRequest, S3Location, SaveTarget
from .core.payloads import job_payload
from .functions import (
    Blur,
    ContrastStretchChannel,
    Crop,
    ImageFunction,
    NoOp,
    ResizeToFit,
    Rotate,
    Sharpen,
    build_function,
    get_function,
)

__all__ = [
    "Blur",
    "ContrastStretchChannel",
    "Crop",
    "ImageFunction",
    "InvalidArgument",
    "JobRequest",
    "NoOp",
    "ResizeToFit",
    "Rotate",
    "S3Location",
    "SaveTarget",
    "Sharpen",
    "build_function",
    "build_job",
    "build_payload",
    "function_from_dict",
    "get_function",
    "job_payload",
    "resolve_source",
]
