"""Precondition failures raised by the SDK."""

from __future__ import annotations


class InvalidArgument(ValueError):
    """Raised when a caller-supplied value violates a documented precondition."""


def check(condition: bool, message: str) -> None:
    if not condition:
        raise InvalidArgument(message)
