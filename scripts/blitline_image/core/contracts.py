"""Data contracts for assembling a job request."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence, Union

from .errors import check
from .locations import S3Location

if TYPE_CHECKING:
    from blitline_image.functions.base import ImageFunction


_HTTP_URL_RE = re.compile(r"\Ahttps?://\S+\Z", re.IGNORECASE)

JobSource = Union[S3Location, str]


def is_http_url(value: Any) -> bool:
    return isinstance(value, str) and bool(_HTTP_URL_RE.match(value))


@dataclass(frozen=True)
class SaveTarget:
    image_identifier: str
    s3_destination: Optional[S3Location] = None

    def __post_init__(self) -> None:
        check(
            isinstance(self.image_identifier, str) and bool(self.image_identifier.strip()),
            "image_identifier must be a non-empty string",
        )
        check(
            self.s3_destination is None or isinstance(self.s3_destination, S3Location),
            f"s3_destination must be an S3Location, got {self.s3_destination!r}",
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"image_identifier": self.image_identifier}
        if self.s3_destination is not None:
            payload["s3_destination"] = self.s3_destination.to_dict()
        return payload


@dataclass
class JobRequest:
    application_id: str
    src: JobSource
    functions: Sequence["ImageFunction"] = field(default_factory=tuple)
    postback_url: Optional[str] = None

    def __post_init__(self) -> None:
        from blitline_image.functions.base import ImageFunction

        check(
            isinstance(self.application_id, str) and bool(self.application_id.strip()),
            "application_id must be a non-empty string",
        )
        check(
            isinstance(self.src, S3Location) or is_http_url(self.src),
            f"src must be an S3Location or an http(s) URL, got {self.src!r}",
        )
        functions = tuple(self.functions)
        check(bool(functions), "a job needs at least one function")
        for function in functions:
            check(
                isinstance(function, ImageFunction),
                f"functions must be image functions, got {function!r}",
            )
        check(
            self.postback_url is None or is_http_url(self.postback_url),
            f"postback_url must be an http(s) URL, got {self.postback_url!r}",
        )
        self.functions = functions
