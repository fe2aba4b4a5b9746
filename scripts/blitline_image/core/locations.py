"""Amazon S3 location value object."""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from .errors import check


S3_BUCKET_SUBPATTERN = r"([A-Za-z0-9._-]{3,63})"
S3_BUCKET_PATTERN = re.compile(r"\A" + S3_BUCKET_SUBPATTERN + r"\Z")
S3_URL_PATTERN = re.compile(r"\As3://" + S3_BUCKET_SUBPATTERN + r"/(.+)\Z")

CACHE_CONTROL_HEADER_NAME = "Cache-Control"
# One year; meant for uniquely named assets that never change.
CACHE_CONTROL_FOREVER_VALUE = "public, max-age=31536000"


class S3Location:
    """A bucket and key in S3, used as a job source or as a place to save results.

    Identity is ``(bucket, key)``. Headers are extra HTTP headers applied when the
    object is written and are ignored by ``==`` and ``hash``.
    """

    __slots__ = ("_bucket", "_key", "_headers")

    def __init__(self, bucket: str, key: str, headers: Optional[Mapping[str, str]] = None) -> None:
        check(
            isinstance(bucket, str) and S3_BUCKET_PATTERN.match(bucket) is not None,
            f"bucket parameter '{bucket}' is not a valid S3 bucket name",
        )
        check(key is not None, "key parameter must not be None")
        self._bucket = bucket
        self._key = key
        self._headers: Dict[str, str] = dict(headers or {})

    @classmethod
    def of(cls, bucket: str, key: str, headers: Optional[Mapping[str, str]] = None) -> "S3Location":
        return cls(bucket, key, headers)

    @classmethod
    def parse(cls, s3_url: str) -> "S3Location":
        match = S3_URL_PATTERN.match(s3_url) if isinstance(s3_url, str) else None
        check(match is not None, f"'{s3_url}' is not a valid S3 URL")
        return cls(match.group(1), match.group(2))

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def key(self) -> str:
        return self._key

    @property
    def headers(self) -> Mapping[str, str]:
        return MappingProxyType(self._headers)

    def get_headers(self) -> Mapping[str, str]:
        return self.headers

    def get_name(self) -> str:
        return "s3"

    def with_header(self, name: str, value: str) -> "S3Location":
        """Add an HTTP header sent when the object is served from S3. Returns ``self``."""
        self._headers[name] = value
        return self

    def with_cache_forever_header(self) -> "S3Location":
        return self.with_header(CACHE_CONTROL_HEADER_NAME, CACHE_CONTROL_FOREVER_VALUE)

    def to_dict(self) -> Dict[str, object]:
        payload: Dict[str, object] = {"bucket": self._bucket, "key": self._key}
        if self._headers:
            payload["headers"] = dict(self._headers)
        return payload

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, S3Location):
            return NotImplemented
        return self._bucket == other._bucket and self._key == other._key

    def __hash__(self) -> int:
        return hash((self._bucket, self._key))

    def __getstate__(self):
        return (self._bucket, self._key, dict(self._headers))

    def __setstate__(self, state) -> None:
        self._bucket, self._key, self._headers = state

    def __repr__(self) -> str:
        return f"S3Location(bucket={self._bucket!r}, key={self._key!r})"

    def __str__(self) -> str:
        return f"s3://{self._bucket}/{self._key}"
