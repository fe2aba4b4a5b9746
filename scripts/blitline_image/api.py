"""Public API for assembling Blitline job requests."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Mapping, Optional, Union

from blitline_image.core.contracts import JobRequest, is_http_url
from blitline_image.core.errors import InvalidArgument, check
from blitline_image.core.locations import S3Location
from blitline_image.core.payloads import job_payload
from blitline_image.core.utils import resolve_application_id
from blitline_image.functions import build_function
from blitline_image.functions.base import ImageFunction


def resolve_source(src: Union[S3Location, str]) -> Union[S3Location, str]:
    """Accept an ``S3Location``, an ``s3://`` URL or an ``http(s)`` URL."""
    if isinstance(src, S3Location):
        return src
    if isinstance(src, str) and src.lower().startswith("s3://"):
        return S3Location.parse(src)
    if is_http_url(src):
        return src
    raise InvalidArgument(f"src must be an s3:// or http(s) URL, got {src!r}")


def build_job(
    *,
    src: Union[S3Location, str],
    functions: Iterable[ImageFunction],
    application_id: Optional[str] = None,
    postback_url: Optional[str] = None,
) -> JobRequest:
    return JobRequest(
        application_id=resolve_application_id(application_id),
        src=resolve_source(src),
        functions=tuple(functions),
        postback_url=postback_url,
    )


def function_from_dict(payload: Mapping[str, Any]) -> ImageFunction:
    """Rebuild a function (and its save target and nested functions) from ``to_dict`` output."""
    check(
        isinstance(payload, Mapping) and isinstance(payload.get("name"), str),
        f"function payload needs a string name, got {payload!r}",
    )
    params = payload.get("params") or {}
    check(isinstance(params, Mapping), f"params must be a mapping, got {params!r}")
    function = build_function(payload["name"], params)
    save = payload.get("save")
    if save:
        check(isinstance(save, Mapping), f"save must be a mapping, got {save!r}")
        destination = save.get("s3_destination")
        location = None
        if destination:
            check(isinstance(destination, Mapping), f"s3_destination must be a mapping, got {destination!r}")
            headers = destination.get("headers")
            check(headers is None or isinstance(headers, Mapping), f"headers must be a mapping, got {headers!r}")
            location = S3Location(destination.get("bucket"), destination.get("key"), headers)
        function.save(save.get("image_identifier"), location)
    nested = payload.get("functions") or ()
    check(isinstance(nested, (list, tuple)), f"functions must be a list, got {nested!r}")
    if nested:
        function.then(*(function_from_dict(item) for item in nested))
    return function


def build_payload(
    *,
    src: Union[S3Location, str],
    functions: Iterable[ImageFunction],
    application_id: Optional[str] = None,
    postback_url: Optional[str] = None,
) -> Dict[str, Any]:
    job = build_job(
        src=src,
        functions=functions,
        application_id=application_id,
        postback_url=postback_url,
    )
    return job_payload(job)
