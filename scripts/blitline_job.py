#!/usr/bin/env python3
"""Assemble a Blitline job request from the command line.

Usage:
  python scripts/blitline_job.py \
    --src s3://my-bucket/uploads/photo.jpg \
    --function "resize_to_fit:width=640,only_shrink_larger=true" \
    --save "thumb=s3://my-bucket/thumbs/photo.jpg" --cache-forever
  python scripts/blitline_job.py --src https://example.com/a.png \
    --function "contrast_stretch_channel:black_point=10,white_point=200" --out job.json

Notes:
- Loads .env from the nearest parent directory (BLITLINE_APPLICATION_ID, BLITLINE_OUTPUTS).
- Prints the job JSON unless --out is given.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from dotenv import load_dotenv

from blitline_image import InvalidArgument, S3Location, build_function, build_payload
from blitline_image.core.payloads import dumps_payload, write_payload
from blitline_image.core.utils import resolve_output_path
from blitline_image.functions import available_functions
from blitline_image.functions.base import ImageFunction


def _find_repo_dotenv() -> Path | None:
    current = Path(__file__).resolve()
    for parent in (current.parent, *current.parents):
        dotenv_path = parent / ".env"
        if dotenv_path.exists():
            return dotenv_path
    return None


def _load_repo_dotenv() -> Path | None:
    dotenv_path = _find_repo_dotenv()
    if dotenv_path is not None:
        load_dotenv(dotenv_path=dotenv_path, override=False)
        return dotenv_path
    load_dotenv(override=False)
    return None


def _coerce_value(text: str) -> Any:
    value = text.strip()
    lowered = value.lower()
    if lowered in {"true", "yes"}:
        return True
    if lowered in {"false", "no"}:
        return False
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _parse_function_spec(spec: str) -> Tuple[str, Dict[str, Any]]:
    name, _, raw_params = spec.partition(":")
    if not name.strip():
        raise InvalidArgument(f"function spec '{spec}' is missing a name")
    params: Dict[str, Any] = {}
    for item in filter(None, (part.strip() for part in raw_params.split(","))):
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise InvalidArgument(f"parameter '{item}' in '{spec}' must look like key=value")
        params[key.strip()] = _coerce_value(value)
    return name.strip(), params


def _parse_save_spec(spec: str, cache_forever: bool) -> Tuple[str, Optional[S3Location]]:
    identifier, sep, url = spec.partition("=")
    if not sep:
        return identifier.strip(), None
    location = S3Location.parse(url.strip())
    if cache_forever:
        location.with_cache_forever_header()
    return identifier.strip(), location


def _build_functions(
    function_specs: Sequence[str],
    save_specs: Sequence[str],
    cache_forever: bool = False,
) -> List[ImageFunction]:
    if len(save_specs) > len(function_specs):
        raise InvalidArgument("more --save values than --function values")
    functions: List[ImageFunction] = []
    for idx, spec in enumerate(function_specs):
        name, params = _parse_function_spec(spec)
        function = build_function(name, params)
        if idx < len(save_specs):
            identifier, location = _parse_save_spec(save_specs[idx], cache_forever)
            function.save(identifier, location)
        functions.append(function)
    return functions


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Blitline: assemble an image job request.")
    parser.add_argument("--src", required=True, help="Source image (s3://bucket/key or http(s) URL)")
    parser.add_argument(
        "--function",
        action="append",
        default=[],
        help=f"name[:key=value,...] (repeatable). Known: {', '.join(available_functions())}",
    )
    parser.add_argument(
        "--save",
        action="append",
        default=[],
        help="identifier[=s3://bucket/key] for the matching --function (repeatable)",
    )
    parser.add_argument(
        "--cache-forever",
        action="store_true",
        help="Add a one-year Cache-Control header to every S3 save destination.",
    )
    parser.add_argument("--application-id", default=None, help="Defaults to BLITLINE_APPLICATION_ID")
    parser.add_argument("--postback-url", default=None, help="URL the service calls when the job finishes")
    parser.add_argument("--out", default=None, help="Write the job JSON here instead of printing it")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _load_repo_dotenv()
    try:
        functions = _build_functions(args.function, args.save, cache_forever=args.cache_forever)
        payload = build_payload(
            src=args.src,
            functions=functions,
            application_id=args.application_id,
            postback_url=args.postback_url,
        )
    except InvalidArgument as exc:
        print(f"Invalid job: {exc}", file=sys.stderr)
        return 2

    if args.out:
        out_path = resolve_output_path(args.out)
        write_payload(out_path, payload)
        print(out_path)
    else:
        print(dumps_payload(payload))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
