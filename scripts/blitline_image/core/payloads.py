"""Convert descriptors into JSON-ready job payloads."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping

from .contracts import JobRequest
from .locations import S3Location


def _serialize(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return _serialize(to_dict())
    if isinstance(value, Mapping):
        return {str(k): _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(item) for item in value]
    return str(value)


def source_payload(src: Any) -> Any:
    if isinstance(src, S3Location):
        payload: Dict[str, Any] = {"name": src.get_name()}
        payload.update(src.to_dict())
        return payload
    return src


def job_payload(job: JobRequest) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "application_id": job.application_id,
        "src": _serialize(source_payload(job.src)),
        "functions": [_serialize(function) for function in job.functions],
    }
    if job.postback_url:
        payload["postback_url"] = job.postback_url
    return payload


def dumps_payload(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2)


def write_payload(path: Path, payload: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
        handle.write("\n")
