"""Shared base for image function descriptors."""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from blitline_image.core.contracts import SaveTarget
from blitline_image.core.errors import check
from blitline_image.core.locations import S3Location


def require_int(param: str, value: Any) -> int:
    check(
        isinstance(value, int) and not isinstance(value, bool),
        f"{param} must be an integer, got {value!r}",
    )
    return value


def _is_finite(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints beyond float range
        return False


def require_number(param: str, value: Any) -> float:
    check(_is_finite(value), f"{param} must be a finite number, got {value!r}")
    return value


def require_bool(param: str, value: Any) -> bool:
    check(isinstance(value, bool), f"{param} must be a boolean, got {value!r}")
    return value


class ImageFunction:
    """One remote image operation plus its validated parameters.

    Subclasses set ``name`` and validate each parameter before storing it, so a
    rejected value never changes the instance. Fluent setters return ``self``.
    """

    name: ClassVar[str] = ""
    # Parameters accepted by ``__init__``; ``required`` must be supplied.
    init_params: ClassVar[Tuple[str, ...]] = ()
    required: ClassVar[Tuple[str, ...]] = ()
    # Parameters applied through the fluent setter of the same name.
    setter_params: ClassVar[Tuple[str, ...]] = ()

    __hash__ = None  # type: ignore[assignment]

    def __init__(self) -> None:
        self._params: Dict[str, Any] = {}
        self._save: Optional[SaveTarget] = None
        self._functions: List[ImageFunction] = []

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ImageFunction":
        check(isinstance(params, Mapping), f"{cls.name} parameters must be a mapping, got {params!r}")
        values = dict(params)
        known = set(cls.init_params) | set(cls.setter_params)
        unknown = sorted(key for key in values if key not in known)
        check(not unknown, f"{cls.name} does not accept parameters: {', '.join(unknown)}")
        missing = [key for key in cls.required if key not in values]
        check(not missing, f"{cls.name} requires parameters: {', '.join(missing)}")
        function = cls(**{key: values[key] for key in cls.init_params if key in values})
        for key in cls.setter_params:
            if key in values:
                getattr(function, key)(values[key])
        return function

    def get_name(self) -> str:
        return self.name

    @property
    def params(self) -> Mapping[str, Any]:
        return MappingProxyType(self._params)

    def get_params(self) -> Mapping[str, Any]:
        return self.params

    @property
    def save_target(self) -> Optional[SaveTarget]:
        return self._save

    @property
    def functions(self) -> Sequence["ImageFunction"]:
        return tuple(self._functions)

    def save(self, image_identifier: str, destination: Optional[S3Location] = None) -> "ImageFunction":
        """Save this function's output under ``image_identifier``, optionally to S3."""
        self._save = SaveTarget(image_identifier=image_identifier, s3_destination=destination)
        return self

    def then(self, *functions: "ImageFunction") -> "ImageFunction":
        """Apply ``functions`` to the output of this one."""
        for function in functions:
            check(
                isinstance(function, ImageFunction),
                f"nested functions must be image functions, got {function!r}",
            )
        for function in functions:
            check(not function._reaches(self), "a function cannot be nested in itself")
        self._functions.extend(functions)
        return self

    def _reaches(self, target: "ImageFunction") -> bool:
        pending: List[ImageFunction] = [self]
        seen: Set[int] = set()
        while pending:
            current = pending.pop()
            if current is target:
                return True
            if id(current) in seen:
                continue
            seen.add(id(current))
            pending.extend(current._functions)
        return False

    def _set(self, param: str, value: Any) -> "ImageFunction":
        self._params[param] = value
        return self

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": self.name, "params": dict(self._params)}
        if self._save is not None:
            payload["save"] = self._save.to_dict()
        if self._functions:
            payload["functions"] = [function.to_dict() for function in self._functions]
        return payload

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImageFunction):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._params == other._params
            and self._save == other._save
            and self._functions == other._functions
        )

    def __repr__(self) -> str:
        params = ", ".join(f"{key}={value!r}" for key, value in self._params.items())
        return f"{type(self).__name__}({params})"


__all__ = ["ImageFunction", "require_bool", "require_int", "require_number"]
