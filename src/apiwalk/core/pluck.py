"""
Step 4: Safe nested-field extraction ("pluck")

Third-party JSON is not contractually stable: optional fields really are
optional. Chained indexing like

    data["slides"][0]["lines"][1]["member"]["id"]

fails hard on the first absent field. `pluck` walks the same path and
returns a caller-supplied default instead:

    pluck(data, ["slides", 0, "lines", 1, "member", "id"], None)

Rules:
- str step  -> key lookup, only on an object (dict)
- int step  -> index lookup, only on an array (list), 0 <= i < len
- anything else (missing key, out of range, wrong container) -> default
- an explicit null at the end of the path is FOUND, not defaulted
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, Tuple, Type, TypeVar, Union

PathStep = Union[str, int]
Path = Sequence[PathStep]
ExpectedType = Union[Type[Any], Tuple[Type[Any], ...]]

T = TypeVar("T")

_MISSING = object()


@dataclass(frozen=True)
class PluckResult(Generic[T]):
    """Outcome of a pluck: `found` separates Found(None) from Default."""
    found: bool
    value: T

    @property
    def is_default(self) -> bool:
        return not self.found


def _step(current: Any, step: PathStep) -> Any:
    if isinstance(step, bool):
        return _MISSING
    if isinstance(step, str):
        if isinstance(current, Mapping) and step in current:
            return current[step]
        return _MISSING
    if isinstance(step, int):
        if isinstance(current, (list, tuple)) and 0 <= step < len(current):
            return current[step]
        return _MISSING
    return _MISSING


def _matches(value: Any, expected: ExpectedType) -> bool:
    types = expected if isinstance(expected, tuple) else (expected,)
    if isinstance(value, bool):
        return bool in types or object in types
    # JSON has one number type; an int is an acceptable float
    if isinstance(value, int) and float in types:
        return True
    return isinstance(value, types)


def pluck_result(
    value: Any,
    path: Path,
    default: T,
    expected_type: Optional[ExpectedType] = None,
) -> PluckResult:
    """
    Walk `path` through `value` and report whether the target was found.

    Args:
        value: Decoded JSON value
        path: Ordered keys (str) and indices (int)
        default: Returned when the path is not fully reachable
        expected_type: Optional type (or tuple) the found value must match;
            a mismatch yields the default. None at the target always counts
            as found.

    Returns:
        PluckResult(found=True, value=<target>) or PluckResult(False, default)
    """
    if isinstance(path, (str, bytes)):
        raise TypeError("path must be a sequence of steps; use parse_path() for dotted strings")

    current = value
    for step in path:
        current = _step(current, step)
        if current is _MISSING:
            return PluckResult(found=False, value=default)

    if current is not None and expected_type is not None and not _matches(current, expected_type):
        return PluckResult(found=False, value=default)

    return PluckResult(found=True, value=current)


def pluck(
    value: Any,
    path: Path,
    default: T,
    expected_type: Optional[ExpectedType] = None,
) -> Any:
    """Return the value at `path`, or `default` if it cannot be reached."""
    return pluck_result(value, path, default, expected_type).value


def parse_path(dotted: str) -> Tuple[PathStep, ...]:
    """
    Split a dotted path into steps; all-digit parts become indices.

        parse_path("slides.0.lines.1.member.id")
        -> ("slides", 0, "lines", 1, "member", "id")

    A signed part such as "-1" stays a string key, so it never indexes an
    array. Empty parts ("a..b", ".a", "a.") raise ValueError.
    """
    if not dotted:
        return ()
    parts = dotted.split(".")
    if any(part == "" for part in parts):
        raise ValueError(f"Empty step in path: {dotted!r}")
    return tuple(int(part) if part.isdecimal() else part for part in parts)
