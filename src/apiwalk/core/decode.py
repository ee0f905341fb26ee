"""
Step 3: Decode a response body into a JsonValue

JsonValue is whatever the standard JSON grammar produces: dict, list, str,
int, float, bool or None. No schema is assumed; `pluck` does the reading.
"""

from __future__ import annotations

import json
from typing import Dict, List, Union

from .errors import DecodeError

JsonScalar = Union[None, bool, int, float, str]
JsonValue = Union[JsonScalar, List["JsonValue"], Dict[str, "JsonValue"]]


def _reject_constant(token: str) -> None:
    # json accepts NaN / Infinity / -Infinity, the grammar does not
    raise DecodeError(f"Invalid token: {token}")


def decode(body: Union[bytes, bytearray, str]) -> JsonValue:
    """
    Convert raw response bytes into a JsonValue.

    Raises DecodeError for invalid UTF-8, truncated or unterminated input,
    invalid tokens/escapes, and trailing data after the top-level value.
    """
    if isinstance(body, (bytes, bytearray)):
        try:
            text = bytes(body).decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Body is not valid UTF-8: {e.reason}", position=e.start) from e
    elif isinstance(body, str):
        text = body
    else:
        raise TypeError(f"decode() expects bytes or str, got {type(body).__name__}")

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DecodeError(e.msg, line=e.lineno, column=e.colno, position=e.pos) from e


def encode(value: JsonValue) -> bytes:
    """Serialize a JsonValue to compact UTF-8 JSON (used for round-trip checks)."""
    try:
        text = json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Value is not JSON-serializable: {e}") from e

    try:
        return text.encode("utf-8")
    except UnicodeEncodeError:
        # lone surrogates only survive as \uXXXX escapes
        return json.dumps(value, ensure_ascii=True, separators=(",", ":"), allow_nan=False).encode("ascii")
