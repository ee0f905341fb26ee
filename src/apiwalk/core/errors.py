"""
Error taxonomy for the API access layer.

Absence of a field is never an error here: `pluck` returns a default.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


class ApiWalkError(Exception):
    """Base class for every error raised by apiwalk."""


class InvalidArgument(ApiWalkError, ValueError):
    """Malformed request construction input."""


class NetworkError(ApiWalkError):
    """The executor could not complete the call (connection, timeout, DNS)."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class DecodeError(ApiWalkError, ValueError):
    """Response body is not valid JSON."""

    def __init__(
        self,
        reason: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        position: Optional[int] = None,
    ):
        self.reason = reason
        self.line = line
        self.column = column
        self.position = position
        if line is not None and column is not None:
            message = f"{reason} (line {line}, column {column})"
        else:
            message = reason
        super().__init__(message)


class HttpStatusError(ApiWalkError):
    """A non-2xx response where the caller needs a usable body."""

    def __init__(self, status_code: int, url: str, preview: str = ""):
        self.status_code = status_code
        self.url = url
        self.preview = preview
        message = f"HTTP {status_code} for {url}"
        if preview:
            message += f" body_preview={preview}"
        super().__init__(message)


class MissingFieldError(ApiWalkError):
    """A response lacks a field the next request depends on."""

    def __init__(self, path: str, url: Optional[str] = None):
        self.path = path
        self.url = url
        super().__init__(f"Response missing required field '{path}'. url={url}")


@dataclass(frozen=True)
class RowError:
    """Parser failure for one column of one projected record."""
    column: str
    reason: str
    raw_value: object = None

    def __str__(self) -> str:
        return f"{self.column}: {self.reason}"
