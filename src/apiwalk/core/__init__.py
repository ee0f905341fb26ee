"""
Core: typed API access + JSON path extraction

Simple, step-by-step building blocks:
1. request - build a RequestDescriptor (no I/O)
2. http - execute it (status + bytes), no retries
3. decode - bytes -> JsonValue
4. pluck - safe nested extraction with a default
5. project - JSON records -> uniform table
"""

from .decode import JsonValue, decode, encode
from .errors import (
    ApiWalkError,
    DecodeError,
    HttpStatusError,
    InvalidArgument,
    MissingFieldError,
    NetworkError,
    RowError,
)
from .http import Executor, HttpResponse, RequestsExecutor, fetch_json
from .pluck import PluckResult, parse_path, pluck, pluck_result
from .project import (
    Column,
    ProjectedRow,
    Projection,
    optional_number,
    parse_number,
    parse_text,
    parse_timestamp,
    project,
)
from .request import RequestDescriptor, build

__all__ = [
    "ApiWalkError",
    "Column",
    "DecodeError",
    "Executor",
    "HttpResponse",
    "HttpStatusError",
    "InvalidArgument",
    "JsonValue",
    "MissingFieldError",
    "NetworkError",
    "PluckResult",
    "ProjectedRow",
    "Projection",
    "RequestDescriptor",
    "RequestsExecutor",
    "RowError",
    "build",
    "decode",
    "encode",
    "fetch_json",
    "optional_number",
    "parse_number",
    "parse_path",
    "parse_text",
    "parse_timestamp",
    "pluck",
    "pluck_result",
    "project",
]
