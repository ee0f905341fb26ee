"""
Step 1: Build a request descriptor

A descriptor is a base endpoint, an ordered list of path segments and an
optional query. It does no network I/O; `url` resolves it to a string:

    build("https://api.weather.gov", ["points", "39.7456,-97.0892"]).url
    -> "https://api.weather.gov/points/39.7456,-97.0892"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from .errors import InvalidArgument

Segment = Union[str, int]

# RFC 3986 pchar minus unreserved (quote never escapes those)
_PCHAR_SAFE = "!$&'()*+,;=:@"


def _escape_segment(segment: Segment, *, literal_slashes: bool) -> str:
    if isinstance(segment, bool) or not isinstance(segment, (str, int)):
        raise InvalidArgument(f"Path segment must be str or int, got {type(segment).__name__}")

    text = str(segment)
    if literal_slashes:
        text = text.strip("/")
    if not text:
        raise InvalidArgument(f"Empty path segment: {segment!r}")

    safe = _PCHAR_SAFE + "/" if literal_slashes else _PCHAR_SAFE
    return quote(text, safe=safe)


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully-qualified, immutable description of one GET request."""
    base: str
    segments: Tuple[str, ...] = ()
    query: Tuple[Tuple[str, str], ...] = ()

    @property
    def path(self) -> str:
        return "/".join(self.segments)

    @property
    def params(self) -> dict[str, str]:
        return dict(self.query)

    @property
    def url(self) -> str:
        url = self.base
        if self.segments:
            url = self.base.rstrip("/") + "/" + self.path
        if self.query:
            url += "?" + urlencode(self.query)
        return url

    @classmethod
    def from_url(cls, url: str) -> "RequestDescriptor":
        """
        Wrap an absolute URL handed back by a previous response.

        The path is taken as already escaped; the query string is parsed so
        the descriptor compares equal to one built from the same parts.
        """
        if not isinstance(url, str) or not url.strip():
            raise InvalidArgument("URL must be a non-empty string")

        parts = urlsplit(url.strip())
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidArgument(f"Expected an absolute http(s) URL, got {url!r}")

        base = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
        query = tuple(parse_qsl(parts.query, keep_blank_values=True))
        return cls(base=base, query=query)

    def __str__(self) -> str:
        return self.url


def build(
    base: str,
    segments: Sequence[Segment] = (),
    query: Optional[Mapping[str, object]] = None,
    *,
    literal_slashes: bool = True,
) -> RequestDescriptor:
    """
    Compose a base endpoint, path segments and query into a descriptor.

    Args:
        base: Endpoint root, e.g. "https://now-api.parliament.uk/api/"
        segments: Ordered path segments; each is percent-encoded on join
        query: Optional query parameters (values are str()-converted)
        literal_slashes: Treat "/" inside a segment as a route separator
            (default). Set False to encode it as %2F for data values.

    Returns:
        RequestDescriptor

    Raises:
        InvalidArgument: empty base, empty segment, or empty query key
    """
    if not isinstance(base, str) or not base.strip():
        raise InvalidArgument("base must be a non-empty string")
    if isinstance(segments, (str, bytes)):
        raise InvalidArgument("segments must be a sequence of segments, not a single string")

    escaped = tuple(_escape_segment(s, literal_slashes=literal_slashes) for s in segments)

    pairs: list[Tuple[str, str]] = []
    for key, value in (query or {}).items():
        if not key:
            raise InvalidArgument("Query parameter names must be non-empty")
        pairs.append((str(key), "" if value is None else str(value)))

    return RequestDescriptor(base=base.strip(), segments=escaped, query=tuple(pairs))
