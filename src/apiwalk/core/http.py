"""
Step 2: Execute a request descriptor

The core only needs: send a descriptor, get back (status, bytes). A non-2xx
status is returned as data; callers decide whether it is usable.

No retry adapter is mounted on the session: a single network failure
surfaces immediately as NetworkError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

import requests

from .decode import JsonValue, decode
from .errors import HttpStatusError, NetworkError
from .request import RequestDescriptor

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "apiwalk/0.1 (https://github.com/apiwalk/apiwalk)"
DEFAULT_TIMEOUT = 20.0


@dataclass(frozen=True)
class HttpResponse:
    status_code: int
    body: bytes
    url: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def preview(self, limit: int = 200) -> str:
        text = self.body[:limit].decode("utf-8", errors="replace")
        return text if text else "(empty)"


class Executor(Protocol):
    def execute(self, descriptor: RequestDescriptor, timeout: float) -> HttpResponse:
        ...


class RequestsExecutor:
    """
    Executor backed by a requests.Session.

    Usage:
        with RequestsExecutor(user_agent="my-app/1.0") as ex:
            resp = ex.execute(build(base, ["points", "39.7,-97.1"]), timeout=20)
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        *,
        session: Optional[requests.Session] = None,
    ):
        self.user_agent = user_agent
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            "User-Agent": self.user_agent,
            "Accept": "application/json",
        })
        return session

    def execute(self, descriptor: RequestDescriptor, timeout: float = DEFAULT_TIMEOUT) -> HttpResponse:
        url = descriptor.url
        logger.info("[http] GET %s", url)
        try:
            resp = self.session.get(url, timeout=timeout)
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"TIMEOUT after {timeout}s: {e}", url=url) from e
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(f"CONNECTION_ERROR: {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"{type(e).__name__}: {e}", url=url) from e

        logger.debug("[http] status=%s bytes=%s url=%s", resp.status_code, len(resp.content), resp.url)
        return HttpResponse(status_code=resp.status_code, body=resp.content, url=resp.url or url)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "RequestsExecutor":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def fetch_json(
    executor: Executor,
    descriptor: RequestDescriptor,
    timeout: float = DEFAULT_TIMEOUT,
) -> JsonValue:
    """
    Execute, require a 2xx status, and decode the body.

    Raises:
        NetworkError: executor failure
        HttpStatusError: non-2xx status
        DecodeError: body is not valid JSON
    """
    resp = executor.execute(descriptor, timeout)
    if not resp.ok:
        raise HttpStatusError(resp.status_code, resp.url, resp.preview())
    return decode(resp.body)
