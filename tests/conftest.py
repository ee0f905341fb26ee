"""Shared fixtures: a fake executor so client tests never touch the network."""

import json

import pytest

from apiwalk.core import HttpResponse


class FakeExecutor:
    """Serves canned responses keyed by URL and records every call."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add_json(self, url, payload, status_code=200):
        self.routes[url] = HttpResponse(status_code, json.dumps(payload).encode("utf-8"), url)

    def add_raw(self, url, body, status_code=200):
        self.routes[url] = HttpResponse(status_code, body, url)

    def add_error(self, url, error):
        self.routes[url] = error

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None

    def execute(self, descriptor, timeout):
        url = descriptor.url
        self.calls.append(url)
        if url not in self.routes:
            return HttpResponse(404, b'{"detail": "no route"}', url)
        route = self.routes[url]
        if isinstance(route, Exception):
            raise route
        return route


@pytest.fixture
def fake_executor():
    return FakeExecutor()
