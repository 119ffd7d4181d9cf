"""Pytest fixtures: a fake backend, an API client bound to it, and portal contexts."""

import json

import httpx
import pytest

from gramin_portal.api.client import ApiClient
from gramin_portal.container import build_context

BASE_URL = "http://backend.test/api"


class FakeBackend:
    """Records requests and answers them from canned responses keyed by method and path."""

    def __init__(self):
        self.requests = []
        self.responses = {}

    def respond(self, method, path, body=None, status=200, content=None):
        self.responses[(method, path)] = (status, body, content)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path[len("/api"):] if request.url.path.startswith("/api") else request.url.path
        status, body, content = self.responses.get((request.method, path), (200, None, None))
        if content is not None:
            return httpx.Response(status, content=content)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)

    def last_path(self) -> str:
        return self.last.url.path[len("/api"):]


@pytest.fixture
def backend():
    """Fake REST backend."""
    return FakeBackend()


@pytest.fixture
def client(backend):
    """API client talking to the fake backend."""
    return ApiClient(base_url=BASE_URL, transport=httpx.MockTransport(backend.handler))


@pytest.fixture
def storage():
    """Plain dict standing in for per-browser storage."""
    return {}


@pytest.fixture
def make_context(client):
    """Build a hydrated context over the given storage values."""

    def make(values=None):
        return build_context(dict(values or {}), client)

    return make


@pytest.fixture
def ctx(storage, client):
    """Context with no one signed in."""
    return build_context(storage, client)


ADMIN_STORAGE = {
    "admin:authToken": "admin-token",
    "admin:username": "Ramesh",
    "admin:userRole": "ADMIN",
    "admin:memberId": 1,
}

OPERATOR_ADMIN_STORAGE = dict(ADMIN_STORAGE, **{"admin:isOperator": True})

MEMBER_STORAGE = {
    "member:memberToken": "member-token",
    "member:memberId": 7,
    "member:memberName": "Sita Das",
    "member:isOperator": False,
}

OPERATOR_MEMBER_STORAGE = dict(MEMBER_STORAGE, **{"member:isOperator": True})
