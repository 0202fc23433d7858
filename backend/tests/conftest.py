"""Shared fixtures: fake event loop, settings, mocked backend."""

import json

import httpx
import pytest

from partymap_admin.auth.session import AuthSession
from partymap_admin.client import ApiClient
from partymap_admin.config import Settings, get_settings
from partymap_admin.services.geometry import Coordinate

TEST_API_URL = "http://backend.test/api"

# Concrete square around lower Manhattan used throughout the admin forms
SQUARE = [
    Coordinate(-74.006, 40.7128),
    Coordinate(-74.005, 40.7128),
    Coordinate(-74.005, 40.7138),
    Coordinate(-74.006, 40.7138),
    Coordinate(-74.006, 40.7128),
]
SQUARE_PAIRS = [c.to_pair() for c in SQUARE]


class FakeTimerHandle:
    def __init__(self, due_ms: int, callback, args):
        self.due_ms = due_ms
        self.callback = callback
        self.args = args
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled


class FakeLoop:
    """
    Just enough of an event loop for `call_later`, driven by `advance(ms)`.
    Time is kept in integer milliseconds so due times compare exactly.
    """

    def __init__(self):
        self.now_ms = 0
        self.handles: list[FakeTimerHandle] = []

    def time(self):
        return self.now_ms / 1000

    def call_later(self, delay, callback, *args):
        handle = FakeTimerHandle(self.now_ms + round(delay * 1000), callback, args)
        self.handles.append(handle)
        return handle

    def advance(self, ms: int):
        target = self.now_ms + ms
        while True:
            due = [h for h in self.handles if not h.cancelled() and h.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due_ms)
            self.handles.remove(handle)
            self.now_ms = handle.due_ms
            handle.callback(*handle.args)
        self.now_ms = target

    @property
    def pending(self):
        return [h for h in self.handles if not h.cancelled()]


@pytest.fixture
def fake_loop():
    return FakeLoop()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings():
    return Settings(
        app_env="development",
        backend_url_dev="http://backend.test",
        admin_token=None,
        _env_file=None,
    )


class MockBackend:
    """Records requests and answers them from a route table."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], httpx.Response] = {}

    def add(self, method: str, path: str, status_code: int = 200, json_body=None):
        self.routes[(method, path)] = httpx.Response(status_code, json=json_body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path.removeprefix("/api"))
        if key in self.routes:
            return self.routes[key]
        return httpx.Response(404, json={"message": f"No route for {key}"})

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def backend():
    return MockBackend()


@pytest.fixture
def session():
    return AuthSession()


@pytest.fixture
def client(backend, session, settings):
    return ApiClient(session, settings, transport=httpx.MockTransport(backend.handler))
