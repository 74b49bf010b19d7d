import json

import pytest
import requests
from fastapi.testclient import TestClient

from relay.core.config import Settings
from relay.main import create_app
from relay.services.cache import ResponseCache
from relay.services.resolver import ShareResolver


class FakeResponse:
    def __init__(self, status_code: int, payload=None, text: str | None = None):
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(payload if payload is not None else {})


class FakeSession:
    """Stands in for requests.Session; replies from a queue or a fixed response."""

    def __init__(self):
        self.calls: list[str] = []
        self.response = FakeResponse(200, {"href": "https://downloader.disk.yandex.ru/d/file.jpg"})
        self.error: Exception | None = None
        self.closed = False

    def reply(self, status_code: int, payload=None, text: str | None = None) -> None:
        self.response = FakeResponse(status_code, payload, text)

    def get(self, url, headers=None, timeout=None):
        self.calls.append(url)
        self.timeout = timeout
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings(tmp_path):
    return Settings(_env_file=None, static_dir=str(tmp_path / "missing-public"))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def cache(clock):
    return ResponseCache(ttl_seconds=60, timer=clock)


@pytest.fixture
def resolver(settings, cache, session):
    return ShareResolver(settings, cache, session=session)


@pytest.fixture
def client(settings, resolver):
    app = create_app(settings, resolver=resolver)
    return TestClient(app, follow_redirects=False)


@pytest.fixture
def request_error():
    return requests.ConnectionError("connection refused")
