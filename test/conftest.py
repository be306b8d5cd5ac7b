import json

import pytest
from fastapi.testclient import TestClient

from main import create_app
from middleware.rate_limit import RateLimitStore


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


ALICE = {
    "name": "Alice Example",
    "username": "alice",
    "email": "alice@example.com",
    "bio": "Writes parsers for fun.",
    "location": "Bengaluru",
    "customization": {"backgroundColor": "#000000", "profileImage": "https://img.example/alice.png"},
}
BOB = {"username": "bob"}


@pytest.fixture
def alice_record():
    return dict(ALICE)


@pytest.fixture
def data_dir(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    (d / "alice.json").write_text(json.dumps(ALICE), encoding="utf-8")
    (d / "bob.json").write_text(json.dumps(BOB), encoding="utf-8")
    (d / "notes.txt").write_text("not a user", encoding="utf-8")
    return d


@pytest.fixture
def public_dir(tmp_path):
    d = tmp_path / "public"
    d.mkdir()
    (d / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
    return d


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def limiter(clock):
    return RateLimitStore(max_requests=100, window_seconds=15 * 60, clock=clock)


@pytest.fixture
def app(data_dir, public_dir, limiter):
    return create_app(data_dir=data_dir, public_dir=public_dir, rate_limiter=limiter, trust_proxy=True)


@pytest.fixture
def client(app):
    return TestClient(app)
