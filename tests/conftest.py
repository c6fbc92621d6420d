"""
- Provide a fresh in-memory SessionStore per test and override FastAPI's get_store.
- Provide a scripted randomness source so secrets are predictable.
- Provide a client fixture (TestClient(app)) that already has the overrides applied.
"""
import os
import pytest
from typing import List

from fastapi.testclient import TestClient

# Keep tests off the network even if a local .env asks for random.org
os.environ["CODEBREAKER_RANDOM_SOURCE"] = "system"
os.environ["CODEBREAKER_POOL"] = "ROYGBIV"
os.environ["CODEBREAKER_LENGTH"] = "4"

from codebreaker.main import app, get_random_source, get_store
from codebreaker.store import SessionStore


class ScriptedSource:
    """Hands out pre-chosen draws in order (cycling), so a secret is fully determined."""

    def __init__(self, draws: List[int]):
        self.draws = list(draws)
        self.calls = 0

    def randbelow(self, n: int) -> int:
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        assert 0 <= value < n, f"scripted draw {value} not in [0, {n})"
        return value


@pytest.fixture
def scripted():
    """Factory: scripted([0, 1, 2, 3]) -> ScriptedSource"""
    return ScriptedSource


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def rng() -> ScriptedSource:
    # With the default pool "ROYGBIV" these draws make the secret "ROYG"
    return ScriptedSource([0, 1, 2, 3])


@pytest.fixture(autouse=True)
def override_dep(store, rng):
    """Force the app to use our test store and randomness for every request."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_random_source] = lambda: rng
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # This client talks to the FastAPI app in-process.
    return TestClient(app)
