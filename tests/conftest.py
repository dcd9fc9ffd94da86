"""
tests/conftest.py -- Shared test fixtures for the bookmark service.

This module provides:
  - hasher / issuer: cheap PasswordHasher and a TokenIssuer on the test secret
  - FakeClock: settable clock for expiry tests
  - _patch_lifespan(): wires test collaborators into app.state, bypassing real startup
  - api_client: TestClient over the real app with isolated in-memory stores
  - signup_token(): helper that registers an account and returns its token

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs sync route handlers in a thread pool. Plain :memory:
DBs are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares
one in-memory instance across all connections in the same process.

Environment must be set before any api/core import: get_settings() is called
at api.main import time and refuses to start without SECRET_KEY.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone

# CRITICAL: Set env before any api/core import.
TEST_SECRET = "test-secret-key-0123456789abcdef0123456789abcdef"
os.environ.setdefault("SECRET_KEY", TEST_SECRET)
# Minimum sensible Argon2 costs -- production costs would make the suite crawl.
os.environ.setdefault("ARGON2_TIME_COST", "1")
os.environ.setdefault("ARGON2_MEMORY_COST", "1024")
os.environ.setdefault("ARGON2_PARALLELISM", "1")
os.environ.setdefault("SIGNIN_RATE_LIMIT", "1000/minute")
# TestClient sends Host: testserver.
os.environ.setdefault("ALLOWED_HOSTS", '["localhost", "testserver"]')

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.dependencies import IdentityResolver
from auth.passwords import PasswordHasher
from auth.service import AuthService
from auth.store import AccountStore
from auth.tokens import TokenIssuer
from bookmarks.store import BookmarkStore


class FakeClock:
    """Settable UTC clock for TokenIssuer."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# ---------------------------------------------------------------------------
# Unit-level fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def issuer(clock: FakeClock) -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, lifetime_seconds=3600, clock=clock)


@pytest.fixture
def account_store() -> Generator[AccountStore, None, None]:
    store = AccountStore("sqlite:///:memory:")
    yield store
    store.close()


@pytest.fixture
def bookmark_store() -> Generator[BookmarkStore, None, None]:
    store = BookmarkStore("sqlite:///:memory:")
    yield store
    store.close()


# ---------------------------------------------------------------------------
# App fixtures
# ---------------------------------------------------------------------------


def _patch_lifespan(db_url: str, hasher: PasswordHasher):
    """Return an async context manager that replaces the real lifespan.

    Mirrors api.main.lifespan but uses an isolated DB and the cheap hasher.
    """

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.account_store = AccountStore(db_url)
        app.state.bookmark_store = BookmarkStore(db_url)
        app.state.password_hasher = hasher
        app.state.token_issuer = TokenIssuer(TEST_SECRET, 3600)
        app.state.identity_resolver = IdentityResolver(app.state.token_issuer)
        app.state.auth_service = AuthService(
            app.state.account_store,
            app.state.password_hasher,
            app.state.token_issuer,
        )
        yield
        app.state.account_store.close()
        app.state.bookmark_store.close()

    return test_lifespan


@pytest.fixture(scope="module")
def api_client(request, hasher: PasswordHasher) -> Generator[TestClient, None, None]:
    """Yield a TestClient over the real app with a per-module in-memory DB.

    The DB name is derived from the test module so modules never share rows.
    """
    db_name = request.module.__name__.rsplit(".", 1)[-1]
    db_url = f"sqlite:///file:{db_name}?mode=memory&cache=shared&uri=true"
    app.router.lifespan_context = _patch_lifespan(db_url, hasher)

    with TestClient(app, raise_server_exceptions=True) as client:
        yield client


def signup_token(client: TestClient, email: str, password: str = "secret1") -> str:
    """Register an account through the API and return its access token."""
    resp = client.post("/api/v1/auth/signup", json={"email": email, "password": password})
    assert resp.status_code == 201, resp.text
    return resp.json()["access_token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
