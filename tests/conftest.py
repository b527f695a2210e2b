"""Shared test fixtures — storage, stores, mock backend, API client, fake timers.

The REST backend is the in-memory FastAPI app from ``tests/mock_backend.py``
driven through ``httpx.ASGITransport``; no network or disk is touched unless
a test asks for ``tmp_path``.
"""

from __future__ import annotations

import asyncio
from datetime import date
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport

from hrm.client.api import ApiClient
from hrm.client.session import AuthSession
from hrm.notifications import NotificationBus
from hrm.records.service import RecordStores
from hrm.storage.memory import MemoryStorage
from tests.mock_backend import ADMIN, EMPLOYEE_USER, create_mock_app

TEST_BASE_URL = "http://test/api"


def fixed_today() -> date:
    """A fixed 'today' for deterministic tests."""
    return date(2026, 2, 20)


# ── Fake timers ─────────────────────────────────────────────────────


class FakeSleep:
    """Stand-in for ``asyncio.sleep`` that records requested delays.

    Delays listed in ``hold`` block until ``release()`` is called.
    """

    def __init__(self, hold: tuple[float, ...] = ()) -> None:
        self.calls: list[float] = []
        self.hold = set(hold)
        self._gate = asyncio.Event()

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        if seconds in self.hold:
            await self._gate.wait()
        else:
            await asyncio.sleep(0)

    def release(self) -> None:
        self._gate.set()


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()


# ── Local persistence ───────────────────────────────────────────────


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture
def stores(storage) -> RecordStores:
    return RecordStores.from_storage(storage)


@pytest.fixture
def session(storage) -> AuthSession:
    return AuthSession(storage)


@pytest.fixture
def bus() -> NotificationBus:
    return NotificationBus()


# ── Mock backend + client ───────────────────────────────────────────


@pytest.fixture
def backend():
    """Fresh in-memory backend app per test."""
    return create_mock_app()


@pytest.fixture
def transport(backend) -> ASGITransport:
    return ASGITransport(app=backend)


@pytest.fixture
async def api(session, transport) -> AsyncGenerator[ApiClient, None]:
    """Unauthenticated API client wired to the mock backend."""
    async with ApiClient(session, base_url=TEST_BASE_URL, transport=transport) as client:
        yield client


@pytest.fixture
async def admin_api(api) -> ApiClient:
    """API client holding a valid admin token."""
    await api.login({"email": ADMIN["email"], "password": ADMIN["password"]})
    return api


@pytest.fixture
async def employee_api(api) -> ApiClient:
    """API client logged in as a non-admin employee."""
    await api.login({"email": EMPLOYEE_USER["email"], "password": EMPLOYEE_USER["password"]})
    return api


def always(answer: bool):
    """Confirm callback returning a fixed answer."""
    return lambda _message: answer
