"""
Shared test fixtures.

Every test gets its own ``RideLedger`` (seeded with ``puller_001`` at zero
points) and a deterministic clock that advances one minute per call, so
timestamps are ordered and easy to assert on.
"""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from aeras.api.app import create_app
from aeras.api.middleware import limiter
from aeras.domain.points import FixedPoints
from aeras.infrastructure.ledger import RideLedger

START = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)


class TickingClock:
    """Returns START, START+1min, START+2min, ... on successive calls."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


# ── Fixtures ──────────────────────────────────────────────────────────


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def ledger(clock) -> RideLedger:
    return RideLedger(
        points=FixedPoints(10),
        seed_pullers=["puller_001"],
        locations={"CUET Campus": (22.4633, 91.9714), "Pahartoli": (22.4725, 91.9845)},
        clock=clock,
    )


@pytest_asyncio.fixture
async def client(ledger) -> AsyncGenerator[AsyncClient, None]:
    """AsyncClient bound to an app that owns the test ledger."""
    limiter.reset()
    app = create_app(ledger)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
