from __future__ import annotations

import pytest

from pairswap.core.events import EventLog
from pairswap.core.pool import Pool
from pairswap.integration.custody import LedgerCustody

NOW = 1_700_000_000
POOL = "pool"
QUOTE = "QUOTE"
TOKEN = "TOKEN"


class FakeClock:
    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


def fund(custody: LedgerCustody, holder: str, amount: int = 1_000_000, spender: str = POOL) -> None:
    """Mint both assets to `holder` and approve `spender` for all of it."""
    for asset in (QUOTE, TOKEN):
        custody.mint(asset, holder, amount)
        custody.approve(asset, holder, spender, amount)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def custody() -> LedgerCustody:
    c = LedgerCustody()
    for who in ("alice", "bob"):
        fund(c, who)
    return c


@pytest.fixture
def events() -> EventLog:
    return EventLog()


@pytest.fixture
def pool(custody, clock, events) -> Pool:
    return Pool(QUOTE, TOKEN, custody, address=POOL, clock=clock, observers=[events])


@pytest.fixture
def seeded_pool(pool) -> Pool:
    """Pool with reserves (100 QUOTE, 100 TOKEN) and 100 claim tokens held by alice."""
    pool.deposit("alice", 100, 0, 100, NOW)
    return pool
