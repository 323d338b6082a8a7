"""Events emitted by a pool after an operation has fully settled.

Field order of each event dataclass is its wire schema: `as_tuple()` and
observers rely on it, so new fields may only be appended.
"""

from __future__ import annotations

import logging
from dataclasses import astuple, dataclass
from typing import Callable, List, Tuple, Union

from ..state.balances import Amount, AssetId, Holder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LiquidityAdded:
    provider: Holder
    amount_a: Amount
    amount_b: Amount
    claim_tokens_minted: Amount

    def as_tuple(self) -> Tuple:
        return astuple(self)


@dataclass(frozen=True)
class LiquidityRemoved:
    provider: Holder
    amount_a: Amount
    amount_b: Amount
    claim_tokens_burned: Amount

    def as_tuple(self) -> Tuple:
        return astuple(self)


@dataclass(frozen=True)
class Swapped:
    trader: Holder
    asset_in: AssetId
    asset_out: AssetId
    amount_in: Amount
    amount_out: Amount
    reserve_a: Amount
    reserve_b: Amount

    def as_tuple(self) -> Tuple:
        return astuple(self)


PoolEvent = Union[LiquidityAdded, LiquidityRemoved, Swapped]
Observer = Callable[[PoolEvent], None]


class EventLog:
    """Observer that records every event it receives, in order."""

    def __init__(self) -> None:
        self.events: List[PoolEvent] = []

    def __call__(self, event: PoolEvent) -> None:
        self.events.append(event)

    def of_type(self, kind: type) -> List[PoolEvent]:
        return [e for e in self.events if isinstance(e, kind)]

    def __len__(self) -> int:
        return len(self.events)


def emit(observers: List[Observer], event: PoolEvent) -> None:
    """
    Deliver `event` to every observer.

    Observers are off-chain consumers: a failing observer is logged and
    skipped, it never undoes the settled operation.
    """
    for observer in observers:
        try:
            observer(event)
        except Exception:
            logger.warning("event observer %r failed on %r", observer, event, exc_info=True)
