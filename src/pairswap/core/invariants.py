"""Invariant checkers for pool transitions.

Each `inv_*` function returns True when the invariant holds. `check_swap()`
and `check_liquidity()` return the list of violated invariant ids (empty =
all pass); the pool refuses to commit a post-state with violations.
"""

from __future__ import annotations

from typing import Callable

from ..state.pools import PoolState


def inv_supply_backed(s: PoolState) -> bool:
    """Outstanding claims always have both reserves behind them."""
    if s.claim_supply == 0:
        return True
    return s.reserve_a > 0 and s.reserve_b > 0


def inv_k_non_decreasing(before: PoolState, after: PoolState) -> bool:
    return after.get_constant_product() >= before.get_constant_product()


def inv_supply_unchanged(before: PoolState, after: PoolState) -> bool:
    return after.claim_supply == before.claim_supply


def inv_no_dilution_a(before: PoolState, after: PoolState) -> bool:
    """reserve_a per claim token does not decrease (cross-multiplied)."""
    if before.claim_supply == 0 or after.claim_supply == 0:
        return True
    return after.reserve_a * before.claim_supply >= before.reserve_a * after.claim_supply


def inv_no_dilution_b(before: PoolState, after: PoolState) -> bool:
    """reserve_b per claim token does not decrease (cross-multiplied)."""
    if before.claim_supply == 0 or after.claim_supply == 0:
        return True
    return after.reserve_b * before.claim_supply >= before.reserve_b * after.claim_supply


_STATE_INVARIANTS: dict[str, Callable[[PoolState], bool]] = {
    "supply_backed": inv_supply_backed,
}

_SWAP_INVARIANTS: dict[str, Callable[[PoolState, PoolState], bool]] = {
    "k_non_decreasing": inv_k_non_decreasing,
    "supply_unchanged": inv_supply_unchanged,
}

_LIQUIDITY_INVARIANTS: dict[str, Callable[[PoolState, PoolState], bool]] = {
    "no_dilution_a": inv_no_dilution_a,
    "no_dilution_b": inv_no_dilution_b,
}


def check_state(s: PoolState) -> list[str]:
    return [name for name, fn in _STATE_INVARIANTS.items() if not fn(s)]


def check_swap(before: PoolState, after: PoolState) -> list[str]:
    violations = check_state(after)
    violations.extend(name for name, fn in _SWAP_INVARIANTS.items() if not fn(before, after))
    return violations


def check_liquidity(before: PoolState, after: PoolState) -> list[str]:
    violations = check_state(after)
    violations.extend(name for name, fn in _LIQUIDITY_INVARIANTS.items() if not fn(before, after))
    return violations
