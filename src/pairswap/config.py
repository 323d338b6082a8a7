"""
Runtime configuration for pools.

Fee parameters are engine constants (see `pairswap.core.cpmm`) and are
not configurable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# uint256 range of the on-chain ledger this engine mirrors.
DEFAULT_MAX_AMOUNT = 2**256 - 1


def _env_int(name: str, default: int, *, lo: int, hi: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return int(default)
    try:
        v = int(raw.strip(), 0)
    except ValueError:
        return int(default)
    if v < lo:
        return int(lo)
    if v > hi:
        return int(hi)
    return int(v)


def _env_bool(name: str, *, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return bool(default)
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return bool(default)


@dataclass(frozen=True)
class PoolConfig:
    # Re-check the post-state invariants before every commit.
    check_invariants: bool = True

    # Upper bound for every user-supplied amount.
    max_amount: int = DEFAULT_MAX_AMOUNT

    def __post_init__(self) -> None:
        if not isinstance(self.max_amount, int) or isinstance(self.max_amount, bool):
            raise TypeError("max_amount must be an int")
        if self.max_amount <= 0:
            raise ValueError(f"max_amount must be positive: {self.max_amount}")

    @classmethod
    def from_env(cls) -> "PoolConfig":
        """
        Build a config from the environment:

        - PAIRSWAP_CHECK_INVARIANTS: bool, default on
        - PAIRSWAP_MAX_AMOUNT: int (decimal or 0x-hex), clamped to [1, 2**256 - 1]
        """
        return cls(
            check_invariants=_env_bool("PAIRSWAP_CHECK_INVARIANTS", default=True),
            max_amount=_env_int("PAIRSWAP_MAX_AMOUNT", DEFAULT_MAX_AMOUNT, lo=1, hi=DEFAULT_MAX_AMOUNT),
        )
