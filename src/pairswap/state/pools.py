"""
Reserve ledger for a two-asset pool.

`PoolState` is an immutable snapshot: every operation computes a new
snapshot and the pool swaps it in at commit time.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

import hashlib

from .balances import AssetId, Amount


def compute_pool_id(asset_a: AssetId, asset_b: AssetId) -> str:
    """
    Deterministically compute a pool_id for an (asset_a, asset_b) pair.

        pool_id = H("PairSwapPool" || asset_a || 0x00 || asset_b)

    The order is significant: `asset_a` is the quote asset of the pool.
    """
    if not isinstance(asset_a, str) or not asset_a:
        raise ValueError("asset_a must be a non-empty string")
    if not isinstance(asset_b, str) or not asset_b:
        raise ValueError("asset_b must be a non-empty string")
    if asset_a == asset_b:
        raise ValueError(f"Pool assets must differ: {asset_a!r}")

    pool_id_data = (
        b"PairSwapPool"
        + asset_a.encode("utf-8")
        + b"\x00"
        + asset_b.encode("utf-8")
    )
    return "0x" + hashlib.sha256(pool_id_data).hexdigest()


@dataclass(frozen=True)
class PoolState:
    """
    State of a constant-product pool.

    Attributes:
        asset_a: Quote asset; deposits are sized in it and the first deposit
            mints claim tokens 1:1 with it
        asset_b: Pool token
        reserve_a: Reserve amount of asset_a
        reserve_b: Reserve amount of asset_b
        claim_supply: Total outstanding claim tokens
    """
    asset_a: AssetId
    asset_b: AssetId
    reserve_a: Amount = 0
    reserve_b: Amount = 0
    claim_supply: Amount = 0

    def __post_init__(self):
        if self.asset_a == self.asset_b:
            raise ValueError(f"Pool assets must differ: {self.asset_a!r}")
        for name in ("reserve_a", "reserve_b", "claim_supply"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(f"{name} must be an int")
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")

    @property
    def is_empty(self) -> bool:
        return self.claim_supply == 0

    def has_asset(self, asset: AssetId) -> bool:
        return asset == self.asset_a or asset == self.asset_b

    def get_reserve(self, asset: AssetId) -> Amount:
        """
        Get reserve for a specific asset.

        Raises:
            ValueError: If asset is not in this pool
        """
        if asset == self.asset_a:
            return self.reserve_a
        elif asset == self.asset_b:
            return self.reserve_b
        else:
            raise ValueError(f"Asset {asset} not in pool ({self.asset_a}, {self.asset_b})")

    def reserves_for(self, input_asset: AssetId, output_asset: AssetId) -> Tuple[Amount, Amount]:
        """Return (input_reserve, output_reserve) for a swap direction."""
        return self.get_reserve(input_asset), self.get_reserve(output_asset)

    def with_swap(self, input_asset: AssetId, amount_in: Amount, amount_out: Amount) -> "PoolState":
        """Snapshot after `amount_in` of `input_asset` enters and `amount_out` of the other leaves."""
        if input_asset == self.asset_a:
            return replace(
                self,
                reserve_a=self.reserve_a + amount_in,
                reserve_b=self.reserve_b - amount_out,
            )
        if input_asset == self.asset_b:
            return replace(
                self,
                reserve_a=self.reserve_a - amount_out,
                reserve_b=self.reserve_b + amount_in,
            )
        raise ValueError(f"Asset {input_asset} not in pool ({self.asset_a}, {self.asset_b})")

    def get_constant_product(self) -> int:
        """Compute k = reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    def verify_invariant(self, min_k: int = 0) -> bool:
        """Verify reserve_a * reserve_b >= min_k."""
        return self.get_constant_product() >= min_k

    def __repr__(self) -> str:
        return (
            f"PoolState(assets=({self.asset_a}, {self.asset_b}), "
            f"reserves=({self.reserve_a}, {self.reserve_b}), "
            f"claim_supply={self.claim_supply})"
        )
