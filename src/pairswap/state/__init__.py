"""
State management for pairswap pools
"""

from .balances import Amount, AssetId, BalanceTable, Holder
from .pools import PoolState, compute_pool_id
from .lp import ClaimTable

__all__ = [
    "Amount",
    "AssetId",
    "BalanceTable",
    "Holder",
    "PoolState",
    "compute_pool_id",
    "ClaimTable",
]
