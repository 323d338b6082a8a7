"""
pairswap: two-asset constant-product exchange pool.

Public API:
- `Pool` (deposit / withdraw / swap_exact_input / swap_exact_output / sell_exact_pool_share)
- `PoolRegistry`, `LedgerCustody`
- `PoolConfig`
"""

from .config import PoolConfig
from .core import Pool
from .integration import LedgerCustody, PoolRegistry

__all__ = [
    "Pool",
    "PoolConfig",
    "PoolRegistry",
    "LedgerCustody",
]
