"""
Pool registry / factory.

Maps an ordered (quote asset, pool token) pair to its single `Pool`. All
pools created by one registry share its custody, clock and config, and
are addressed in custody by their deterministic pool_id.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Sequence

from ..config import PoolConfig
from ..core.errors import PoolExists, PoolNotFound
from ..core.events import Observer
from ..core.pool import Clock, Pool
from ..state.balances import AssetId
from ..state.pools import compute_pool_id
from .custody import Custody

logger = logging.getLogger(__name__)


class PoolRegistry:
    def __init__(
        self,
        custody: Custody,
        *,
        clock: Optional[Clock] = None,
        config: Optional[PoolConfig] = None,
        observers: Sequence[Observer] = (),
    ) -> None:
        self.custody = custody
        self._clock = clock
        self.config = config if config is not None else PoolConfig()
        self._observers = list(observers)
        self._pools: Dict[str, Pool] = {}
        self._lock = threading.Lock()

    def create_pool(self, asset_a: AssetId, asset_b: AssetId) -> Pool:
        """
        Create an empty pool for (asset_a, asset_b).

        Raises:
            PoolExists: If the pair (in either order) already has a pool
            ValueError: If the assets are empty or identical
        """
        pool_id = compute_pool_id(asset_a, asset_b)
        with self._lock:
            if pool_id in self._pools or compute_pool_id(asset_b, asset_a) in self._pools:
                raise PoolExists(f"pool for ({asset_a}, {asset_b}) already exists")
            pool = Pool(
                asset_a,
                asset_b,
                self.custody,
                address=pool_id,
                clock=self._clock,
                config=self.config,
                observers=self._observers,
            )
            self._pools[pool_id] = pool
        logger.info("created pool %s for (%s, %s)", pool_id, asset_a, asset_b)
        return pool

    def get_pool(self, asset_a: AssetId, asset_b: AssetId) -> Pool:
        """
        Pool for the pair, in either order.

        The returned pool keeps its own (quote, pool token) ordering; check
        `pool.asset_a` before sizing a deposit.

        Raises:
            PoolNotFound: If no pool exists for the pair
        """
        pool = self._pools.get(compute_pool_id(asset_a, asset_b))
        if pool is None:
            pool = self._pools.get(compute_pool_id(asset_b, asset_a))
        if pool is None:
            raise PoolNotFound(f"no pool for ({asset_a}, {asset_b})")
        return pool

    def get_pool_by_id(self, pool_id: str) -> Pool:
        pool = self._pools.get(pool_id)
        if pool is None:
            raise PoolNotFound(f"no pool with id {pool_id}")
        return pool

    def pools(self) -> List[Pool]:
        return list(self._pools.values())

    def __len__(self) -> int:
        return len(self._pools)
