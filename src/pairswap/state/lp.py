"""
Claim-token holdings for a single pool.

Claim tokens are the fungible LP shares minted on deposit and burned on
withdrawal. The table only tracks who holds them; the pool's total
`claim_supply` lives in `PoolState`.
"""

from __future__ import annotations

from typing import Dict

from .balances import Amount, Holder


class ClaimTable:
    """
    Claim balance table mapping provider -> claim tokens.

    Notes:
    - Balances are always non-negative.
    - Zero balances are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._balances: Dict[Holder, Amount] = {}

    def get(self, provider: Holder) -> Amount:
        """Get claim balance for `provider`. Returns 0 if not found."""
        return self._balances.get(provider, 0)

    def set(self, provider: Holder, amount: Amount) -> None:
        """Set claim balance for `provider`."""
        if amount < 0:
            raise ValueError(f"Claim balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(provider, None)
        else:
            self._balances[provider] = amount

    def add(self, provider: Holder, delta: int) -> None:
        """Add delta to a claim balance (delta may be negative)."""
        current = self.get(provider)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient claim balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(provider, new_balance)

    def subtract(self, provider: Holder, delta: Amount) -> None:
        """Subtract a non-negative amount from a claim balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(provider, -delta)

    def total(self) -> Amount:
        return sum(self._balances.values())

    def get_all_balances(self) -> Dict[Holder, Amount]:
        """Return all claim balances."""
        return dict(self._balances)

    def __repr__(self) -> str:
        return f"ClaimTable({len(self._balances)} holders)"
