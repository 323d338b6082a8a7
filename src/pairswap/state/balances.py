"""
Multi-asset balance tracking used by the in-memory custody ledger.

Implements BalanceTable[Holder, AssetId] -> Amount
"""

from typing import Dict, Tuple


# Type aliases
Holder = str  # Account or pool address
AssetId = str  # Asset identifier (token address, ticker, ...)
Amount = int  # Non-negative integer (arbitrary precision)


class BalanceTable:
    """
    Balance table mapping (holder, asset) -> amount.

    Note: balances live in a plain dict. Callers that need a stable ordering
    (reports, snapshots) must sort the keys themselves.
    """

    def __init__(self):
        """Initialize empty balance table."""
        self._balances: Dict[Tuple[Holder, AssetId], Amount] = {}

    def get(self, holder: Holder, asset: AssetId) -> Amount:
        """Get balance for (holder, asset). Returns 0 if not found."""
        return self._balances.get((holder, asset), 0)

    def set(self, holder: Holder, asset: AssetId, amount: Amount) -> None:
        """
        Set balance for (holder, asset).

        Args:
            holder: Account or pool address
            asset: Asset identifier
            amount: Non-negative amount

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            # Remove zero balances to keep table sparse
            self._balances.pop((holder, asset), None)
        else:
            self._balances[(holder, asset)] = amount

    def add(self, holder: Holder, asset: AssetId, delta: int) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            ValueError: If resulting balance would be negative
        """
        current = self.get(holder, asset)
        new_balance = current + delta
        if new_balance < 0:
            raise ValueError(
                f"Insufficient balance: {current} + {delta} = {new_balance} < 0"
            )
        self.set(holder, asset, new_balance)

    def subtract(self, holder: Holder, asset: AssetId, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(holder, asset, -delta)

    def move(self, asset: AssetId, sender: Holder, recipient: Holder, amount: Amount) -> None:
        """Move `amount` of `asset` between two holders, all-or-nothing."""
        if amount < 0:
            raise ValueError(f"Amount must be non-negative: {amount}")
        self.subtract(sender, asset, amount)
        self.add(recipient, asset, amount)

    def get_balances_for_asset(self, asset: AssetId) -> Dict[Holder, Amount]:
        """
        Get all balances for a specific asset.

        Returns:
            Dictionary mapping holder -> amount
        """
        result = {}
        for (holder, a), amount in self._balances.items():
            if a == asset:
                result[holder] = amount
        return result

    def total_supply(self, asset: AssetId) -> Amount:
        """Sum of all balances of `asset`."""
        return sum(self.get_balances_for_asset(asset).values())

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
