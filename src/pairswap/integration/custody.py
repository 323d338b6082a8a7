"""
Asset custody collaborator.

The pool never moves balances itself; it asks a `Custody` to pull assets
from a payer (`transfer_from`, allowance-based) or to pay them out of the
pool's own account (`transfer`). A `False` return means the transfer did
not happen and nothing changed.

`LedgerCustody` is the in-memory implementation over `BalanceTable`. One instance may
be shared by many pools running on different threads, so every balance or
allowance update happens under its lock.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Protocol, Tuple

from ..state.balances import Amount, AssetId, BalanceTable, Holder

logger = logging.getLogger(__name__)


class Custody(Protocol):
    def balance_of(self, asset: AssetId, holder: Holder) -> Amount: ...

    def transfer_from(self, asset: AssetId, payer: Holder, recipient: Holder, amount: Amount) -> bool: ...

    def transfer(self, asset: AssetId, sender: Holder, recipient: Holder, amount: Amount) -> bool: ...


class LedgerCustody:
    """
    Multi-asset ledger with ERC-20 style allowances.

    `transfer_from(asset, payer, recipient, amount)` spends the allowance
    `payer` granted to `recipient` (the pool pulling funds into itself).
    """

    def __init__(self) -> None:
        self.balances = BalanceTable()
        self._allowances: Dict[Tuple[AssetId, Holder, Holder], Amount] = {}
        self.lock = threading.Lock()

    def mint(self, asset: AssetId, holder: Holder, amount: Amount) -> None:
        """Credit `amount` out of thin air (faucet / test setup)."""
        with self.lock:
            self.balances.add(holder, asset, amount)

    def approve(self, asset: AssetId, owner: Holder, spender: Holder, amount: Amount) -> None:
        if amount < 0:
            raise ValueError(f"Allowance cannot be negative: {amount}")
        with self.lock:
            self._set_allowance(asset, owner, spender, amount)

    def allowance(self, asset: AssetId, owner: Holder, spender: Holder) -> Amount:
        return self._allowances.get((asset, owner, spender), 0)

    def balance_of(self, asset: AssetId, holder: Holder) -> Amount:
        return self.balances.get(holder, asset)

    def transfer_from(self, asset: AssetId, payer: Holder, recipient: Holder, amount: Amount) -> bool:
        with self.lock:
            allowed = self.allowance(asset, payer, recipient)
            if amount > allowed:
                logger.debug("transfer_from %s %s->%s refused: allowance %d < %d", asset, payer, recipient, allowed, amount)
                return False
            if self.balances.get(payer, asset) < amount:
                logger.debug("transfer_from %s %s->%s refused: insufficient balance", asset, payer, recipient)
                return False
            self.balances.move(asset, payer, recipient, amount)
            self._set_allowance(asset, payer, recipient, allowed - amount)
            return True

    def transfer(self, asset: AssetId, sender: Holder, recipient: Holder, amount: Amount) -> bool:
        with self.lock:
            if self.balances.get(sender, asset) < amount:
                logger.debug("transfer %s %s->%s refused: insufficient balance", asset, sender, recipient)
                return False
            self.balances.move(asset, sender, recipient, amount)
            return True

    def _set_allowance(self, asset: AssetId, owner: Holder, spender: Holder, amount: Amount) -> None:
        if amount == 0:
            self._allowances.pop((asset, owner, spender), None)
        else:
            self._allowances[(asset, owner, spender)] = amount

    def __repr__(self) -> str:
        return f"LedgerCustody({self.balances!r}, {len(self._allowances)} allowances)"
