"""
Pool: the imperative shell around the pure planners.

Every mutating entry point follows the same transition:

1. guards (deadline, amount ranges, zero amounts) via `@guarded`;
2. under the pool lock: plan against the current snapshot, check the
   post-state invariants, commit the new snapshot;
3. settle with the custody collaborator (pulls first, then payouts);
   any failure restores the previous snapshot and refunds what was pulled;
4. emit the event after settlement, still under the lock, so observers
   receive events in commit order.

The ledger is committed before custody is called, so a custody callback
never sees stale reserves. Re-entering a mutating entry point of the same
pool from inside such a callback raises `ReentrantCall`.
"""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from fractions import Fraction
from typing import TYPE_CHECKING, Callable, Iterator, List, Optional, Sequence, Tuple

from ..config import PoolConfig
from ..state.balances import Amount, AssetId, Holder
from ..state.lp import ClaimTable
from ..state.pools import PoolState, compute_pool_id
from .cpmm import input_given_output, output_given_input, spot_price
from .errors import InsufficientSupply, InvariantViolation, ReentrantCall, TransferFailed, UnknownAsset
from .events import LiquidityAdded, LiquidityRemoved, Observer, PoolEvent, Swapped, emit
from .guards import guarded, require_asset_pair
from .invariants import check_liquidity, check_swap
from .liquidity import plan_deposit, plan_withdraw
from .swap import SwapPlan, plan_exact_input, plan_exact_output

if TYPE_CHECKING:
    from ..integration.custody import Custody

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

# (asset, counterparty, amount)
_Leg = Tuple[AssetId, Holder, Amount]


def _system_clock() -> int:
    return int(time.time())


class Pool:
    """
    One two-asset constant-product pool.

    `asset_a` is the quote asset: deposits are sized in it and the first
    deposit mints claim tokens 1:1 with it. `asset_b` is the pool token.
    """

    def __init__(
        self,
        asset_a: AssetId,
        asset_b: AssetId,
        custody: "Custody",
        *,
        address: Optional[Holder] = None,
        clock: Optional[Clock] = None,
        config: Optional[PoolConfig] = None,
        observers: Sequence[Observer] = (),
    ) -> None:
        self._state = PoolState(asset_a=asset_a, asset_b=asset_b)
        self.address: Holder = address if address is not None else compute_pool_id(asset_a, asset_b)
        self.custody = custody
        self.config = config if config is not None else PoolConfig()
        self._clock: Clock = clock if clock is not None else _system_clock
        self._observers: List[Observer] = list(observers)
        self._claims = ClaimTable()
        self._lock = threading.RLock()
        self._in_flight = False

    # -- read side ---------------------------------------------------------

    @property
    def state(self) -> PoolState:
        return self._state

    @property
    def asset_a(self) -> AssetId:
        return self._state.asset_a

    @property
    def asset_b(self) -> AssetId:
        return self._state.asset_b

    def now(self) -> int:
        return self._clock()

    def claim_balance_of(self, provider: Holder) -> Amount:
        return self._claims.get(provider)

    def claim_holders(self) -> dict:
        return self._claims.get_all_balances()

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def quote_exact_input(self, input_asset: AssetId, input_amount: Amount) -> Amount:
        """Output `input_amount` of `input_asset` would buy right now."""
        state = self._state
        output_asset = self._other(input_asset)
        input_reserve, output_reserve = state.reserves_for(input_asset, output_asset)
        return output_given_input(input_amount, input_reserve, output_reserve)

    def quote_exact_output(self, output_asset: AssetId, output_amount: Amount) -> Amount:
        """Input required right now to buy `output_amount` of `output_asset`."""
        state = self._state
        input_asset = self._other(output_asset)
        input_reserve, output_reserve = state.reserves_for(input_asset, output_asset)
        return input_given_output(output_amount, input_reserve, output_reserve)

    def price(self, asset: AssetId) -> Fraction:
        """Marginal price of one unit of `asset` in the other asset (no fee)."""
        state = self._state
        return spot_price(*state.reserves_for(asset, self._other(asset)))

    def verify_custody(self) -> bool:
        """True if the custody balances of the pool cover both ledger reserves."""
        state = self._state
        return (
            self.custody.balance_of(state.asset_a, self.address) >= state.reserve_a
            and self.custody.balance_of(state.asset_b, self.address) >= state.reserve_b
        )

    # -- liquidity ---------------------------------------------------------

    @guarded(
        amounts=("amount_a_desired", "min_claim_tokens_out", "max_amount_b_allowed"),
        nonzero=("amount_a_desired",),
    )
    def deposit(
        self,
        provider: Holder,
        amount_a_desired: Amount,
        min_claim_tokens_out: Amount,
        max_amount_b_allowed: Amount,
        deadline: int,
    ) -> Amount:
        """Add liquidity; returns the claim tokens minted to `provider`."""
        with self._operation() as pending:
            before = self._state
            plan = plan_deposit(before, amount_a_desired, min_claim_tokens_out, max_amount_b_allowed)
            self._commit(plan.state, check_liquidity(before, plan.state))
            self._claims.add(provider, plan.claim_tokens_minted)
            try:
                self._settle(
                    pulls=[
                        (before.asset_a, provider, plan.amount_a),
                        (before.asset_b, provider, plan.amount_b),
                    ],
                    pushes=[],
                )
            except Exception:
                self._claims.subtract(provider, plan.claim_tokens_minted)
                self._restore(before, "deposit")
                raise

            logger.debug(
                "deposit provider=%s a=%d b=%d minted=%d -> %r",
                provider, plan.amount_a, plan.amount_b, plan.claim_tokens_minted, plan.state,
            )
            pending.append(LiquidityAdded(
                provider=provider,
                amount_a=plan.amount_a,
                amount_b=plan.amount_b,
                claim_tokens_minted=plan.claim_tokens_minted,
            ))
        return plan.claim_tokens_minted

    @guarded(
        amounts=("claim_tokens_to_burn", "min_amount_a_out", "min_amount_b_out"),
        nonzero=("claim_tokens_to_burn",),
    )
    def withdraw(
        self,
        provider: Holder,
        claim_tokens_to_burn: Amount,
        min_amount_a_out: Amount,
        min_amount_b_out: Amount,
        deadline: int,
    ) -> Tuple[Amount, Amount]:
        """Burn claim tokens; returns (amount_a_out, amount_b_out) paid to `provider`."""
        with self._operation() as pending:
            before = self._state
            held = self._claims.get(provider)
            if claim_tokens_to_burn > held:
                raise InsufficientSupply(
                    f"provider {provider} holds {held} claim tokens, cannot burn {claim_tokens_to_burn}"
                )
            plan = plan_withdraw(before, claim_tokens_to_burn, min_amount_a_out, min_amount_b_out)
            pushes = [
                (before.asset_a, provider, plan.amount_a),
                (before.asset_b, provider, plan.amount_b),
            ]
            self._require_payable(pushes)
            self._commit(plan.state, check_liquidity(before, plan.state))
            self._claims.subtract(provider, plan.claim_tokens_burned)
            try:
                self._settle(pulls=[], pushes=pushes)
            except Exception:
                self._claims.add(provider, plan.claim_tokens_burned)
                self._restore(before, "withdraw")
                raise

            logger.debug(
                "withdraw provider=%s burned=%d a=%d b=%d -> %r",
                provider, plan.claim_tokens_burned, plan.amount_a, plan.amount_b, plan.state,
            )
            pending.append(LiquidityRemoved(
                provider=provider,
                amount_a=plan.amount_a,
                amount_b=plan.amount_b,
                claim_tokens_burned=plan.claim_tokens_burned,
            ))
        return plan.amount_a, plan.amount_b

    # -- swaps -------------------------------------------------------------

    @guarded(amounts=("input_amount", "min_output_amount"), nonzero=("input_amount",))
    def swap_exact_input(
        self,
        trader: Holder,
        input_asset: AssetId,
        input_amount: Amount,
        output_asset: AssetId,
        min_output_amount: Amount,
        deadline: int,
        *,
        recipient: Optional[Holder] = None,
    ) -> Amount:
        """Sell exactly `input_amount`; returns the output amount paid out."""
        require_asset_pair(self._state, input_asset, output_asset)
        with self._operation() as pending:
            before = self._state
            plan = plan_exact_input(before, input_asset, input_amount, output_asset, min_output_amount)
            pending.append(self._execute_swap(before, plan, trader, recipient))
        return plan.amount_out

    @guarded(
        amounts=("output_amount", "max_input_amount"),
        nonzero=("output_amount", "max_input_amount"),
    )
    def swap_exact_output(
        self,
        trader: Holder,
        input_asset: AssetId,
        output_asset: AssetId,
        output_amount: Amount,
        max_input_amount: Amount,
        deadline: int,
        *,
        recipient: Optional[Holder] = None,
    ) -> Amount:
        """Buy exactly `output_amount`; returns the input amount charged."""
        require_asset_pair(self._state, input_asset, output_asset)
        with self._operation() as pending:
            before = self._state
            plan = plan_exact_output(before, input_asset, output_asset, output_amount, max_input_amount)
            pending.append(self._execute_swap(before, plan, trader, recipient))
        return plan.amount_in

    def sell_exact_pool_share(
        self,
        trader: Holder,
        amount_b: Amount,
        min_quote_out: Amount,
        deadline: int,
        *,
        recipient: Optional[Holder] = None,
    ) -> Amount:
        """
        Sell exactly `amount_b` pool tokens for at least `min_quote_out` of the quote asset.

        `amount_b` is what the trader gives up, so this is an exact-input swap.
        """
        return self.swap_exact_input(
            trader,
            self.asset_b,
            amount_b,
            self.asset_a,
            min_quote_out,
            deadline,
            recipient=recipient,
        )

    # -- internals ---------------------------------------------------------

    def _execute_swap(self, before: PoolState, plan: SwapPlan, trader: Holder, recipient: Optional[Holder]) -> Swapped:
        pushes = [(plan.output_asset, recipient if recipient is not None else trader, plan.amount_out)]
        self._require_payable(pushes)
        self._commit(plan.state, check_swap(before, plan.state))
        try:
            self._settle(pulls=[(plan.input_asset, trader, plan.amount_in)], pushes=pushes)
        except Exception:
            self._restore(before, "swap")
            raise

        logger.debug(
            "swap trader=%s %d %s -> %d %s -> %r",
            trader, plan.amount_in, plan.input_asset, plan.amount_out, plan.output_asset, plan.state,
        )
        return Swapped(
            trader=trader,
            asset_in=plan.input_asset,
            asset_out=plan.output_asset,
            amount_in=plan.amount_in,
            amount_out=plan.amount_out,
            reserve_a=plan.state.reserve_a,
            reserve_b=plan.state.reserve_b,
        )

    def _other(self, asset: AssetId) -> AssetId:
        state = self._state
        if asset == state.asset_a:
            return state.asset_b
        if asset == state.asset_b:
            return state.asset_a
        raise UnknownAsset(f"asset {asset!r} not in pool ({state.asset_a!r}, {state.asset_b!r})")

    @contextmanager
    def _operation(self) -> Iterator[List[PoolEvent]]:
        """
        Hold the pool lock for one mutating operation.

        Events appended to the yielded list are delivered after the operation
        succeeds, still under the lock, so observers see them in commit order.
        """
        with self._lock:
            if self._in_flight:
                raise ReentrantCall(f"pool {self.address} is already executing an operation")
            self._in_flight = True
            pending: List[PoolEvent] = []
            try:
                yield pending
            finally:
                self._in_flight = False
            for event in pending:
                self._emit(event)

    def _commit(self, after: PoolState, violations: List[str]) -> None:
        if self.config.check_invariants and violations:
            raise InvariantViolation(violations)
        self._state = after

    def _restore(self, before: PoolState, what: str) -> None:
        logger.warning("%s on pool %s rolled back", what, self.address)
        self._state = before

    def _require_payable(self, pushes: List[_Leg]) -> None:
        """Check at operation start that custody holds every outgoing amount."""
        for asset, recipient, amount in pushes:
            available = self.custody.balance_of(asset, self.address)
            if amount > available:
                raise TransferFailed(
                    f"pool {self.address} holds {available} {asset}, cannot pay {amount} to {recipient}"
                )

    def _settle(self, *, pulls: List[_Leg], pushes: List[_Leg]) -> None:
        """Run custody transfers; on failure refund every completed pull and re-raise."""
        pulled: List[_Leg] = []
        try:
            for asset, payer, amount in pulls:
                if amount == 0:
                    continue
                if not self.custody.transfer_from(asset, payer, self.address, amount):
                    raise TransferFailed(f"pulling {amount} {asset} from {payer} failed")
                pulled.append((asset, payer, amount))
            for asset, recipient, amount in pushes:
                if amount == 0:
                    continue
                if not self.custody.transfer(asset, self.address, recipient, amount):
                    raise TransferFailed(f"paying {amount} {asset} to {recipient} failed")
        except Exception:
            for asset, payer, amount in reversed(pulled):
                if not self.custody.transfer(asset, self.address, payer, amount):
                    logger.error("refund of %d %s to %s failed on pool %s", amount, asset, payer, self.address)
            raise

    def _emit(self, event: PoolEvent) -> None:
        emit(self._observers, event)

    def __repr__(self) -> str:
        return f"Pool(address={self.address[:18]}, {self._state!r})"
