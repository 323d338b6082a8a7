"""
Liquidity accounting: deposits mint claim tokens, withdrawals burn them.

Both planners are pure: they take the current `PoolState`, enforce the
caller's bounds, and return the amounts together with the post-state. The
pool commits the post-state only after the plan is accepted.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..state.balances import Amount
from ..state.pools import PoolState
from .cpmm import compute_claim_burn, compute_claim_mint, compute_required_b
from .errors import InsufficientSupply, SlippageExceeded, ZeroAmount


@dataclass(frozen=True)
class DepositPlan:
    amount_a: Amount
    amount_b: Amount
    claim_tokens_minted: Amount
    state: PoolState


@dataclass(frozen=True)
class WithdrawPlan:
    amount_a: Amount
    amount_b: Amount
    claim_tokens_burned: Amount
    state: PoolState


def plan_deposit(
    pool_state: PoolState,
    amount_a_desired: Amount,
    min_claim_tokens_out: Amount,
    max_amount_b_allowed: Amount,
) -> DepositPlan:
    """
    Plan a deposit of `amount_a_desired` quote units.

    Empty pool (claim_supply == 0):
        takes exactly (amount_a_desired, max_amount_b_allowed), which sets the
        initial price, and mints amount_a_desired claim tokens.

    Otherwise:
        amount_b = ceil(amount_a_desired * reserve_b / reserve_a)
        minted   = floor(amount_a_desired * claim_supply / reserve_a)

    Raises:
        ZeroAmount: amount_a_desired is zero, the first deposit brings no
            pool token, or the deposit is too small to mint a claim token
        SlippageExceeded: amount_b > max_amount_b_allowed or
            minted < min_claim_tokens_out
    """
    if amount_a_desired == 0:
        raise ZeroAmount("amount_a_desired must be positive")

    if pool_state.is_empty:
        if max_amount_b_allowed == 0:
            raise ZeroAmount("first deposit must include a positive pool-token amount")
        amount_b = max_amount_b_allowed
    else:
        amount_b = compute_required_b(amount_a_desired, pool_state.reserve_a, pool_state.reserve_b)
        if amount_b > max_amount_b_allowed:
            raise SlippageExceeded("amount_b_required", amount_b, max_amount_b_allowed)

    minted = compute_claim_mint(amount_a_desired, pool_state.reserve_a, pool_state.claim_supply)
    if minted == 0:
        raise ZeroAmount("deposit too small to mint any claim tokens")
    if minted < min_claim_tokens_out:
        raise SlippageExceeded("claim_tokens_minted", minted, min_claim_tokens_out)

    new_state = replace(
        pool_state,
        reserve_a=pool_state.reserve_a + amount_a_desired,
        reserve_b=pool_state.reserve_b + amount_b,
        claim_supply=pool_state.claim_supply + minted,
    )
    return DepositPlan(
        amount_a=amount_a_desired,
        amount_b=amount_b,
        claim_tokens_minted=minted,
        state=new_state,
    )


def plan_withdraw(
    pool_state: PoolState,
    claim_tokens_to_burn: Amount,
    min_amount_a_out: Amount,
    min_amount_b_out: Amount,
) -> WithdrawPlan:
    """
    Plan a proportional redemption of `claim_tokens_to_burn`.

        amount_a = floor(burn * reserve_a / claim_supply)
        amount_b = floor(burn * reserve_b / claim_supply)

    Raises:
        ZeroAmount: claim_tokens_to_burn is zero
        InsufficientSupply: burn exceeds claim_supply
        SlippageExceeded: an output is below its minimum
    """
    if claim_tokens_to_burn == 0:
        raise ZeroAmount("claim_tokens_to_burn must be positive")
    if claim_tokens_to_burn > pool_state.claim_supply:
        raise InsufficientSupply(
            f"burn {claim_tokens_to_burn} exceeds claim supply {pool_state.claim_supply}"
        )

    amount_a, amount_b = compute_claim_burn(
        claim_tokens_to_burn,
        pool_state.reserve_a,
        pool_state.reserve_b,
        pool_state.claim_supply,
    )
    if amount_a < min_amount_a_out:
        raise SlippageExceeded("amount_a_out", amount_a, min_amount_a_out)
    if amount_b < min_amount_b_out:
        raise SlippageExceeded("amount_b_out", amount_b, min_amount_b_out)

    new_state = replace(
        pool_state,
        reserve_a=pool_state.reserve_a - amount_a,
        reserve_b=pool_state.reserve_b - amount_b,
        claim_supply=pool_state.claim_supply - claim_tokens_to_burn,
    )
    return WithdrawPlan(
        amount_a=amount_a,
        amount_b=amount_b,
        claim_tokens_burned=claim_tokens_to_burn,
        state=new_state,
    )
