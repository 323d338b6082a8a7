"""
Swap planning against a `PoolState` snapshot.

Same shape as the liquidity planners: compute the amounts with the pricing
engine, enforce the caller's slippage bound, return the post-state.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..state.balances import Amount, AssetId
from ..state.pools import PoolState
from .cpmm import input_given_output, output_given_input
from .errors import SlippageExceeded, ZeroAmount


@dataclass(frozen=True)
class SwapPlan:
    input_asset: AssetId
    output_asset: AssetId
    amount_in: Amount
    amount_out: Amount
    state: PoolState


def plan_exact_input(
    pool_state: PoolState,
    input_asset: AssetId,
    input_amount: Amount,
    output_asset: AssetId,
    min_output_amount: Amount,
) -> SwapPlan:
    """
    Sell exactly `input_amount` of `input_asset`.

    Raises:
        ZeroAmount: empty reserve, or the trade is too small to yield output
        SlippageExceeded: output < min_output_amount
    """
    input_reserve, output_reserve = pool_state.reserves_for(input_asset, output_asset)
    amount_out = output_given_input(input_amount, input_reserve, output_reserve)
    if amount_out == 0:
        raise ZeroAmount(f"input {input_amount} too small to yield any output")
    if amount_out < min_output_amount:
        raise SlippageExceeded("output_amount", amount_out, min_output_amount)

    return SwapPlan(
        input_asset=input_asset,
        output_asset=output_asset,
        amount_in=input_amount,
        amount_out=amount_out,
        state=pool_state.with_swap(input_asset, input_amount, amount_out),
    )


def plan_exact_output(
    pool_state: PoolState,
    input_asset: AssetId,
    output_asset: AssetId,
    output_amount: Amount,
    max_input_amount: Amount,
) -> SwapPlan:
    """
    Buy exactly `output_amount` of `output_asset`, spending at most `max_input_amount`.

    Raises:
        ZeroAmount: output_amount is zero or a reserve is empty
        InsufficientReserve: output_amount >= output reserve
        SlippageExceeded: required input > max_input_amount
    """
    input_reserve, output_reserve = pool_state.reserves_for(input_asset, output_asset)
    amount_in = input_given_output(output_amount, input_reserve, output_reserve)
    if amount_in > max_input_amount:
        raise SlippageExceeded("input_amount", amount_in, max_input_amount)

    return SwapPlan(
        input_asset=input_asset,
        output_asset=output_asset,
        amount_in=amount_in,
        amount_out=output_amount,
        state=pool_state.with_swap(input_asset, amount_in, output_amount),
    )
