"""
Constant Product Market Maker (CPMM) pricing and claim-token math.

All functions are pure integer arithmetic over the reserves they are given
(not necessarily the live pool). Rounding is always in the pool's favor.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Fee: 0.3%, deducted from the input before the invariant is applied
- Invariant: after each swap, x' * y' >= x * y (fee revenue stays in the pool)
"""

from __future__ import annotations

from fractions import Fraction
from typing import Tuple

from ..state.balances import Amount
from .errors import InsufficientReserve, InsufficientSupply, ZeroAmount

# 0.3% fee: the forward formula multiplies the input by 997/1000 and the
# inverse formula divides by the same ratio.
FEE_ADJUSTED_INPUT_RATE = 997
FEE_SCALE = 1000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def output_given_input(input_amount: Amount, input_reserve: Amount, output_reserve: Amount) -> Amount:
    """
    Output received for an exact input amount.

        out = floor(in * 997 * R_out / (R_in * 1000 + in * 997))

    Raises:
        ZeroAmount: If either reserve is zero
    """
    _require_int("input_amount", input_amount)
    _require_int("input_reserve", input_reserve)
    _require_int("output_reserve", output_reserve)
    if output_reserve == 0:
        raise ZeroAmount("output reserve is empty")
    # With R_in == 0 any input would release the entire output reserve.
    if input_reserve == 0:
        raise ZeroAmount("input reserve is empty")

    input_with_fee = input_amount * FEE_ADJUSTED_INPUT_RATE
    numerator = input_with_fee * output_reserve
    denominator = input_reserve * FEE_SCALE + input_with_fee
    return numerator // denominator


def input_given_output(output_amount: Amount, input_reserve: Amount, output_reserve: Amount) -> Amount:
    """
    Input required for an exact output amount.

        in = ceil(R_in * out * 1000 / ((R_out - out) * 997))

    Rounds up: the result is the smallest integer input whose forward quote
    covers `output_amount`, so the product never decreases on an exact-out
    trade. Plain truncation would undercharge by up to one unit, which on
    small trades is larger than the fee itself.

    Raises:
        ZeroAmount: If output_amount or either reserve is zero
        InsufficientReserve: If output_amount >= output_reserve
    """
    _require_int("output_amount", output_amount)
    _require_int("input_reserve", input_reserve)
    _require_int("output_reserve", output_reserve)
    if output_amount == 0:
        raise ZeroAmount("output_amount must be positive")
    if output_reserve == 0:
        raise ZeroAmount("output reserve is empty")
    if input_reserve == 0:
        raise ZeroAmount("input reserve is empty")
    if output_amount >= output_reserve:
        raise InsufficientReserve(
            f"output_amount ({output_amount}) >= output_reserve ({output_reserve})"
        )

    numerator = input_reserve * output_amount * FEE_SCALE
    denominator = (output_reserve - output_amount) * FEE_ADJUSTED_INPUT_RATE
    return _ceil_div(numerator, denominator)


def spot_price(input_reserve: Amount, output_reserve: Amount) -> Fraction:
    """Marginal price of the input asset in output units, ignoring fees. Display only."""
    _require_int("input_reserve", input_reserve)
    _require_int("output_reserve", output_reserve)
    if input_reserve == 0:
        raise ZeroAmount("input reserve is empty")
    return Fraction(output_reserve, input_reserve)


def compute_claim_mint(
    amount_a: Amount,
    reserve_a: Amount,
    claim_supply: Amount,
) -> Amount:
    """
    Claim tokens minted for a deposit of `amount_a` quote units.

    For the first deposit (claim_supply == 0):
        minted = amount_a

    For subsequent deposits:
        minted = floor(amount_a * claim_supply / reserve_a)
    """
    _require_int("amount_a", amount_a)
    _require_int("reserve_a", reserve_a)
    _require_int("claim_supply", claim_supply)
    if amount_a == 0:
        raise ZeroAmount("amount_a must be positive")

    if claim_supply == 0:
        return amount_a

    if reserve_a == 0:
        raise ZeroAmount("quote reserve is empty but claim supply is not")
    return (amount_a * claim_supply) // reserve_a


def compute_required_b(amount_a: Amount, reserve_a: Amount, reserve_b: Amount) -> Amount:
    """
    Pool-token amount matching `amount_a` at the current reserve ratio.

        amount_b = ceil(amount_a * reserve_b / reserve_a)

    Rounded up so that the pool-token reserve per claim token never drops on
    a deposit (the mint is rounded down, so the pair cannot dilute holders).
    """
    _require_int("amount_a", amount_a)
    _require_int("reserve_a", reserve_a)
    _require_int("reserve_b", reserve_b)
    if reserve_a == 0:
        raise ZeroAmount("quote reserve is empty")
    return _ceil_div(amount_a * reserve_b, reserve_a)


def compute_claim_burn(
    claim_amount: Amount,
    reserve_a: Amount,
    reserve_b: Amount,
    claim_supply: Amount,
) -> Tuple[Amount, Amount]:
    """
    Asset amounts redeemed for burning `claim_amount` claim tokens.

        amount_a = floor(claim_amount * reserve_a / claim_supply)
        amount_b = floor(claim_amount * reserve_b / claim_supply)

    Must be evaluated against the supply *before* the burn.
    """
    _require_int("claim_amount", claim_amount)
    _require_int("reserve_a", reserve_a)
    _require_int("reserve_b", reserve_b)
    _require_int("claim_supply", claim_supply)
    if claim_amount == 0:
        raise ZeroAmount("claim_amount must be positive")
    if claim_amount > claim_supply:
        raise InsufficientSupply(
            f"Cannot burn more claim tokens than supply: {claim_amount} > {claim_supply}"
        )

    amount_a = (claim_amount * reserve_a) // claim_supply
    amount_b = (claim_amount * reserve_b) // claim_supply
    return amount_a, amount_b
