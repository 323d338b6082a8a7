"""Tests for the pure swap planners."""

from __future__ import annotations

import pytest

from pairswap.core.errors import InsufficientReserve, SlippageExceeded, ZeroAmount
from pairswap.core.invariants import check_swap
from pairswap.core.swap import plan_exact_input, plan_exact_output
from pairswap.state.pools import PoolState

QUOTE = "QUOTE"
TOKEN = "TOKEN"


def _state(reserve_a: int = 100, reserve_b: int = 100, claim_supply: int = 100) -> PoolState:
    return PoolState(
        asset_a=QUOTE,
        asset_b=TOKEN,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        claim_supply=claim_supply,
    )


class TestExactInput:
    def test_sell_pool_token_for_quote(self):
        plan = plan_exact_input(_state(), TOKEN, 10, QUOTE, 0)
        assert plan.amount_in == 10
        assert plan.amount_out == 9
        assert (plan.state.reserve_a, plan.state.reserve_b) == (91, 110)
        assert plan.state.claim_supply == 100

    def test_sell_quote_for_pool_token(self):
        plan = plan_exact_input(_state(), QUOTE, 10, TOKEN, 0)
        assert plan.amount_out == 9
        assert (plan.state.reserve_a, plan.state.reserve_b) == (110, 91)

    def test_product_grows(self):
        before = _state()
        plan = plan_exact_input(before, TOKEN, 10, QUOTE, 0)
        assert plan.state.get_constant_product() > before.get_constant_product()
        assert check_swap(before, plan.state) == []

    def test_min_output_met_exactly(self):
        assert plan_exact_input(_state(), TOKEN, 10, QUOTE, 9).amount_out == 9

    def test_min_output_enforced(self):
        with pytest.raises(SlippageExceeded) as exc:
            plan_exact_input(_state(), TOKEN, 10, QUOTE, 10)
        assert (exc.value.computed, exc.value.bound) == (9, 10)

    def test_dust_input_rejected(self):
        with pytest.raises(ZeroAmount):
            plan_exact_input(_state(), TOKEN, 1, QUOTE, 0)

    def test_empty_pool_rejected(self):
        with pytest.raises(ZeroAmount):
            plan_exact_input(_state(0, 0, 0), TOKEN, 10, QUOTE, 0)


class TestExactOutput:
    def test_buy_one_quote(self):
        plan = plan_exact_output(_state(), TOKEN, QUOTE, 1, 5)
        assert plan.amount_in == 2
        assert plan.amount_out == 1
        assert (plan.state.reserve_a, plan.state.reserve_b) == (99, 102)

    def test_product_does_not_shrink(self):
        before = _state()
        plan = plan_exact_output(before, TOKEN, QUOTE, 1, 5)
        assert check_swap(before, plan.state) == []

    def test_max_input_enforced(self):
        with pytest.raises(SlippageExceeded) as exc:
            plan_exact_output(_state(), TOKEN, QUOTE, 1, 1)
        assert (exc.value.computed, exc.value.bound) == (2, 1)

    def test_cannot_drain_reserve(self):
        with pytest.raises(InsufficientReserve):
            plan_exact_output(_state(), TOKEN, QUOTE, 100, 10**9)

    def test_zero_output(self):
        with pytest.raises(ZeroAmount):
            plan_exact_output(_state(), TOKEN, QUOTE, 0, 10)

    def test_larger_trade(self):
        plan = plan_exact_output(_state(1_000_000, 2_000_000), QUOTE, TOKEN, 10_000, 10**9)
        # ceil(1_000_000 * 10_000 * 1000 / (1_990_000 * 997))
        assert plan.amount_in == 5041
        assert plan.state.reserve_a == 1_005_041
        assert plan.state.reserve_b == 1_990_000
