from __future__ import annotations

import pytest

from pairswap.config import PoolConfig
from pairswap.core.errors import AmountOverflow, DeadlineExpired, UnknownAsset, ZeroAmount
from pairswap.core.guards import (
    guarded,
    require_amount,
    require_asset_pair,
    require_deadline,
    require_nonzero,
)
from pairswap.state.pools import PoolState


def test_deadline_equal_to_now_passes() -> None:
    require_deadline(100, 100)
    require_deadline(101, 100)


def test_deadline_before_now_rejected() -> None:
    with pytest.raises(DeadlineExpired) as exc:
        require_deadline(99, 100)
    assert (exc.value.deadline, exc.value.now) == (99, 100)


def test_deadline_must_be_int() -> None:
    with pytest.raises(TypeError):
        require_deadline(99.5, 100)  # type: ignore[arg-type]


def test_require_amount() -> None:
    require_amount("x", 0, 10)
    require_amount("x", 10, 10)
    with pytest.raises(AmountOverflow):
        require_amount("x", 11, 10)
    with pytest.raises(ValueError):
        require_amount("x", -1, 10)
    with pytest.raises(TypeError):
        require_amount("x", "5", 10)  # type: ignore[arg-type]


def test_require_nonzero() -> None:
    require_nonzero("x", 1)
    with pytest.raises(ZeroAmount):
        require_nonzero("x", 0)


def test_require_asset_pair() -> None:
    s = PoolState(asset_a="Q", asset_b="T")
    require_asset_pair(s, "Q", "T")
    require_asset_pair(s, "T", "Q")
    with pytest.raises(UnknownAsset):
        require_asset_pair(s, "Q", "Q")
    with pytest.raises(UnknownAsset):
        require_asset_pair(s, "Q", "X")


class _Entry:
    def __init__(self, now: int = 100, max_amount: int = 1000) -> None:
        self._now = now
        self.config = PoolConfig(max_amount=max_amount)
        self.calls = 0

    def now(self) -> int:
        return self._now

    @guarded(amounts=("amount", "bound"), nonzero=("amount",))
    def op(self, amount: int, bound: int, deadline: int) -> int:
        self.calls += 1
        return amount


class TestGuardedDecorator:
    def test_passes_through(self):
        e = _Entry()
        assert e.op(5, 0, 100) == 5
        assert e.op(amount=6, bound=0, deadline=200) == 6
        assert e.calls == 2

    def test_deadline_checked_before_body(self):
        e = _Entry()
        with pytest.raises(DeadlineExpired):
            e.op(5, 0, 99)
        assert e.calls == 0

    def test_deadline_checked_before_zero(self):
        e = _Entry()
        with pytest.raises(DeadlineExpired):
            e.op(0, 0, 99)

    def test_zero_rejected(self):
        e = _Entry()
        with pytest.raises(ZeroAmount):
            e.op(0, 0, 100)
        assert e.calls == 0

    def test_overflow_rejected(self):
        e = _Entry(max_amount=10)
        with pytest.raises(AmountOverflow):
            e.op(5, 11, 100)
        assert e.calls == 0

    def test_marks_wrapper(self):
        assert getattr(_Entry.op, "__guarded__", False) is True
        assert _Entry.op.__name__ == "op"

    def test_requires_deadline_parameter(self):
        with pytest.raises(TypeError):
            @guarded()
            def no_deadline(self, amount):
                return amount

    def test_unknown_parameter_name(self):
        with pytest.raises(TypeError):
            @guarded(nonzero=("missing",))
            def op(self, amount, deadline):
                return amount
