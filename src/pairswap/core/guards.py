"""Precondition guards shared by every pool entry point.

The `require_*` functions raise on violation and return None otherwise.
`guarded(...)` wraps an entry point so the checks run before the method
body, i.e. before any pricing or ledger mutation.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, Iterable, TypeVar

from ..state.balances import AssetId
from ..state.pools import PoolState
from .errors import AmountOverflow, DeadlineExpired, UnknownAsset, ZeroAmount

F = TypeVar("F", bound=Callable[..., Any])


def _require_int(name: str, value: object) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")


def require_deadline(deadline: int, now: int) -> None:
    """Reject when the deadline is strictly before `now`."""
    _require_int("deadline", deadline)
    if deadline < now:
        raise DeadlineExpired(deadline, now)


def require_amount(name: str, amount: int, max_amount: int) -> None:
    """Type/range check for a user-supplied amount (zero is allowed here)."""
    _require_int(name, amount)
    if amount < 0:
        raise ValueError(f"{name} must be non-negative: {amount}")
    if amount > max_amount:
        raise AmountOverflow(f"{name} exceeds max amount: {amount} > {max_amount}")


def require_nonzero(name: str, amount: int) -> None:
    if amount == 0:
        raise ZeroAmount(f"{name} must be positive")


def require_asset_pair(state: PoolState, input_asset: AssetId, output_asset: AssetId) -> None:
    """Both assets must belong to the pool and differ."""
    if input_asset == output_asset:
        raise UnknownAsset(f"input and output asset are the same: {input_asset!r}")
    for asset in (input_asset, output_asset):
        if not state.has_asset(asset):
            raise UnknownAsset(
                f"asset {asset!r} not in pool ({state.asset_a!r}, {state.asset_b!r})"
            )


def guarded(*, amounts: Iterable[str] = (), nonzero: Iterable[str] = ()) -> Callable[[F], F]:
    """
    Decorate a pool entry point with the shared precondition checks.

    Order: deadline, then range checks on `amounts`, then zero checks on
    `nonzero`. The wrapped method must take a `deadline` argument, and its
    instance must provide `now() -> int` and `config.max_amount`.
    """
    amount_names = tuple(amounts)
    nonzero_names = tuple(nonzero)

    def decorate(fn: F) -> F:
        sig = inspect.signature(fn)
        if "deadline" not in sig.parameters:
            raise TypeError(f"{fn.__qualname__} has no deadline parameter")
        for name in amount_names + nonzero_names:
            if name not in sig.parameters:
                raise TypeError(f"{fn.__qualname__} has no parameter {name!r}")

        @functools.wraps(fn)
        def wrapper(self, *args, **kwargs):
            bound = sig.bind(self, *args, **kwargs)
            bound.apply_defaults()
            arguments = bound.arguments

            require_deadline(arguments["deadline"], self.now())
            for name in amount_names:
                require_amount(name, arguments[name], self.config.max_amount)
            for name in nonzero_names:
                require_nonzero(name, arguments[name])
            return fn(self, *args, **kwargs)

        wrapper.__guarded__ = True  # type: ignore[attr-defined]
        return wrapper  # type: ignore[return-value]

    return decorate
