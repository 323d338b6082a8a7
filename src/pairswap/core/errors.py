"""Exception types for the pool engine.

Every error is raised before any ledger mutation (or after a full rollback),
so callers can decide to retry, relax a bound, or give up.
"""

from __future__ import annotations


class PoolError(ValueError):
    """Base class for all pool failures."""


class DeadlineExpired(PoolError):
    """The caller's deadline is strictly before the current time."""

    def __init__(self, deadline: int, now: int) -> None:
        self.deadline = deadline
        self.now = now
        super().__init__(f"deadline {deadline} expired at {now}")


class ZeroAmount(PoolError):
    """A user-controlled amount (or a reserve it prices against) is zero."""


class InsufficientReserve(PoolError):
    """Requested output is greater than or equal to the available reserve."""


class InsufficientSupply(PoolError):
    """Burn exceeds the outstanding (or held) claim tokens."""


class SlippageExceeded(PoolError):
    """Computed amount violates a caller-supplied bound."""

    def __init__(self, what: str, computed: int, bound: int) -> None:
        self.what = what
        self.computed = computed
        self.bound = bound
        super().__init__(f"{what}: computed {computed} violates bound {bound}")


class UnknownAsset(PoolError):
    """Asset is not one of the pool's two assets (or the pair is degenerate)."""


class AmountOverflow(PoolError):
    """Amount exceeds the configured maximum."""


class ReentrantCall(PoolError):
    """A mutating entry point was re-entered while an operation is in flight."""


class TransferFailed(PoolError):
    """The custody collaborator refused a transfer; the operation was rolled back."""


class InvariantViolation(PoolError):
    """A computed post-state violates one or more pool invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")


class PoolNotFound(PoolError):
    """No pool is registered for the requested asset pair."""


class PoolExists(PoolError):
    """A pool is already registered for the asset pair."""
