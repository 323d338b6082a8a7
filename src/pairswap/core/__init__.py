"""
Core pool algorithms
"""

from .cpmm import (
    FEE_ADJUSTED_INPUT_RATE,
    FEE_SCALE,
    compute_claim_burn,
    compute_claim_mint,
    compute_required_b,
    input_given_output,
    output_given_input,
    spot_price,
)
from .errors import (
    AmountOverflow,
    DeadlineExpired,
    InsufficientReserve,
    InsufficientSupply,
    InvariantViolation,
    PoolError,
    PoolExists,
    PoolNotFound,
    ReentrantCall,
    SlippageExceeded,
    TransferFailed,
    UnknownAsset,
    ZeroAmount,
)
from .events import EventLog, LiquidityAdded, LiquidityRemoved, Swapped
from .liquidity import DepositPlan, WithdrawPlan, plan_deposit, plan_withdraw
from .pool import Pool
from .swap import SwapPlan, plan_exact_input, plan_exact_output

__all__ = [
    "FEE_ADJUSTED_INPUT_RATE",
    "FEE_SCALE",
    "compute_claim_burn",
    "compute_claim_mint",
    "compute_required_b",
    "input_given_output",
    "output_given_input",
    "spot_price",
    "AmountOverflow",
    "DeadlineExpired",
    "InsufficientReserve",
    "InsufficientSupply",
    "InvariantViolation",
    "PoolError",
    "PoolExists",
    "PoolNotFound",
    "ReentrantCall",
    "SlippageExceeded",
    "TransferFailed",
    "UnknownAsset",
    "ZeroAmount",
    "EventLog",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Swapped",
    "DepositPlan",
    "WithdrawPlan",
    "plan_deposit",
    "plan_withdraw",
    "Pool",
    "SwapPlan",
    "plan_exact_input",
    "plan_exact_output",
]
