"""
Collaborators around the pool engine: asset custody and the pool registry
"""

from .custody import Custody, LedgerCustody
from .registry import PoolRegistry

__all__ = [
    "Custody",
    "LedgerCustody",
    "PoolRegistry",
]
