"""
Core calculator functionality.

Withdrawal eligibility and fee logic, its data models and time sources.
"""

from calculator.core.calculator import WithdrawalCalculator, add_months
from calculator.core.clock import Clock, FixedClock, SystemClock, ensure_utc
from calculator.core.models import (
    AccountSnapshot,
    FeeBreakdown,
    TierTerms,
    WithdrawalType,
)

__all__ = [
    "WithdrawalCalculator",
    "add_months",
    "Clock",
    "FixedClock",
    "SystemClock",
    "ensure_utc",
    "AccountSnapshot",
    "FeeBreakdown",
    "TierTerms",
    "WithdrawalType",
]
