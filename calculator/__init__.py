"""
40 Acres Withdrawal Calculator.

Standalone package for withdrawal eligibility and fee calculations.

Example:
    >>> from calculator import WithdrawalCalculator, AccountSnapshot, get_tier_by_name
    >>> from decimal import Decimal
    >>>
    >>> calc = WithdrawalCalculator()
    >>> tier = get_tier_by_name("Builder")  # 90-day window, 5% penalty
    >>>
    >>> fees = calc.calculate_fees(
    ...     Decimal("3000"),
    ...     AccountSnapshot(available_balance=Decimal("12500")),
    ...     tier,
    ...     "partial",
    ... )
    >>> print(f"Net amount: {fees.net_amount}")
    Net amount: 2985.000
"""

from calculator.constants import (
    DEFAULT_TIERS,
    get_active_tiers,
    get_tier_by_name,
    get_tier_for_amount,
)
from calculator.core.calculator import (
    DEFAULT_MIN_PROCESSING_FEE,
    DEFAULT_PROCESSING_FEE_PERCENT,
    WithdrawalCalculator,
    add_months,
)
from calculator.core.clock import Clock, FixedClock, SystemClock
from calculator.core.models import (
    AccountSnapshot,
    FeeBreakdown,
    TierTerms,
    WithdrawalType,
)
from calculator.utils import (
    format_currency,
    format_days,
    format_fee_breakdown,
    format_percentage,
)


__version__ = "1.0.0"
__all__ = [
    # Core
    "WithdrawalCalculator",
    "add_months",
    "DEFAULT_PROCESSING_FEE_PERCENT",
    "DEFAULT_MIN_PROCESSING_FEE",
    # Time
    "Clock",
    "FixedClock",
    "SystemClock",
    # Models
    "AccountSnapshot",
    "FeeBreakdown",
    "TierTerms",
    "WithdrawalType",
    # Constants
    "DEFAULT_TIERS",
    "get_tier_by_name",
    "get_tier_for_amount",
    "get_active_tiers",
    # Formatters
    "format_currency",
    "format_percentage",
    "format_days",
    "format_fee_breakdown",
]
