"""
Withdrawal helper functions module.

Builds the pure calculator and its input snapshots from settings and
ORM rows, so every service runs the same fee formula.
"""

from decimal import Decimal, InvalidOperation

from calculator import AccountSnapshot, Clock, TierTerms, WithdrawalCalculator

from app.config.settings import settings
from app.models.investment_tier import InvestmentTier
from app.models.user_investment_account import UserInvestmentAccount


# Amounts are accepted in whole cents
CENT = Decimal("0.01")


def create_calculator(clock: Clock | None = None) -> WithdrawalCalculator:
    """
    Create a calculator configured from settings.

    Args:
        clock: Time source (defaults to the UTC wall clock)

    Returns:
        WithdrawalCalculator with configured fee rate and minimum
    """
    return WithdrawalCalculator(
        clock=clock,
        processing_fee_percent=settings.withdrawal_processing_fee_percent,
        min_processing_fee=settings.withdrawal_min_processing_fee,
    )


def account_snapshot(account: UserInvestmentAccount) -> AccountSnapshot:
    """Freeze an account row into the calculator's input model."""
    return AccountSnapshot.model_validate(account)


def tier_terms(tier: InvestmentTier) -> TierTerms:
    """Freeze a tier row into the calculator's input model."""
    return TierTerms.model_validate(tier)


def parse_amount(value: Decimal | int | str) -> Decimal | None:
    """
    Convert user input to a Decimal amount.

    Floats, non-numeric strings, NaN, infinity and amounts with more
    than two decimal places are refused. With cents-precision amounts
    every fee fits the stored precision exactly.

    Returns:
        Decimal amount or None if the input is not a valid number
    """
    if isinstance(value, float):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
        if not amount.is_finite() or amount != amount.quantize(CENT):
            return None
    except InvalidOperation:
        return None
    return amount
