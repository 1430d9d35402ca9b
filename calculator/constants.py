"""
Default constants for the withdrawal calculator.

Tier terms are built from the single source of truth:
app.config.investment_tiers
"""

from decimal import Decimal

from app.config.investment_tiers import INVESTMENT_TIERS, TIER_ORDER
from calculator.core.models import TierTerms


DEFAULT_TIERS: list[TierTerms] = [
    TierTerms(
        name=config.name.value,
        min_investment=config.min_investment,
        max_investment=config.max_investment,
        lockup_period_months=config.lockup_period_months,
        withdrawal_frequency_days=config.withdrawal_frequency_days,
        early_withdrawal_penalty=config.early_withdrawal_penalty,
        benefits=list(config.benefits),
        description=config.description,
    )
    for config in (INVESTMENT_TIERS[name] for name in TIER_ORDER)
]


def get_tier_by_name(name: str) -> TierTerms | None:
    """
    Get default tier by name (case-insensitive).

    Args:
        name: Tier name, e.g. "Builder"

    Returns:
        TierTerms or None if not found

    Example:
        >>> get_tier_by_name("builder").withdrawal_frequency_days
        90
    """
    for tier in DEFAULT_TIERS:
        if tier.name.lower() == name.lower():
            return tier
    return None


def get_tier_for_amount(amount: Decimal) -> TierTerms | None:
    """
    Get highest tier whose minimum the cumulative amount reaches.

    Args:
        amount: Cumulative investment amount

    Returns:
        Highest matching tier, or None if below the lowest minimum

    Example:
        >>> get_tier_for_amount(Decimal("50000")).name
        'Builder'
    """
    matching = [tier for tier in DEFAULT_TIERS if amount >= tier.min_investment]
    if not matching:
        return None
    return max(matching, key=lambda tier: tier.min_investment)


def get_active_tiers() -> list[TierTerms]:
    """
    Get all tiers, lowest first.

    Returns:
        List of TierTerms
    """
    return list(DEFAULT_TIERS)
