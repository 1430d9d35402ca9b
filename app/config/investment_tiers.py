"""
Single source of truth for investment tier configuration.

Every module that needs tier terms (calculator, seeding script,
account service) imports them from here.
"""

from decimal import Decimal
from enum import StrEnum
from typing import NamedTuple


class TierName(StrEnum):
    """Investment tier names."""

    STARTER = "Starter"
    BUILDER = "Builder"
    PARTNER = "Partner"


class InvestmentTierConfig(NamedTuple):
    """Investment tier configuration."""

    name: TierName
    order: int  # Sort order, lowest tier first
    min_investment: Decimal
    max_investment: Decimal | None  # None = no upper bound
    lockup_period_months: int
    withdrawal_frequency_days: int
    early_withdrawal_penalty: Decimal  # Percent, e.g. 5.00 = 5%
    benefits: tuple[str, ...]
    description: str


INVESTMENT_TIERS: dict[TierName, InvestmentTierConfig] = {
    TierName.STARTER: InvestmentTierConfig(
        name=TierName.STARTER,
        order=1,
        min_investment=Decimal("1000"),
        max_investment=Decimal("25000"),
        lockup_period_months=6,
        withdrawal_frequency_days=30,
        early_withdrawal_penalty=Decimal("10.00"),
        benefits=(
            "Monthly withdrawals",
            "Community access",
            "Quarterly property reports",
        ),
        description="Entry tier with short lock-up and monthly liquidity",
    ),
    TierName.BUILDER: InvestmentTierConfig(
        name=TierName.BUILDER,
        order=2,
        min_investment=Decimal("25000"),
        max_investment=Decimal("100000"),
        lockup_period_months=12,
        withdrawal_frequency_days=90,
        early_withdrawal_penalty=Decimal("5.00"),
        benefits=(
            "Quarterly withdrawals",
            "Priority support",
            "Performance bonuses",
        ),
        description="Mid-tier investment with balanced liquidity and returns",
    ),
    TierName.PARTNER: InvestmentTierConfig(
        name=TierName.PARTNER,
        order=3,
        min_investment=Decimal("100000"),
        max_investment=None,
        lockup_period_months=24,
        withdrawal_frequency_days=180,
        early_withdrawal_penalty=Decimal("3.00"),
        benefits=(
            "Semi-annual withdrawals",
            "Dedicated account manager",
            "Early access to new listings",
            "Governance voting",
        ),
        description="Long-horizon tier with the lowest early withdrawal penalty",
    ),
}


TIER_ORDER = sorted(INVESTMENT_TIERS, key=lambda name: INVESTMENT_TIERS[name].order)
