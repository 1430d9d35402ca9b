"""
Tests for investment tier configuration.

Tier terms live in app.config.investment_tiers and are exposed to the
calculator as TierTerms.
"""

from decimal import Decimal

import pytest

from app.config.investment_tiers import (
    INVESTMENT_TIERS,
    TIER_ORDER,
    TierName,
)
from calculator import (
    DEFAULT_TIERS,
    get_active_tiers,
    get_tier_by_name,
    get_tier_for_amount,
)


class TestTierConfig:
    """Tests for the tier configuration table."""

    def test_order(self) -> None:
        """Tiers are ordered lowest first."""
        assert TIER_ORDER == [TierName.STARTER, TierName.BUILDER, TierName.PARTNER]

    def test_builder_terms(self) -> None:
        """Builder: 12 month lock-up, quarterly window, 5% penalty."""
        builder = INVESTMENT_TIERS[TierName.BUILDER]

        assert builder.min_investment == Decimal("25000")
        assert builder.max_investment == Decimal("100000")
        assert builder.lockup_period_months == 12
        assert builder.withdrawal_frequency_days == 90
        assert builder.early_withdrawal_penalty == Decimal("5.00")
        assert builder.benefits[0] == "Quarterly withdrawals"

    def test_corridors_are_contiguous(self) -> None:
        """Each tier starts where the previous one ends."""
        configs = [INVESTMENT_TIERS[name] for name in TIER_ORDER]
        for lower, upper in zip(configs, configs[1:]):
            assert lower.max_investment == upper.min_investment

    def test_top_tier_is_open(self) -> None:
        """Partner has no upper bound."""
        assert INVESTMENT_TIERS[TierName.PARTNER].max_investment is None

    def test_higher_tiers_pay_lower_penalty(self) -> None:
        """Penalties fall as commitment grows."""
        penalties = [INVESTMENT_TIERS[name].early_withdrawal_penalty for name in TIER_ORDER]
        assert penalties == sorted(penalties, reverse=True)


class TestDefaultTiers:
    """Tests for calculator tier helpers."""

    def test_default_tiers_match_config(self) -> None:
        """Calculator tiers are built from the config table."""
        assert [tier.name for tier in DEFAULT_TIERS] == ["Starter", "Builder", "Partner"]
        builder = DEFAULT_TIERS[1]
        assert builder.penalty_percent == Decimal("5.00")
        assert builder.benefits == list(INVESTMENT_TIERS[TierName.BUILDER].benefits)

    def test_get_tier_by_name_case_insensitive(self) -> None:
        assert get_tier_by_name("builder").withdrawal_frequency_days == 90
        assert get_tier_by_name("PARTNER").name == "Partner"
        assert get_tier_by_name("gold") is None

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (Decimal("999"), None),
            (Decimal("1000"), "Starter"),
            (Decimal("24999.99"), "Starter"),
            (Decimal("25000"), "Builder"),
            (Decimal("100000"), "Partner"),
            (Decimal("2500000"), "Partner"),
        ],
    )
    def test_get_tier_for_amount(self, amount, expected) -> None:
        """Highest tier whose minimum is reached wins."""
        tier = get_tier_for_amount(amount)
        assert (tier.name if tier else None) == expected

    def test_get_active_tiers_returns_copy(self) -> None:
        tiers = get_active_tiers()
        tiers.pop()
        assert len(get_active_tiers()) == 3
