"""
Shared fixtures for unit tests.

This module provides common fixtures used across multiple test modules:
- Calculator wired to a fixed clock
- Tier terms and account snapshots
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from calculator import AccountSnapshot, TierTerms, WithdrawalCalculator


@pytest.fixture
def calculator(clock):
    """
    Create WithdrawalCalculator with the fixed test clock.

    Returns:
        WithdrawalCalculator: Calculator with default fee terms
    """
    return WithdrawalCalculator(clock=clock)


@pytest.fixture
def tier() -> TierTerms:
    """Tier terms with a 5% early withdrawal penalty."""
    return TierTerms(
        name="Builder",
        min_investment=Decimal("25000"),
        max_investment=Decimal("100000"),
        lockup_period_months=12,
        withdrawal_frequency_days=90,
        early_withdrawal_penalty=Decimal("5.0"),
    )


@pytest.fixture
def eligible_account() -> AccountSnapshot:
    """Account with no eligibility date set."""
    return AccountSnapshot(
        id=1,
        total_invested=Decimal("50000"),
        available_balance=Decimal("10000"),
        locked_balance=Decimal("40000"),
    )


@pytest.fixture
def waiting_account(clock) -> AccountSnapshot:
    """Account whose next withdrawal opens in 30 days."""
    return AccountSnapshot(
        id=2,
        total_invested=Decimal("50000"),
        available_balance=Decimal("10000"),
        locked_balance=Decimal("40000"),
        next_eligible_withdrawal=clock.now() + timedelta(days=30),
    )
