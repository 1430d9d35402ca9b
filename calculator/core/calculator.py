"""
Pure business logic calculator for withdrawal eligibility and fees.

This module contains standalone calculation logic without any
dependencies on database, ORM, or app-specific code. The current time
is taken from an injected Clock, so every result is a pure function of
its inputs and the clock reading.
"""

import calendar
from datetime import datetime, timedelta
from decimal import Decimal

from calculator.core.clock import Clock, SystemClock, ensure_utc
from calculator.core.models import (
    AccountSnapshot,
    FeeBreakdown,
    TierTerms,
    WithdrawalType,
)
from calculator.types import EligibilityDict


# 0.5% of the amount, never less than $10
DEFAULT_PROCESSING_FEE_PERCENT = Decimal("0.5")
DEFAULT_MIN_PROCESSING_FEE = Decimal("10")

_ONE_DAY = timedelta(days=1)


class WithdrawalCalculator:
    """
    Withdrawal eligibility and fee calculator.

    Shared by the request handler, the fee preview and any presentation
    code, so the fee formula exists in exactly one place.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        processing_fee_percent: Decimal = DEFAULT_PROCESSING_FEE_PERCENT,
        min_processing_fee: Decimal = DEFAULT_MIN_PROCESSING_FEE,
    ) -> None:
        """
        Initialize calculator.

        Args:
            clock: Time source (defaults to the UTC wall clock)
            processing_fee_percent: Processing fee as percentage of amount
            min_processing_fee: Flat minimum processing fee
        """
        if processing_fee_percent < 0:
            raise ValueError("processing_fee_percent must be non-negative")
        if min_processing_fee < 0:
            raise ValueError("min_processing_fee must be non-negative")

        self.clock = clock or SystemClock()
        self.processing_fee_percent = processing_fee_percent
        self.min_processing_fee = min_processing_fee

    def now(self) -> datetime:
        """Current time according to the injected clock."""
        return ensure_utc(self.clock.now())

    def is_withdrawal_eligible(self, account: AccountSnapshot) -> bool:
        """
        Check whether a regular withdrawal is allowed right now.

        Args:
            account: Account snapshot

        Returns:
            True if no eligibility date is set or it has been reached

        Example:
            >>> calc = WithdrawalCalculator(FixedClock(datetime(2024, 5, 1)))
            >>> calc.is_withdrawal_eligible(AccountSnapshot())
            True
        """
        if account.next_eligible_withdrawal is None:
            return True

        return self.now() >= ensure_utc(account.next_eligible_withdrawal)

    def days_until_eligible(self, account: AccountSnapshot) -> int:
        """
        Calculate whole days until the next eligible withdrawal.

        Partial days round up, so an account that becomes eligible
        in one hour reports 1 day. Past dates report 0.

        Args:
            account: Account snapshot

        Returns:
            Number of days (minimum 0)
        """
        if account.next_eligible_withdrawal is None:
            return 0

        remaining = ensure_utc(account.next_eligible_withdrawal) - self.now()

        # Ceiling division on timedelta keeps the arithmetic exact
        days = -((-remaining) // _ONE_DAY)
        return max(days, 0)

    def get_eligibility(self, account: AccountSnapshot) -> EligibilityDict:
        """
        Get eligibility status in a serializable form.

        Args:
            account: Account snapshot

        Returns:
            EligibilityDict for presentation code
        """
        next_date = account.next_eligible_withdrawal
        return EligibilityDict(
            is_eligible=self.is_withdrawal_eligible(account),
            days_until_eligible=self.days_until_eligible(account),
            next_eligible_withdrawal=(
                ensure_utc(next_date).isoformat() if next_date else None
            ),
        )

    def calculate_processing_fee(self, amount: Decimal) -> Decimal:
        """
        Calculate processing fee.

        Formula: max(amount * processing_fee_percent / 100, min_processing_fee)

        Example:
            >>> WithdrawalCalculator().calculate_processing_fee(Decimal("3000"))
            Decimal('15.000')
        """
        percent_fee = amount * (self.processing_fee_percent / Decimal("100"))
        return max(percent_fee, self.min_processing_fee)

    def calculate_penalty(
        self,
        amount: Decimal,
        tier: TierTerms,
        withdrawal_type: WithdrawalType,
        is_eligible: bool,
    ) -> Decimal:
        """
        Calculate early withdrawal penalty.

        Only emergency withdrawals taken outside the eligibility window
        are penalized.

        Formula: amount * (early_withdrawal_penalty / 100)
        """
        if withdrawal_type != WithdrawalType.EMERGENCY or is_eligible:
            return Decimal("0")

        return amount * (tier.penalty_percent / Decimal("100"))

    def calculate_fees(
        self,
        amount: Decimal,
        account: AccountSnapshot,
        tier: TierTerms,
        withdrawal_type: WithdrawalType | str,
    ) -> FeeBreakdown:
        """
        Calculate the full fee breakdown for a withdrawal.

        Args:
            amount: Requested withdrawal amount
            account: Account snapshot
            tier: Terms of the account's tier
            withdrawal_type: partial, full or emergency

        Returns:
            FeeBreakdown with processing fee, penalty and net amount

        Raises:
            ValueError: If amount is not positive or type is unknown

        Example:
            >>> calc = WithdrawalCalculator()
            >>> fees = calc.calculate_fees(
            ...     Decimal("3000"), AccountSnapshot(), tier, "partial"
            ... )
            >>> fees.net_amount
            Decimal('2985.000')
        """
        amount = _to_decimal(amount)
        if amount <= 0:
            raise ValueError(f"Withdrawal amount must be positive, got {amount}")

        withdrawal_type = WithdrawalType(withdrawal_type)
        is_eligible = self.is_withdrawal_eligible(account)

        processing_fee = self.calculate_processing_fee(amount)
        penalty_fee = self.calculate_penalty(
            amount, tier, withdrawal_type, is_eligible
        )

        return FeeBreakdown(
            requested_amount=amount,
            processing_fee=processing_fee,
            penalty_fee=penalty_fee,
            net_amount=amount - processing_fee - penalty_fee,
            withdrawal_type=withdrawal_type,
            is_eligible=is_eligible,
        )

    def lockup_end_date(self, invested_at: datetime, tier: TierTerms) -> datetime:
        """
        Calculate when funds invested at a given moment unlock.

        Calendar months are added; the day is clamped to the end of the
        target month (Jan 31 + 1 month = Feb 28/29).

        Args:
            invested_at: Investment timestamp
            tier: Tier terms (lockup_period_months)

        Returns:
            Lock-up end timestamp (UTC)
        """
        return add_months(ensure_utc(invested_at), tier.lockup_period_months)

    def next_eligible_after(self, withdrawn_at: datetime, tier: TierTerms) -> datetime:
        """
        Calculate the next eligible withdrawal after a completed one.

        Args:
            withdrawn_at: Completion timestamp of the last withdrawal
            tier: Tier terms (withdrawal_frequency_days)

        Returns:
            Next eligible withdrawal timestamp (UTC)
        """
        return ensure_utc(withdrawn_at) + timedelta(days=tier.withdrawal_frequency_days)

    def is_lockup_over(self, account: AccountSnapshot) -> bool:
        """Check whether the account's lock-up period has ended."""
        if account.lockup_ends_at is None:
            return True
        return self.now() >= ensure_utc(account.lockup_ends_at)


def add_months(value: datetime, months: int) -> datetime:
    """
    Add calendar months to a datetime, clamping the day.

    Example:
        >>> add_months(datetime(2024, 1, 31), 1)
        datetime.datetime(2024, 2, 29, 0, 0)
    """
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def _to_decimal(value: Decimal | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        raise TypeError("Use Decimal or str for money amounts, not float")
    return Decimal(str(value))
