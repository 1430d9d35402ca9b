"""
Withdrawal basic checks module.

Contains basic validation checks:
- Emergency stop check
- Account status check
- Amount check
- Eligibility window check
- Net amount check
"""

from decimal import Decimal

from calculator import AccountSnapshot, FeeBreakdown, WithdrawalCalculator, WithdrawalType
from calculator.utils.formatters import format_currency, format_days
from loguru import logger

from app.models.enums import AccountStatus


class BasicChecksMixin:
    """Mixin providing basic validation checks."""

    calculator: WithdrawalCalculator
    emergency_stop: bool

    def check_emergency_stop(self) -> tuple[bool, str | None]:
        """
        Check if emergency stop is active.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if self.emergency_stop:
            logger.warning("Withdrawal blocked by emergency stop")
            return False, (
                "Withdrawals are temporarily paused for maintenance. "
                "Your funds are safe; please try again later."
            )
        return True, None

    def check_account_status(
        self, account: AccountSnapshot
    ) -> tuple[bool, str | None]:
        """
        Check that the account accepts withdrawals.

        Args:
            account: Account snapshot

        Returns:
            Tuple of (is_valid, error_message)
        """
        if account.account_status != AccountStatus.ACTIVE.value:
            logger.warning(
                f"Withdrawal blocked: account {account.id} is "
                f"{account.account_status}"
            )
            return False, (
                f"Account is {account.account_status}. "
                "Contact support to restore withdrawals."
            )
        return True, None

    def check_amount(
        self, account: AccountSnapshot, amount: Decimal
    ) -> tuple[bool, str | None]:
        """
        Check that 0 < amount <= available balance.

        Args:
            account: Account snapshot
            amount: Requested amount

        Returns:
            Tuple of (is_valid, error_message)
        """
        if amount <= 0:
            return False, "Withdrawal amount must be greater than zero"

        if amount > account.available_balance:
            logger.warning(
                f"Insufficient balance for account {account.id}: "
                f"requested={amount}, available={account.available_balance}"
            )
            return False, (
                "Insufficient available balance. "
                f"Available: {format_currency(account.available_balance)}"
            )

        return True, None

    def check_eligibility(
        self,
        account: AccountSnapshot,
        withdrawal_type: WithdrawalType,
    ) -> tuple[bool, str | None, int]:
        """
        Check the eligibility window for regular withdrawals.

        Emergency withdrawals skip this check and pay the penalty instead.

        Args:
            account: Account snapshot
            withdrawal_type: Requested withdrawal type

        Returns:
            Tuple of (is_valid, error_message, days_until_eligible)
        """
        if withdrawal_type == WithdrawalType.EMERGENCY:
            return True, None, 0

        if self.calculator.is_withdrawal_eligible(account):
            return True, None, 0

        days = self.calculator.days_until_eligible(account)
        return False, (
            f"Next withdrawal available in {format_days(days)}. "
            "Use an emergency withdrawal to withdraw now with a penalty."
        ), days

    def check_net_amount(
        self, fees: FeeBreakdown
    ) -> tuple[bool, str | None]:
        """
        Check that fees leave a non-negative payout.

        Args:
            fees: Calculated fee breakdown

        Returns:
            Tuple of (is_valid, error_message)
        """
        if fees.net_amount < 0:
            return False, (
                f"Fees ({format_currency(fees.total_fees)}) exceed the "
                f"requested amount ({format_currency(fees.requested_amount)})"
            )
        return True, None
