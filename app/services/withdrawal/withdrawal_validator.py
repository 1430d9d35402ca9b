"""
Withdrawal validation service.

Runs every request-time check in order and computes the fee breakdown
for requests that pass.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from calculator import (
    AccountSnapshot,
    FeeBreakdown,
    TierTerms,
    WithdrawalCalculator,
    WithdrawalType,
)

from app.services.withdrawal.withdrawal_basic_checks import BasicChecksMixin


class WithdrawalErrorCode(StrEnum):
    """Machine-readable reasons a withdrawal request is refused."""

    INVALID_AMOUNT = "INVALID_AMOUNT"
    INVALID_WITHDRAWAL_TYPE = "INVALID_WITHDRAWAL_TYPE"
    NOT_ELIGIBLE = "NOT_ELIGIBLE"
    NEGATIVE_NET_AMOUNT = "NEGATIVE_NET_AMOUNT"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    ACCOUNT_INACTIVE = "ACCOUNT_INACTIVE"
    EMERGENCY_STOP = "EMERGENCY_STOP"
    DATABASE_ERROR = "DATABASE_ERROR"


@dataclass
class ValidationResult:
    """Result of withdrawal validation."""

    is_valid: bool
    error_message: str | None = None
    error_code: WithdrawalErrorCode | None = None
    days_until_eligible: int | None = None
    fees: FeeBreakdown | None = None

    @classmethod
    def success(cls, fees: FeeBreakdown | None = None) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True, fees=fees)

    @classmethod
    def error(
        cls,
        message: str,
        code: WithdrawalErrorCode | None = None,
        days_until_eligible: int | None = None,
    ) -> "ValidationResult":
        """Create an error validation result."""
        return cls(
            is_valid=False,
            error_message=message,
            error_code=code,
            days_until_eligible=days_until_eligible,
        )


class WithdrawalValidator(BasicChecksMixin):
    """Validator for withdrawal requests."""

    def __init__(
        self,
        calculator: WithdrawalCalculator,
        emergency_stop: bool = False,
    ) -> None:
        """
        Initialize withdrawal validator.

        Args:
            calculator: Fee and eligibility calculator
            emergency_stop: Refuse every request when set
        """
        self.calculator = calculator
        self.emergency_stop = emergency_stop

    def validate_withdrawal_request(
        self,
        account: AccountSnapshot,
        tier: TierTerms,
        amount: Decimal,
        withdrawal_type: WithdrawalType,
    ) -> ValidationResult:
        """
        Run all validations and return result.

        Args:
            account: Account snapshot
            tier: Terms of the account's tier
            amount: Requested amount
            withdrawal_type: partial, full or emergency

        Returns:
            ValidationResult; on success it carries the fee breakdown
        """
        # 1. Check emergency stop
        is_valid, error_msg = self.check_emergency_stop()
        if not is_valid:
            return ValidationResult.error(
                error_msg, WithdrawalErrorCode.EMERGENCY_STOP
            )

        # 2. Check account status (suspended, closed)
        is_valid, error_msg = self.check_account_status(account)
        if not is_valid:
            return ValidationResult.error(
                error_msg, WithdrawalErrorCode.ACCOUNT_INACTIVE
            )

        # 3. Check amount against available balance
        is_valid, error_msg = self.check_amount(account, amount)
        if not is_valid:
            return ValidationResult.error(
                error_msg, WithdrawalErrorCode.INVALID_AMOUNT
            )

        # 4. Check eligibility window (emergency bypasses)
        is_valid, error_msg, days = self.check_eligibility(
            account, withdrawal_type
        )
        if not is_valid:
            return ValidationResult.error(
                error_msg, WithdrawalErrorCode.NOT_ELIGIBLE, days
            )

        # 5. Check fees leave a payout
        fees = self.calculator.calculate_fees(
            amount, account, tier, withdrawal_type
        )
        is_valid, error_msg = self.check_net_amount(fees)
        if not is_valid:
            return ValidationResult.error(
                error_msg, WithdrawalErrorCode.NEGATIVE_NET_AMOUNT
            )

        return ValidationResult.success(fees)
