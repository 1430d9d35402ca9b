"""
Withdrawal fee preview service.

Runs the same validation and fee calculation as a submission, without
creating a request, so the user sees the exact breakdown first.
"""

from dataclasses import dataclass
from decimal import Decimal

from calculator import Clock, FeeBreakdown, WithdrawalType
from calculator.types import EligibilityDict
from calculator.utils.formatters import format_fee_breakdown
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import settings
from app.repositories.investment_account_repository import (
    InvestmentAccountRepository,
)
from app.services.withdrawal.withdrawal_helpers import (
    account_snapshot,
    create_calculator,
    parse_amount,
    tier_terms,
)
from app.services.withdrawal.withdrawal_validator import (
    ValidationResult,
    WithdrawalErrorCode,
    WithdrawalValidator,
)


@dataclass
class WithdrawalPreview:
    """Fee breakdown and eligibility shown before submission."""

    validation: ValidationResult
    eligibility: EligibilityDict | None = None

    @property
    def fees(self) -> FeeBreakdown | None:
        return self.validation.fees

    @property
    def summary(self) -> str | None:
        """Text summary for display, None when the request would fail."""
        if self.fees is None:
            return None
        return format_fee_breakdown(self.fees)


class WithdrawalFeeService:
    """Computes withdrawal previews."""

    def __init__(
        self, session: AsyncSession, clock: Clock | None = None
    ) -> None:
        """
        Initialize fee service.

        Args:
            session: Database session
            clock: Time source for eligibility checks
        """
        self.session = session
        self.calculator = create_calculator(clock)
        self.account_repo = InvestmentAccountRepository(session)

    async def preview_withdrawal(
        self,
        user_id: str,
        account_id: int,
        amount: Decimal | int | str,
        withdrawal_type: WithdrawalType | str,
    ) -> WithdrawalPreview:
        """
        Preview a withdrawal.

        Args:
            user_id: Requesting user ID
            account_id: Account to withdraw from
            amount: Requested amount
            withdrawal_type: partial, full or emergency

        Returns:
            WithdrawalPreview with fees on success or the refusal reason
        """
        parsed_amount = parse_amount(amount)
        if parsed_amount is None:
            return WithdrawalPreview(ValidationResult.error(
                "Withdrawal amount must be a number with at most 2 decimal places",
                WithdrawalErrorCode.INVALID_AMOUNT,
            ))

        try:
            withdrawal_type = WithdrawalType(withdrawal_type)
        except ValueError:
            return WithdrawalPreview(ValidationResult.error(
                f"Unknown withdrawal type: {withdrawal_type}",
                WithdrawalErrorCode.INVALID_WITHDRAWAL_TYPE,
            ))

        try:
            account = await self.account_repo.get_for_user(
                account_id, user_id
            )
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to load account for withdrawal preview",
                extra={
                    "user_id": user_id,
                    "account_id": account_id,
                    "error": str(e),
                },
                exc_info=True,
            )
            return WithdrawalPreview(ValidationResult.error(
                "Could not load the investment account. Try again later.",
                WithdrawalErrorCode.DATABASE_ERROR,
            ))

        if not account:
            return WithdrawalPreview(ValidationResult.error(
                "Investment account not found",
                WithdrawalErrorCode.ACCOUNT_NOT_FOUND,
            ))

        snapshot = account_snapshot(account)
        validator = WithdrawalValidator(
            self.calculator,
            emergency_stop=settings.emergency_stop_withdrawals,
        )
        validation = validator.validate_withdrawal_request(
            snapshot,
            tier_terms(account.tier),
            parsed_amount,
            withdrawal_type,
        )

        return WithdrawalPreview(
            validation=validation,
            eligibility=self.calculator.get_eligibility(snapshot),
        )
