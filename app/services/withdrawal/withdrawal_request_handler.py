"""
Withdrawal request handling module.

Handles the creation of withdrawal requests: account lookup, validation,
fee calculation and persistence of a pending request.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from calculator import Clock, FeeBreakdown, WithdrawalType
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import settings
from app.models.enums import WithdrawalStatus
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.investment_account_repository import (
    InvestmentAccountRepository,
)
from app.repositories.withdrawal_request_repository import (
    WithdrawalRequestRepository,
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
from app.utils.encryption import EncryptionService, get_encryption_service


@dataclass
class WithdrawalSubmission:
    """Outcome of a withdrawal submission."""

    success: bool
    request: WithdrawalRequest | None = None
    fees: FeeBreakdown | None = None
    error_message: str | None = None
    error_code: WithdrawalErrorCode | None = None
    days_until_eligible: int | None = None

    @classmethod
    def failed(cls, validation: ValidationResult) -> "WithdrawalSubmission":
        """Create a failed submission from a validation result."""
        return cls(
            success=False,
            error_message=validation.error_message,
            error_code=validation.error_code,
            days_until_eligible=validation.days_until_eligible,
        )


class WithdrawalRequestHandler:
    """Handles withdrawal request creation and validation."""

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock | None = None,
        encryption: EncryptionService | None = None,
    ) -> None:
        """
        Initialize withdrawal request handler.

        Args:
            session: Database session
            clock: Time source for eligibility checks
            encryption: Service used to encrypt bank details
        """
        self.session = session
        self.calculator = create_calculator(clock)
        self.encryption = encryption
        self.account_repo = InvestmentAccountRepository(session)
        self.request_repo = WithdrawalRequestRepository(session)

    async def submit_withdrawal_request(
        self,
        user_id: str,
        account_id: int,
        amount: Decimal | int | str,
        withdrawal_type: WithdrawalType | str,
        reason: str | None = None,
        property_id: int | None = None,
        bank_details: dict[str, Any] | None = None,
    ) -> WithdrawalSubmission:
        """
        Validate and create a pending withdrawal request.

        Fees are computed once here and stored on the request; they are
        never recalculated later.

        Args:
            user_id: Requesting user ID
            account_id: Account to withdraw from
            amount: Requested amount
            withdrawal_type: partial, full or emergency
            reason: Free-text reason
            property_id: Property the withdrawal relates to
            bank_details: Payout details, stored encrypted

        Returns:
            WithdrawalSubmission with the created request or an error code
        """
        parsed_amount = parse_amount(amount)
        if parsed_amount is None:
            return WithdrawalSubmission.failed(ValidationResult.error(
                "Withdrawal amount must be a number with at most 2 decimal places",
                WithdrawalErrorCode.INVALID_AMOUNT,
            ))

        try:
            withdrawal_type = WithdrawalType(withdrawal_type)
        except ValueError:
            return WithdrawalSubmission.failed(ValidationResult.error(
                f"Unknown withdrawal type: {withdrawal_type}",
                WithdrawalErrorCode.INVALID_WITHDRAWAL_TYPE,
            ))

        try:
            account = await self.account_repo.get_for_user(
                account_id, user_id
            )
            if not account:
                return WithdrawalSubmission.failed(ValidationResult.error(
                    "Investment account not found",
                    WithdrawalErrorCode.ACCOUNT_NOT_FOUND,
                ))

            snapshot = account_snapshot(account)
            validator = WithdrawalValidator(
                self.calculator,
                emergency_stop=settings.emergency_stop_withdrawals,
            )
            validation = validator.validate_withdrawal_request(
                snapshot, tier_terms(account.tier), parsed_amount,
                withdrawal_type,
            )

            if not validation.is_valid:
                logger.info(
                    "Withdrawal request refused",
                    extra={
                        "user_id": user_id,
                        "account_id": account_id,
                        "amount": str(parsed_amount),
                        "error_code": validation.error_code.value,
                    },
                )
                return WithdrawalSubmission.failed(validation)

            fees = validation.fees
            request = await self.request_repo.create(
                user_id=user_id,
                account_id=account.id,
                property_id=property_id,
                requested_amount=fees.requested_amount,
                available_amount=snapshot.available_balance,
                withdrawal_type=withdrawal_type.value,
                status=WithdrawalStatus.PENDING.value,
                processing_fee=fees.processing_fee,
                penalty_amount=fees.penalty_fee,
                net_amount=fees.net_amount,
                reason=reason,
                bank_details=self._encrypt_bank_details(bank_details),
                created_at=self.calculator.now(),
            )

            await self.session.commit()

            logger.info(
                "Withdrawal request created",
                extra={
                    "request_id": request.id,
                    "user_id": user_id,
                    "account_id": account.id,
                    "amount": str(fees.requested_amount),
                    "net_amount": str(fees.net_amount),
                    "withdrawal_type": withdrawal_type.value,
                },
            )

            return WithdrawalSubmission(
                success=True, request=request, fees=fees
            )

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to create withdrawal request",
                extra={
                    "user_id": user_id,
                    "account_id": account_id,
                    "amount": str(parsed_amount),
                    "error": str(e),
                },
                exc_info=True,
            )
            return WithdrawalSubmission.failed(ValidationResult.error(
                "Could not save the withdrawal request. Try again later.",
                WithdrawalErrorCode.DATABASE_ERROR,
            ))

    def _encrypt_bank_details(
        self, bank_details: dict[str, Any] | None
    ) -> str | None:
        if not bank_details:
            return None
        encryption = self.encryption or get_encryption_service()
        return encryption.encrypt_json(bank_details)
