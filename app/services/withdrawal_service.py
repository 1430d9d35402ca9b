"""
Withdrawal service - Main service facade.

Delegates to the specialized modules in app.services.withdrawal:
- withdrawal_request_handler: Request creation and validation
- withdrawal_fee_service: Fee preview
- withdrawal_lifecycle_handler: Approval, rejection, cancellation, completion
- withdrawal_query_service: Queues and history
"""

from decimal import Decimal
from typing import Any

from calculator import Clock, WithdrawalType
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.withdrawal_request import WithdrawalRequest
from app.services.base_service import BaseService
from app.services.withdrawal.withdrawal_fee_service import (
    WithdrawalFeeService,
    WithdrawalPreview,
)
from app.services.withdrawal.withdrawal_lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from app.services.withdrawal.withdrawal_query_service import (
    WithdrawalQueryService,
)
from app.services.withdrawal.withdrawal_request_handler import (
    WithdrawalRequestHandler,
    WithdrawalSubmission,
)
from app.utils.encryption import EncryptionService


class WithdrawalService(BaseService):
    """
    Withdrawal service for managing withdrawal requests.

    This is a facade over the withdrawal components; they share one
    session and one clock.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Clock | None = None,
        encryption: EncryptionService | None = None,
    ) -> None:
        """Initialize withdrawal service and all sub-components."""
        super().__init__(session)

        self.request_handler = WithdrawalRequestHandler(
            session, clock=clock, encryption=encryption
        )
        self.fee_service = WithdrawalFeeService(session, clock=clock)
        self.lifecycle_handler = WithdrawalLifecycleHandler(
            session, clock=clock
        )
        self.query_service = WithdrawalQueryService(
            session, encryption=encryption
        )

    # ========================================================================
    # REQUEST HANDLING
    # ========================================================================

    async def preview_withdrawal(
        self,
        user_id: str,
        account_id: int,
        amount: Decimal | int | str,
        withdrawal_type: WithdrawalType | str,
    ) -> WithdrawalPreview:
        """Show fees and eligibility without creating a request."""
        return await self.fee_service.preview_withdrawal(
            user_id, account_id, amount, withdrawal_type
        )

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
        """Validate and create a pending withdrawal request."""
        return await self.request_handler.submit_withdrawal_request(
            user_id,
            account_id,
            amount,
            withdrawal_type,
            reason=reason,
            property_id=property_id,
            bank_details=bank_details,
        )

    # ========================================================================
    # LIFECYCLE
    # ========================================================================

    async def approve_withdrawal(
        self, request_id: int, admin_id: str
    ) -> tuple[bool, str | None]:
        """Approve a pending withdrawal."""
        return await self.lifecycle_handler.approve_withdrawal(
            request_id, admin_id
        )

    async def reject_withdrawal(
        self, request_id: int, admin_id: str, reason: str | None = None
    ) -> tuple[bool, str | None]:
        """Reject a pending withdrawal."""
        return await self.lifecycle_handler.reject_withdrawal(
            request_id, admin_id, reason
        )

    async def cancel_withdrawal(
        self, request_id: int, user_id: str
    ) -> tuple[bool, str | None]:
        """Cancel the user's own pending withdrawal."""
        return await self.lifecycle_handler.cancel_withdrawal(
            request_id, user_id
        )

    async def complete_withdrawal(
        self, request_id: int
    ) -> tuple[bool, str | None]:
        """Complete an approved withdrawal and deduct the balance."""
        return await self.lifecycle_handler.complete_withdrawal(request_id)

    # ========================================================================
    # QUERIES
    # ========================================================================

    async def get_pending_withdrawals(
        self, limit: int | None = None
    ) -> list[WithdrawalRequest]:
        """Get pending withdrawals, oldest first."""
        return await self.query_service.get_pending_withdrawals(limit)

    async def get_user_withdrawals(
        self, user_id: str, page: int = 1, limit: int = 10
    ) -> dict[str, Any]:
        """Get a page of the user's withdrawal history."""
        return await self.query_service.get_user_withdrawals(
            user_id, page, limit
        )

    async def get_withdrawal_by_id(
        self, request_id: int
    ) -> WithdrawalRequest | None:
        """Get withdrawal request by ID."""
        return await self.query_service.get_withdrawal_by_id(request_id)
