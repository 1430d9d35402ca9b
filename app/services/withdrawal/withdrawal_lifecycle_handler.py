"""
Withdrawal lifecycle handling module.

Handles approval, rejection, cancellation and completion of withdrawal
requests. The workflow is pending -> approved | rejected, then
approved -> completed; completed and rejected requests never change.
"""

from calculator import Clock
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import WithdrawalStatus, can_transition
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.withdrawal_request_repository import (
    WithdrawalRequestRepository,
)
from app.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from app.services.withdrawal.withdrawal_helpers import create_calculator


CANCELLED_BY_USER = "Cancelled by user"


class WithdrawalLifecycleHandler:
    """Handles withdrawal lifecycle operations."""

    def __init__(
        self, session: AsyncSession, clock: Clock | None = None
    ) -> None:
        """
        Initialize withdrawal lifecycle handler.

        Args:
            session: Database session
            clock: Time source for workflow timestamps
        """
        self.session = session
        self.calculator = create_calculator(clock)
        self.request_repo = WithdrawalRequestRepository(session)
        self.balance_manager = WithdrawalBalanceManager(session)

    async def approve_withdrawal(
        self, request_id: int, admin_id: str
    ) -> tuple[bool, str | None]:
        """
        Approve a pending withdrawal.

        Args:
            request_id: Withdrawal request ID
            admin_id: Reviewer ID

        Returns:
            Tuple of (success, error_message)
        """
        try:
            request = await self._lock_for_transition(
                request_id, WithdrawalStatus.APPROVED
            )
            if not request:
                return False, "Withdrawal request not found or already processed"

            request.status = WithdrawalStatus.APPROVED.value
            request.approved_by = str(admin_id)
            request.approved_at = self.calculator.now()
            await self.session.commit()

            logger.info(
                "Withdrawal approved",
                extra={
                    "request_id": request_id,
                    "user_id": request.user_id,
                    "amount": str(request.requested_amount),
                    "admin_id": admin_id,
                },
            )

            return True, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to approve withdrawal",
                extra={
                    "request_id": request_id,
                    "admin_id": admin_id,
                    "error": str(e),
                },
                exc_info=True,
            )
            return False, "Failed to approve withdrawal request"

    async def reject_withdrawal(
        self,
        request_id: int,
        admin_id: str,
        reason: str | None = None,
    ) -> tuple[bool, str | None]:
        """
        Reject a pending withdrawal.

        No balance is returned because none was taken: balances only
        change on completion.

        Args:
            request_id: Withdrawal request ID
            admin_id: Reviewer ID
            reason: Rejection reason shown to the user

        Returns:
            Tuple of (success, error_message)
        """
        try:
            request = await self._lock_for_transition(
                request_id, WithdrawalStatus.REJECTED
            )
            if not request:
                return False, "Withdrawal request not found or already processed"

            request.status = WithdrawalStatus.REJECTED.value
            request.approved_by = str(admin_id)
            request.rejection_reason = reason
            request.processed_at = self.calculator.now()
            await self.session.commit()

            logger.info(
                "Withdrawal rejected",
                extra={
                    "request_id": request_id,
                    "user_id": request.user_id,
                    "amount": str(request.requested_amount),
                    "admin_id": admin_id,
                    "reason": reason,
                },
            )

            return True, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to reject withdrawal",
                extra={
                    "request_id": request_id,
                    "reason": reason,
                    "error": str(e),
                },
                exc_info=True,
            )
            return False, "Failed to reject withdrawal request"

    async def cancel_withdrawal(
        self, request_id: int, user_id: str
    ) -> tuple[bool, str | None]:
        """
        Cancel the user's own pending withdrawal.

        Args:
            request_id: Withdrawal request ID
            user_id: User ID (for authorization)

        Returns:
            Tuple of (success, error_message)
        """
        try:
            request = await self._lock_for_transition(
                request_id, WithdrawalStatus.REJECTED, user_id=user_id
            )
            if not request:
                return False, "Withdrawal request not found or cannot be cancelled"

            request.status = WithdrawalStatus.REJECTED.value
            request.rejection_reason = CANCELLED_BY_USER
            request.processed_at = self.calculator.now()
            await self.session.commit()

            logger.info(
                "Withdrawal cancelled by user",
                extra={
                    "request_id": request_id,
                    "user_id": user_id,
                    "amount": str(request.requested_amount),
                },
            )

            return True, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to cancel withdrawal",
                extra={
                    "request_id": request_id,
                    "user_id": user_id,
                    "error": str(e),
                },
                exc_info=True,
            )
            return False, "Failed to cancel withdrawal request"

    async def complete_withdrawal(
        self, request_id: int
    ) -> tuple[bool, str | None]:
        """
        Mark an approved withdrawal as paid out and deduct the balance.

        The status change and the balance change share one transaction.
        If the balance is no longer sufficient the request stays
        approved and nothing is written.

        Args:
            request_id: Withdrawal request ID

        Returns:
            Tuple of (success, error_message)
        """
        try:
            request = await self._lock_for_transition(
                request_id, WithdrawalStatus.COMPLETED
            )
            if not request:
                return False, "Withdrawal request not found or not approved"

            now = self.calculator.now()
            success, error_msg = (
                await self.balance_manager.apply_completed_withdrawal(
                    request.account_id,
                    request.requested_amount,
                    request.id,
                    now,
                )
            )
            if not success:
                await self.session.rollback()
                return False, error_msg

            request.status = WithdrawalStatus.COMPLETED.value
            request.processed_at = now
            await self.session.commit()

            logger.info(
                "Withdrawal completed",
                extra={
                    "request_id": request_id,
                    "user_id": request.user_id,
                    "account_id": request.account_id,
                    "amount": str(request.requested_amount),
                    "net_amount": str(request.net_amount),
                },
            )

            return True, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to complete withdrawal",
                extra={
                    "request_id": request_id,
                    "error": str(e),
                },
                exc_info=True,
            )
            return False, "Failed to complete withdrawal request"

    async def get_withdrawal_by_id(
        self, request_id: int
    ) -> WithdrawalRequest | None:
        """
        Get withdrawal request by ID.

        Args:
            request_id: Withdrawal request ID

        Returns:
            WithdrawalRequest or None if not found
        """
        return await self.request_repo.get_by_id(request_id)

    async def _lock_for_transition(
        self,
        request_id: int,
        target: WithdrawalStatus,
        user_id: str | None = None,
    ) -> WithdrawalRequest | None:
        """Lock a request whose current state may move to target."""
        sources = [
            status for status in WithdrawalStatus
            if can_transition(status.value, target.value)
        ]
        return await self.request_repo.get_in_status_for_update(
            request_id, sources, user_id=user_id
        )
