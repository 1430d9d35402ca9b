"""
Withdrawal query service module.

Handles queries for withdrawal requests including the review queue,
the payout queue, user history and request lookups.
"""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import WithdrawalStatus
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.withdrawal_request_repository import (
    WithdrawalRequestRepository,
)
from app.utils.encryption import EncryptionService, get_encryption_service


class WithdrawalQueryService:
    """Handles withdrawal query operations."""

    def __init__(
        self,
        session: AsyncSession,
        encryption: EncryptionService | None = None,
    ) -> None:
        """
        Initialize withdrawal query service.

        Args:
            session: Database session
            encryption: Service used to decrypt bank details
        """
        self.session = session
        self.encryption = encryption
        self.request_repo = WithdrawalRequestRepository(session)

    async def get_pending_withdrawals(
        self, limit: int | None = None
    ) -> list[WithdrawalRequest]:
        """
        Get pending withdrawals awaiting review, oldest first.

        Returns:
            List of pending withdrawal requests
        """
        return await self.request_repo.get_by_status(
            WithdrawalStatus.PENDING, limit=limit
        )

    async def get_approved_withdrawals(
        self, limit: int | None = None
    ) -> list[WithdrawalRequest]:
        """Get approved withdrawals awaiting payout, oldest first."""
        return await self.request_repo.get_by_status(
            WithdrawalStatus.APPROVED, limit=limit
        )

    async def get_user_withdrawals(
        self,
        user_id: str,
        page: int = 1,
        limit: int = 10,
    ) -> dict[str, Any]:
        """
        Get user withdrawal history.

        Args:
            user_id: User ID
            page: Page number (1-indexed)
            limit: Items per page

        Returns:
            Dict with withdrawals, total, page, pages
        """
        page = max(page, 1)
        limit = max(limit, 1)
        offset = (page - 1) * limit

        withdrawals, total = await self.request_repo.get_user_history(
            user_id, limit=limit, offset=offset
        )

        pages = (total + limit - 1) // limit  # Ceiling division

        return {
            "withdrawals": withdrawals,
            "total": total,
            "page": page,
            "pages": pages,
        }

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

    def get_bank_details(
        self, request: WithdrawalRequest
    ) -> dict[str, Any] | None:
        """
        Decrypt the payout destination of a request.

        Raises:
            SecurityError: Stored details cannot be decrypted
        """
        if not request.bank_details:
            return None
        encryption = self.encryption or get_encryption_service()
        return encryption.decrypt_json(request.bank_details)
