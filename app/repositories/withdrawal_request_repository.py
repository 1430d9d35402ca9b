"""
WithdrawalRequest repository.

Data access layer for WithdrawalRequest model.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import WithdrawalStatus
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.base import BaseRepository


class WithdrawalRequestRepository(BaseRepository[WithdrawalRequest]):
    """Repository for withdrawal request operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(WithdrawalRequest, session)

    async def get_in_status_for_update(
        self,
        request_id: int,
        statuses: list[WithdrawalStatus],
        user_id: str | None = None,
    ) -> WithdrawalRequest | None:
        """
        Lock a request if it is currently in one of the given states.

        Args:
            request_id: Request ID
            statuses: Accepted current states
            user_id: Restrict to requests owned by this user

        Returns:
            Locked request or None
        """
        stmt = select(WithdrawalRequest).where(
            WithdrawalRequest.id == request_id,
            WithdrawalRequest.status.in_([s.value for s in statuses]),
        )
        if user_id is not None:
            stmt = stmt.where(WithdrawalRequest.user_id == user_id)

        stmt = stmt.with_for_update().execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_status(
        self,
        status: WithdrawalStatus,
        limit: int | None = None,
    ) -> list[WithdrawalRequest]:
        """
        Get requests in a given state, oldest first.

        Args:
            status: Workflow state
            limit: Max number of results

        Returns:
            List of requests
        """
        stmt = (
            select(WithdrawalRequest)
            .where(WithdrawalRequest.status == status.value)
            .order_by(WithdrawalRequest.created_at.asc())
        )
        if limit:
            stmt = stmt.limit(limit)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_user_history(
        self,
        user_id: str,
        limit: int,
        offset: int,
    ) -> tuple[list[WithdrawalRequest], int]:
        """
        Get a page of a user's requests, newest first.

        Args:
            user_id: User ID
            limit: Page size
            offset: Rows to skip

        Returns:
            Tuple of (requests, total_count)
        """
        count_stmt = select(func.count(WithdrawalRequest.id)).where(
            WithdrawalRequest.user_id == user_id
        )
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar() or 0

        stmt = (
            select(WithdrawalRequest)
            .where(WithdrawalRequest.user_id == user_id)
            .order_by(WithdrawalRequest.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all()), total
