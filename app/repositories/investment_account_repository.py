"""
UserInvestmentAccount repository.

Data access layer for UserInvestmentAccount model.
"""

from datetime import datetime

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import AccountStatus
from app.models.user_investment_account import UserInvestmentAccount
from app.repositories.base import BaseRepository


class InvestmentAccountRepository(BaseRepository[UserInvestmentAccount]):
    """Repository for user investment account operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(UserInvestmentAccount, session)

    async def get_for_user(
        self,
        account_id: int,
        user_id: str,
        for_update: bool = False,
    ) -> UserInvestmentAccount | None:
        """
        Get account by ID, only if it belongs to the user.

        Args:
            account_id: Account ID
            user_id: Owning user ID
            for_update: Lock the account row

        Returns:
            Account or None
        """
        stmt = select(UserInvestmentAccount).where(
            UserInvestmentAccount.id == account_id,
            UserInvestmentAccount.user_id == user_id,
        )
        if for_update:
            stmt = stmt.with_for_update(
                of=UserInvestmentAccount
            ).execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_open_by_user(
        self, user_id: str, for_update: bool = False
    ) -> UserInvestmentAccount | None:
        """
        Get the user's account that is not closed.

        Args:
            user_id: User ID
            for_update: Lock the account row

        Returns:
            Account or None
        """
        stmt = (
            select(UserInvestmentAccount)
            .where(
                UserInvestmentAccount.user_id == user_id,
                UserInvestmentAccount.account_status
                != AccountStatus.CLOSED.value,
            )
            .order_by(UserInvestmentAccount.created_at.desc())
            .limit(1)
        )
        if for_update:
            stmt = stmt.with_for_update(
                of=UserInvestmentAccount
            ).execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_matured_lockup(
        self, now: datetime, limit: int = 100
    ) -> list[UserInvestmentAccount]:
        """
        Get active accounts whose lock-up has ended with funds still locked.

        Args:
            now: Reference time
            limit: Max accounts per batch

        Returns:
            List of accounts, oldest lock-up first
        """
        stmt = (
            select(UserInvestmentAccount)
            .where(
                and_(
                    UserInvestmentAccount.account_status
                    == AccountStatus.ACTIVE.value,
                    UserInvestmentAccount.locked_balance > 0,
                    UserInvestmentAccount.lockup_ends_at.is_not(None),
                    UserInvestmentAccount.lockup_ends_at <= now,
                )
            )
            .order_by(UserInvestmentAccount.lockup_ends_at.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
