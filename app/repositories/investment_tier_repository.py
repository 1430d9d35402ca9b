"""
InvestmentTier repository.

Data access layer for InvestmentTier model.
"""

from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.investment_tier import InvestmentTier
from app.repositories.base import BaseRepository


class InvestmentTierRepository(BaseRepository[InvestmentTier]):
    """Repository for investment tier lookups."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository."""
        super().__init__(InvestmentTier, session)

    async def get_by_name(self, name: str) -> InvestmentTier | None:
        """
        Get tier by name.

        Args:
            name: Tier name (Starter, Builder, Partner)

        Returns:
            InvestmentTier or None
        """
        return await self.get_by(name=name)

    async def get_for_amount(self, amount: Decimal) -> InvestmentTier | None:
        """
        Get highest tier whose minimum the amount reaches.

        Args:
            amount: Cumulative investment amount

        Returns:
            InvestmentTier or None if amount is below every minimum
        """
        stmt = (
            select(InvestmentTier)
            .where(InvestmentTier.min_investment <= amount)
            .order_by(InvestmentTier.min_investment.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
