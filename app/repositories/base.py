"""
Base repository.

Shared lookups and inserts for the account and withdrawal repositories.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository bound to one model and one session.

    Rows are never deleted: accounts are closed by status and withdrawal
    requests stay as an audit trail. Repositories flush but never
    commit; the calling service owns the transaction.

    Example:
        class InvestmentTierRepository(BaseRepository[InvestmentTier]):
            def __init__(self, session: AsyncSession):
                super().__init__(InvestmentTier, session)
    """

    def __init__(
        self, model: type[ModelType], session: AsyncSession
    ) -> None:
        self.model = model
        self.session = session

    async def get_by_id(
        self, id: int, for_update: bool = False
    ) -> ModelType | None:
        """
        Get row by primary key.

        Args:
            id: Row ID
            for_update: Lock the row until the transaction ends

        Returns:
            Row or None if not found
        """
        if not for_update:
            return await self.session.get(self.model, id)

        stmt = (
            select(self.model)
            .where(self.model.id == id)
            .with_for_update(of=self.model)
            # Reload from the locked row, not the identity map
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by(self, **filters: Any) -> ModelType | None:
        """Get the single row matching column filters."""
        stmt = select(self.model).filter_by(**filters)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, **data: Any) -> ModelType:
        """
        Insert a row and load server defaults.

        Args:
            **data: Column values

        Returns:
            Created row with its ID assigned
        """
        entity = self.model(**data)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity
