#!/usr/bin/env python3
"""Initialize database tables and seed investment tiers."""

import asyncio
import sys

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.config.investment_tiers import INVESTMENT_TIERS, TIER_ORDER
from app.config.logging import setup_logging
from app.config.settings import settings
from app.models import Base
from app.repositories.investment_tier_repository import InvestmentTierRepository


async def seed_tiers(session: AsyncSession) -> int:
    """
    Insert tiers that are missing; existing rows are left untouched.

    Args:
        session: Database session

    Returns:
        Number of tiers created
    """
    repo = InvestmentTierRepository(session)
    created = 0

    for tier_name in TIER_ORDER:
        config = INVESTMENT_TIERS[tier_name]
        if await repo.get_by_name(config.name.value):
            logger.info(f"Tier {config.name.value} already present")
            continue

        await repo.create(
            name=config.name.value,
            min_investment=config.min_investment,
            max_investment=config.max_investment,
            lockup_period_months=config.lockup_period_months,
            withdrawal_frequency_days=config.withdrawal_frequency_days,
            early_withdrawal_penalty=config.early_withdrawal_penalty,
            benefits=list(config.benefits),
            description=config.description,
        )
        created += 1
        logger.info(f"Tier {config.name.value} created")

    await session.commit()
    return created


async def init_database() -> None:
    """Create all database tables and seed tiers."""
    logger.info("Connecting to database...")
    engine = create_async_engine(settings.async_database_url, echo=False)

    try:
        async with engine.begin() as conn:
            logger.info("Creating tables (checkfirst=True)...")
            await conn.run_sync(
                Base.metadata.create_all,
                checkfirst=True
            )

        session_maker = async_sessionmaker(engine, expire_on_commit=False)
        async with session_maker() as session:
            created = await seed_tiers(session)
    finally:
        await engine.dispose()

    logger.success(f"Database initialized, {created} tiers seeded")


if __name__ == "__main__":
    setup_logging("script")
    try:
        asyncio.run(init_database())
    except Exception as e:
        logger.exception(f"Database initialization failed: {e}")
        sys.exit(1)
