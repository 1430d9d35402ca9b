"""
Lock-up release task.

Moves locked balances into available balances for accounts whose
lock-up period has ended.
"""

import dramatiq
from calculator import SystemClock
from loguru import logger

from app.config.operational_constants import (
    DRAMATIQ_TIME_LIMIT_STANDARD,
    LOCK_TIMEOUT_LONG,
    LOCKUP_RELEASE_BATCH_SIZE,
)
from app.repositories.investment_account_repository import (
    InvestmentAccountRepository,
)
from app.services.investment_account_service import InvestmentAccountService
from app.utils.exceptions import is_retryable
from app.utils.redis_utils import get_redis_client, job_lock
from jobs.async_runner import create_local_session, run_async


@dramatiq.actor(max_retries=3, time_limit=DRAMATIQ_TIME_LIMIT_STANDARD)  # 5 min timeout
def release_matured_lockups() -> dict:
    """
    Release matured lock-ups.

    Returns:
        Dict with checked and released counts
    """
    logger.info("Starting lock-up release...")

    try:
        result = run_async(_release_matured_lockups_async())
        logger.info(
            f"Lock-up release complete: {result['released']} of "
            f"{result['checked']} accounts released"
        )
        return result

    except Exception as e:
        if is_retryable(e):
            raise
        logger.exception(f"Lock-up release failed: {e}")
        return {"checked": 0, "released": 0, "error": str(e)}


async def _release_matured_lockups_async() -> dict:
    """Async implementation of lock-up release."""
    redis_client = await get_redis_client()
    try:
        async with job_lock(
            redis_client, "lockup_release", timeout=LOCK_TIMEOUT_LONG
        ) as acquired:
            if not acquired:
                return {"checked": 0, "released": 0}

            async with create_local_session() as session:
                return await release_matured_batch(
                    session, LOCKUP_RELEASE_BATCH_SIZE
                )
    finally:
        await redis_client.aclose()


async def release_matured_batch(
    session, batch_size: int, clock=None
) -> dict:
    """
    Release every matured account in one batch.

    Args:
        session: Database session
        batch_size: Max accounts per run
        clock: Time source (defaults to the UTC wall clock)

    Returns:
        Dict with checked and released counts
    """
    clock = clock or SystemClock()
    account_repo = InvestmentAccountRepository(session)
    service = InvestmentAccountService(session, clock=clock)

    accounts = await account_repo.get_with_matured_lockup(
        clock.now(), limit=batch_size
    )
    account_ids = [account.id for account in accounts]

    released = 0
    for account_id in account_ids:
        amount = await service.release_matured_lockup(account_id)
        if amount > 0:
            released += 1

    return {"checked": len(account_ids), "released": released}
