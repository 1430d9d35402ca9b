"""
Withdrawal processing task.

Completes approved withdrawal requests in batches: each request is
moved to completed and its amount deducted from the account under a
row lock. Requests whose account can no longer cover them stay
approved for manual review.
"""

import dramatiq
from loguru import logger

from app.config.operational_constants import (
    DRAMATIQ_TIME_LIMIT_STANDARD,
    LOCK_TIMEOUT_LONG,
)
from app.config.settings import settings
from app.services.withdrawal.withdrawal_lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from app.services.withdrawal.withdrawal_query_service import (
    WithdrawalQueryService,
)
from app.utils.exceptions import is_retryable
from app.utils.redis_utils import get_redis_client, job_lock
from jobs.async_runner import create_local_session, run_async


@dramatiq.actor(max_retries=3, time_limit=DRAMATIQ_TIME_LIMIT_STANDARD)  # 5 min timeout
def process_approved_withdrawals() -> dict:
    """
    Complete approved withdrawals.

    Returns:
        Dict with processed, completed, failed counts
    """
    logger.info("Starting approved withdrawal processing...")

    try:
        result = run_async(_process_approved_withdrawals_async())

        logger.info(
            f"Withdrawal processing complete: "
            f"{result['processed']} processed, "
            f"{result['completed']} completed, "
            f"{result['failed']} failed"
        )

        return result

    except Exception as e:
        if is_retryable(e):
            raise
        logger.exception(f"Withdrawal processing failed: {e}")
        return {"processed": 0, "completed": 0, "failed": 0, "error": str(e)}


async def _process_approved_withdrawals_async() -> dict:
    """Async implementation of withdrawal processing."""
    redis_client = await get_redis_client()
    try:
        async with job_lock(
            redis_client, "withdrawal_processing", timeout=LOCK_TIMEOUT_LONG
        ) as acquired:
            if not acquired:
                return {"processed": 0, "completed": 0, "failed": 0}

            async with create_local_session() as session:
                return await complete_approved_batch(
                    session, settings.withdrawal_batch_size
                )
    finally:
        await redis_client.aclose()


async def complete_approved_batch(session, batch_size: int) -> dict:
    """
    Complete up to batch_size approved withdrawals, oldest first.

    Args:
        session: Database session
        batch_size: Max requests per run

    Returns:
        Dict with processed, completed, failed counts
    """
    query_service = WithdrawalQueryService(session)
    lifecycle = WithdrawalLifecycleHandler(session)

    approved = await query_service.get_approved_withdrawals(limit=batch_size)
    request_ids = [request.id for request in approved]

    completed = 0
    failed = 0
    for request_id in request_ids:
        success, error_msg = await lifecycle.complete_withdrawal(request_id)
        if success:
            completed += 1
        else:
            failed += 1
            logger.warning(
                "Approved withdrawal not completed",
                extra={"request_id": request_id, "error": error_msg},
            )

    return {
        "processed": len(request_ids),
        "completed": completed,
        "failed": failed,
    }
