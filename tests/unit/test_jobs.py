"""
Tests for background jobs.

Batch functions run against mocked services; actors run with
run_async patched so no event loop, Redis or database is needed.
"""

from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from app.utils.redis_utils import job_lock
from jobs.tasks.lockup_release import release_matured_batch
from jobs.tasks.withdrawal_processing import (
    complete_approved_batch,
    process_approved_withdrawals,
)

PROCESSING = "jobs.tasks.withdrawal_processing"
LOCKUP = "jobs.tasks.lockup_release"


def failing_runner(exc: Exception):
    """run_async replacement that discards the coroutine and raises."""

    def _run(coro):
        coro.close()
        raise exc

    return _run


class TestCompleteApprovedBatch:
    """Tests for the approved withdrawal batch."""

    @pytest.mark.asyncio
    async def test_counts_completed_and_failed(self, mock_session) -> None:
        query_service = MagicMock()
        query_service.get_approved_withdrawals = AsyncMock(
            return_value=[SimpleNamespace(id=1), SimpleNamespace(id=2), SimpleNamespace(id=3)]
        )
        lifecycle = MagicMock()
        lifecycle.complete_withdrawal = AsyncMock(side_effect=[
            (True, None),
            (False, "Insufficient available balance"),
            (True, None),
        ])

        with (
            patch(f"{PROCESSING}.WithdrawalQueryService", return_value=query_service),
            patch(f"{PROCESSING}.WithdrawalLifecycleHandler", return_value=lifecycle),
        ):
            result = await complete_approved_batch(mock_session, batch_size=50)

        assert result == {"processed": 3, "completed": 2, "failed": 1}
        query_service.get_approved_withdrawals.assert_awaited_once_with(limit=50)
        assert [c.args[0] for c in lifecycle.complete_withdrawal.await_args_list] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_nothing_approved(self, mock_session) -> None:
        query_service = MagicMock()
        query_service.get_approved_withdrawals = AsyncMock(return_value=[])

        with (
            patch(f"{PROCESSING}.WithdrawalQueryService", return_value=query_service),
            patch(f"{PROCESSING}.WithdrawalLifecycleHandler"),
        ):
            result = await complete_approved_batch(mock_session, batch_size=50)

        assert result == {"processed": 0, "completed": 0, "failed": 0}


class TestReleaseMaturedBatch:
    """Tests for the lock-up release batch."""

    @pytest.mark.asyncio
    async def test_releases_matured_accounts(self, mock_session, clock) -> None:
        account_repo = MagicMock()
        account_repo.get_with_matured_lockup = AsyncMock(
            return_value=[SimpleNamespace(id=10), SimpleNamespace(id=11)]
        )
        service = MagicMock()
        service.release_matured_lockup = AsyncMock(
            side_effect=[Decimal("40000"), Decimal("0")]
        )

        with (
            patch(f"{LOCKUP}.InvestmentAccountRepository", return_value=account_repo),
            patch(f"{LOCKUP}.InvestmentAccountService", return_value=service),
        ):
            result = await release_matured_batch(mock_session, 200, clock=clock)

        assert result == {"checked": 2, "released": 1}
        account_repo.get_with_matured_lockup.assert_awaited_once_with(
            clock.now(), limit=200
        )


class TestActors:
    """Actor error handling."""

    def test_returns_result(self) -> None:
        expected = {"processed": 2, "completed": 2, "failed": 0}

        def _run(coro):
            coro.close()
            return expected

        with patch(f"{PROCESSING}.run_async", side_effect=_run):
            assert process_approved_withdrawals.fn() == expected

    def test_non_retryable_error_reported(self) -> None:
        with patch(
            f"{PROCESSING}.run_async",
            side_effect=failing_runner(ValueError("bad row")),
        ):
            result = process_approved_withdrawals.fn()

        assert result["processed"] == 0
        assert result["error"] == "bad row"

    def test_retryable_error_raised(self) -> None:
        """Connection failures propagate so the broker retries."""
        error = OperationalError("SELECT 1", {}, Exception("connection refused"))

        with patch(f"{PROCESSING}.run_async", side_effect=failing_runner(error)):
            with pytest.raises(OperationalError):
                process_approved_withdrawals.fn()


class TestJobLock:
    """Tests for the Redis job lock."""

    @pytest.mark.asyncio
    async def test_acquired_and_released(self) -> None:
        lock = MagicMock()
        lock.acquire = AsyncMock(return_value=True)
        lock.release = AsyncMock()
        client = MagicMock()
        client.lock.return_value = lock

        async with job_lock(client, "withdrawal_processing", timeout=60) as acquired:
            assert acquired is True

        client.lock.assert_called_once_with(
            "lock:withdrawal_processing", timeout=60, blocking=False
        )
        lock.release.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_held_elsewhere(self) -> None:
        lock = MagicMock()
        lock.acquire = AsyncMock(return_value=False)
        lock.release = AsyncMock()
        client = MagicMock()
        client.lock.return_value = lock

        async with job_lock(client, "lockup_release") as acquired:
            assert acquired is False

        lock.release.assert_not_awaited()
