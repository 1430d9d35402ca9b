"""
Workflow tests through the WithdrawalService facade.

One in-memory request row is shared by the mocked repositories so the
request moves through the whole workflow.
"""

from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from app.models.enums import WithdrawalStatus
from app.services.withdrawal_service import WithdrawalService


@pytest.fixture
def account(make_account):
    return make_account()


@pytest.fixture
def service(mock_session, clock, account):
    """Facade with repositories backed by a single request row."""
    service = WithdrawalService(mock_session, clock=clock)
    rows = {}

    def create(**data):
        rows["request"] = SimpleNamespace(
            id=501, approved_by=None, approved_at=None,
            processed_at=None, rejection_reason=None, **data,
        )
        return rows["request"]

    def locked(request_id, statuses, user_id=None):
        request = rows.get("request")
        if request is None or request.status not in statuses:
            return None
        if user_id is not None and request.user_id != user_id:
            return None
        return request

    account_repo = AsyncMock()
    account_repo.get_for_user.return_value = account
    account_repo.get_by_id.return_value = account
    request_repo = AsyncMock()
    request_repo.create.side_effect = create
    request_repo.get_in_status_for_update.side_effect = locked

    service.request_handler.account_repo = account_repo
    service.request_handler.request_repo = request_repo
    service.lifecycle_handler.request_repo = request_repo
    service.lifecycle_handler.balance_manager.account_repo = account_repo
    return service


class TestWithdrawalWorkflow:
    """Submission through completion."""

    @pytest.mark.asyncio
    async def test_submit_approve_complete(self, service, account, clock) -> None:
        submission = await service.submit_withdrawal_request(
            "user-1", 10, Decimal("3000"), "partial"
        )
        assert submission.success is True
        request = submission.request

        # Balance is untouched until completion
        assert account.available_balance == Decimal("10000")

        assert await service.approve_withdrawal(501, "admin-7") == (True, None)
        assert request.status == WithdrawalStatus.APPROVED.value

        assert await service.complete_withdrawal(501) == (True, None)
        assert request.status == WithdrawalStatus.COMPLETED.value
        assert account.available_balance == Decimal("7000")
        assert account.total_invested == Decimal("47000")
        assert account.next_eligible_withdrawal == clock.now() + timedelta(days=90)

    @pytest.mark.asyncio
    async def test_second_request_waits_for_window(self, service) -> None:
        await service.submit_withdrawal_request("user-1", 10, "3000", "partial")
        await service.approve_withdrawal(501, "admin-7")
        await service.complete_withdrawal(501)

        submission = await service.submit_withdrawal_request(
            "user-1", 10, "1000", "partial"
        )

        assert submission.success is False
        assert submission.days_until_eligible == 90

    @pytest.mark.asyncio
    async def test_completed_request_is_final(self, service) -> None:
        await service.submit_withdrawal_request("user-1", 10, "3000", "partial")
        await service.approve_withdrawal(501, "admin-7")
        await service.complete_withdrawal(501)

        success, _ = await service.reject_withdrawal(501, "admin-7", "late")

        assert success is False

    @pytest.mark.asyncio
    async def test_cancel_then_approve_refused(self, service, account) -> None:
        await service.submit_withdrawal_request("user-1", 10, "3000", "partial")

        assert await service.cancel_withdrawal(501, "user-1") == (True, None)
        success, _ = await service.approve_withdrawal(501, "admin-7")

        assert success is False
        assert account.available_balance == Decimal("10000")

    @pytest.mark.asyncio
    async def test_complete_requires_approval(self, service, account) -> None:
        await service.submit_withdrawal_request("user-1", 10, "3000", "partial")

        success, _ = await service.complete_withdrawal(501)

        assert success is False
        assert account.available_balance == Decimal("10000")
