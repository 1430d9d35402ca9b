"""
Tests for withdrawal previews and queries.
"""

from datetime import timedelta
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.models.enums import WithdrawalStatus
from app.services.withdrawal.withdrawal_fee_service import WithdrawalFeeService
from app.services.withdrawal.withdrawal_query_service import (
    WithdrawalQueryService,
)
from app.services.withdrawal.withdrawal_validator import WithdrawalErrorCode
from app.utils.encryption import EncryptionService


@pytest.fixture
def fee_service(mock_session, clock, make_account):
    service = WithdrawalFeeService(mock_session, clock=clock)
    service.account_repo = AsyncMock()
    service.account_repo.get_for_user.return_value = make_account()
    return service


@pytest.fixture
def encryption() -> EncryptionService:
    return EncryptionService(EncryptionService.generate_key(), "test")


@pytest.fixture
def query_service(mock_session, encryption):
    service = WithdrawalQueryService(mock_session, encryption=encryption)
    service.request_repo = AsyncMock()
    return service


class TestPreviewWithdrawal:
    """Tests for fee previews."""

    @pytest.mark.asyncio
    async def test_partial_preview(self, fee_service, mock_session) -> None:
        preview = await fee_service.preview_withdrawal(
            "user-1", 10, "3000", "partial"
        )

        assert preview.validation.is_valid is True
        assert preview.fees.net_amount == Decimal("2985")
        assert preview.eligibility["is_eligible"] is True
        assert preview.eligibility["days_until_eligible"] == 0
        assert "Early Withdrawal Penalty" not in preview.summary
        assert "$2,985.00" in preview.summary
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_emergency_preview_shows_penalty(
        self, fee_service, make_account, clock
    ) -> None:
        fee_service.account_repo.get_for_user.return_value = make_account(
            next_eligible_withdrawal=clock.now() + timedelta(days=30)
        )

        preview = await fee_service.preview_withdrawal(
            "user-1", 10, Decimal("5000"), "emergency"
        )

        assert preview.fees.penalty_fee == Decimal("250")
        assert preview.eligibility["is_eligible"] is False
        assert preview.eligibility["days_until_eligible"] == 30
        assert "Early Withdrawal Penalty: -$250.00" in preview.summary
        assert "$4,725.00" in preview.summary

    @pytest.mark.asyncio
    async def test_refused_preview(self, fee_service, make_account, clock) -> None:
        fee_service.account_repo.get_for_user.return_value = make_account(
            next_eligible_withdrawal=clock.now() + timedelta(days=30)
        )

        preview = await fee_service.preview_withdrawal(
            "user-1", 10, Decimal("1000"), "partial"
        )

        assert preview.validation.error_code == WithdrawalErrorCode.NOT_ELIGIBLE
        assert preview.fees is None
        assert preview.summary is None

    @pytest.mark.asyncio
    async def test_invalid_amount(self, fee_service) -> None:
        preview = await fee_service.preview_withdrawal(
            "user-1", 10, "12.345", "partial"
        )

        assert preview.validation.error_code == WithdrawalErrorCode.INVALID_AMOUNT
        assert preview.eligibility is None

    @pytest.mark.asyncio
    async def test_account_not_found(self, fee_service) -> None:
        fee_service.account_repo.get_for_user.return_value = None

        preview = await fee_service.preview_withdrawal(
            "user-1", 10, "100", "partial"
        )

        assert preview.validation.error_code == WithdrawalErrorCode.ACCOUNT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_database_error(self, fee_service, mock_session) -> None:
        fee_service.account_repo.get_for_user.side_effect = SQLAlchemyError(
            "connection lost"
        )

        preview = await fee_service.preview_withdrawal(
            "user-1", 10, "100", "partial"
        )

        assert preview.validation.is_valid is False
        assert preview.validation.error_code == WithdrawalErrorCode.DATABASE_ERROR
        assert preview.fees is None
        assert preview.eligibility is None
        mock_session.rollback.assert_awaited_once()


class TestWithdrawalQueries:
    """Tests for queue and history queries."""

    @pytest.mark.asyncio
    async def test_pending_queue(self, query_service) -> None:
        query_service.request_repo.get_by_status.return_value = []

        await query_service.get_pending_withdrawals(limit=20)

        query_service.request_repo.get_by_status.assert_awaited_once_with(
            WithdrawalStatus.PENDING, limit=20
        )

    @pytest.mark.asyncio
    async def test_approved_queue(self, query_service) -> None:
        query_service.request_repo.get_by_status.return_value = []

        await query_service.get_approved_withdrawals()

        query_service.request_repo.get_by_status.assert_awaited_once_with(
            WithdrawalStatus.APPROVED, limit=None
        )

    @pytest.mark.asyncio
    async def test_user_history_pagination(self, query_service) -> None:
        rows = [SimpleNamespace(id=i) for i in range(10)]
        query_service.request_repo.get_user_history.return_value = (rows, 25)

        result = await query_service.get_user_withdrawals("user-1", page=2)

        assert result["total"] == 25
        assert result["page"] == 2
        assert result["pages"] == 3
        assert result["withdrawals"] == rows
        query_service.request_repo.get_user_history.assert_awaited_once_with(
            "user-1", limit=10, offset=10
        )

    @pytest.mark.asyncio
    async def test_user_history_empty(self, query_service) -> None:
        query_service.request_repo.get_user_history.return_value = ([], 0)

        result = await query_service.get_user_withdrawals("user-1", page=0)

        assert result["page"] == 1
        assert result["pages"] == 0

    @pytest.mark.asyncio
    async def test_user_history_zero_limit(self, query_service) -> None:
        rows = [SimpleNamespace(id=1)]
        query_service.request_repo.get_user_history.return_value = (rows, 3)

        result = await query_service.get_user_withdrawals("user-1", limit=0)

        assert result["pages"] == 3
        query_service.request_repo.get_user_history.assert_awaited_once_with(
            "user-1", limit=1, offset=0
        )

    def test_bank_details(self, query_service, encryption) -> None:
        details = {"iban": "DE89370400440532013000"}
        request = SimpleNamespace(bank_details=encryption.encrypt_json(details))

        assert query_service.get_bank_details(request) == details

    def test_no_bank_details(self, query_service) -> None:
        assert query_service.get_bank_details(SimpleNamespace(bank_details=None)) is None
