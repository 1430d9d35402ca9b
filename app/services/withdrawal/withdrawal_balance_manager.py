"""
Withdrawal balance manager.

Applies completed withdrawals to investment accounts. Every balance
change happens under a row lock inside the caller's transaction.
"""

from datetime import datetime
from decimal import Decimal

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import AccountStatus
from app.repositories.investment_account_repository import (
    InvestmentAccountRepository,
)
from app.services.withdrawal.withdrawal_helpers import (
    create_calculator,
    tier_terms,
)


class WithdrawalBalanceManager:
    """Manages balance operations for withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal balance manager.

        Args:
            session: Database session
        """
        self.session = session
        self.account_repo = InvestmentAccountRepository(session)
        self.calculator = create_calculator()

    async def apply_completed_withdrawal(
        self,
        account_id: int,
        amount: Decimal,
        request_id: int,
        now: datetime,
    ) -> tuple[bool, str | None]:
        """
        Deduct a completed withdrawal from the account.

        The account row is locked (SELECT ... FOR UPDATE) and sufficiency
        is re-checked before the decrement, so two completions against
        the same account cannot spend the same balance. Does not commit.

        Args:
            account_id: Account ID
            amount: Gross amount to deduct (fees come out of it)
            request_id: Withdrawal request ID for logging
            now: Completion time

        Returns:
            Tuple of (success, error_message)
        """
        try:
            account = await self.account_repo.get_by_id(
                account_id, for_update=True
            )

            if not account:
                logger.error(
                    "Account not found for withdrawal completion",
                    extra={
                        "account_id": account_id,
                        "request_id": request_id,
                    },
                )
                return False, "Investment account not found"

            if account.account_status == AccountStatus.CLOSED.value:
                return False, "Investment account is closed"

            # Check sufficient balance
            if account.available_balance < amount:
                logger.warning(
                    "Insufficient balance for withdrawal completion",
                    extra={
                        "account_id": account_id,
                        "request_id": request_id,
                        "available": str(account.available_balance),
                        "requested": str(amount),
                    },
                )
                return False, "Insufficient available balance"

            balance_before = account.available_balance
            account.available_balance = account.available_balance - amount
            account.total_invested = account.total_invested - amount
            account.last_withdrawal_date = now
            account.next_eligible_withdrawal = (
                self.calculator.next_eligible_after(
                    now, tier_terms(account.tier)
                )
            )
            account.updated_at = now

            await self.session.flush()

            logger.info(
                "Balance deducted for withdrawal",
                extra={
                    "account_id": account_id,
                    "request_id": request_id,
                    "amount": str(amount),
                    "balance_before": str(balance_before),
                    "balance_after": str(account.available_balance),
                    "next_eligible_withdrawal": (
                        account.next_eligible_withdrawal.isoformat()
                    ),
                },
            )

            return True, None

        except SQLAlchemyError as e:
            logger.error(
                "Failed to deduct balance",
                extra={
                    "account_id": account_id,
                    "request_id": request_id,
                    "amount": str(amount),
                    "error": str(e),
                },
                exc_info=True,
            )
            return False, "Database error while updating balance"
