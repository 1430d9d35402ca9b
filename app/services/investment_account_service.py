"""
Investment account service.

Records investments, releases matured lock-ups and changes account
status. Every mutation locks the account row first.
"""

from decimal import Decimal

from calculator import Clock
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import AccountStatus
from app.models.user_investment_account import UserInvestmentAccount
from app.repositories.investment_account_repository import (
    InvestmentAccountRepository,
)
from app.repositories.investment_tier_repository import (
    InvestmentTierRepository,
)
from app.services.base_service import BaseService, log_operation, transaction
from app.services.withdrawal.withdrawal_helpers import (
    account_snapshot,
    create_calculator,
    parse_amount,
    tier_terms,
)


class InvestmentAccountService(BaseService):
    """Service for user investment accounts."""

    def __init__(
        self, session: AsyncSession, clock: Clock | None = None
    ) -> None:
        """
        Initialize account service.

        Args:
            session: Database session
            clock: Time source for lock-up dates
        """
        super().__init__(session)
        self.calculator = create_calculator(clock)
        self.account_repo = InvestmentAccountRepository(session)
        self.tier_repo = InvestmentTierRepository(session)

    @transaction
    async def record_investment(
        self, user_id: str, amount: Decimal | int | str
    ) -> UserInvestmentAccount:
        """
        Record an investment for a user.

        The first investment creates the account in the tier matching
        the amount. Later investments add to it and move it to a higher
        tier once the cumulative total reaches that tier's minimum.
        Invested funds are locked until the tier's lock-up period ends.

        Args:
            user_id: Investing user ID
            amount: Invested amount

        Returns:
            The created or updated account

        Raises:
            ValueError: Amount invalid, below the lowest tier minimum,
                or account not active
        """
        parsed_amount = parse_amount(amount)
        if parsed_amount is None or parsed_amount <= 0:
            raise ValueError(f"Investment amount must be positive, got {amount}")

        now = self.calculator.now()
        account = await self.account_repo.get_open_by_user(
            user_id, for_update=True
        )

        if account is None:
            tier = await self.tier_repo.get_for_amount(parsed_amount)
            if tier is None:
                raise ValueError(
                    f"Amount {parsed_amount} is below the minimum investment"
                )

            account = await self.account_repo.create(
                user_id=user_id,
                tier_id=tier.id,
                total_invested=parsed_amount,
                available_balance=Decimal("0"),
                locked_balance=parsed_amount,
                lockup_ends_at=self.calculator.lockup_end_date(
                    now, tier_terms(tier)
                ),
                account_status=AccountStatus.ACTIVE.value,
                created_at=now,
                updated_at=now,
            )

            self.logger.info(
                "Investment account created",
                extra={
                    "account_id": account.id,
                    "user_id": user_id,
                    "tier": tier.name,
                    "amount": str(parsed_amount),
                },
            )
            return account

        if not account.is_active:
            raise ValueError(
                f"Account {account.id} is {account.account_status}"
            )

        account.total_invested = account.total_invested + parsed_amount
        account.locked_balance = account.locked_balance + parsed_amount

        tier = account.tier
        best_tier = await self.tier_repo.get_for_amount(account.total_invested)
        if best_tier and best_tier.min_investment > tier.min_investment:
            self.logger.info(
                "Investment account upgraded",
                extra={
                    "account_id": account.id,
                    "from_tier": tier.name,
                    "to_tier": best_tier.name,
                },
            )
            account.tier_id = best_tier.id
            account.tier = best_tier
            tier = best_tier

        account.lockup_ends_at = self.calculator.lockup_end_date(
            now, tier_terms(tier)
        )
        account.updated_at = now
        await self.session.flush()

        self.logger.info(
            "Investment recorded",
            extra={
                "account_id": account.id,
                "user_id": user_id,
                "amount": str(parsed_amount),
                "total_invested": str(account.total_invested),
            },
        )
        return account

    @log_operation
    @transaction
    async def release_matured_lockup(self, account_id: int) -> Decimal:
        """
        Move locked funds to the available balance after lock-up.

        Args:
            account_id: Account ID

        Returns:
            Amount released (0 if lock-up still running or nothing locked)

        Raises:
            ValueError: Account not found
        """
        account = await self.account_repo.get_by_id(
            account_id, for_update=True
        )
        if account is None:
            raise ValueError(f"Account {account_id} not found")

        if account.locked_balance <= 0:
            return Decimal("0")

        if not self.calculator.is_lockup_over(account_snapshot(account)):
            return Decimal("0")

        released = account.locked_balance
        account.available_balance = account.available_balance + released
        account.locked_balance = Decimal("0")
        account.updated_at = self.calculator.now()

        self.logger.info(
            "Lock-up released",
            extra={
                "account_id": account_id,
                "released": str(released),
                "available_balance": str(account.available_balance),
            },
        )
        return released

    @transaction
    async def set_account_status(
        self, account_id: int, status: AccountStatus | str
    ) -> UserInvestmentAccount:
        """
        Suspend, close or reactivate an account.

        Closing is final; a closed account cannot be reopened.

        Args:
            account_id: Account ID
            status: New status

        Returns:
            Updated account

        Raises:
            ValueError: Unknown status, account not found or closed
        """
        new_status = AccountStatus(status)

        account = await self.account_repo.get_by_id(
            account_id, for_update=True
        )
        if account is None:
            raise ValueError(f"Account {account_id} not found")

        if (
            account.account_status == AccountStatus.CLOSED.value
            and new_status != AccountStatus.CLOSED
        ):
            raise ValueError(f"Account {account_id} is closed")

        old_status = account.account_status
        account.account_status = new_status.value
        account.updated_at = self.calculator.now()

        self.logger.info(
            "Account status changed",
            extra={
                "account_id": account_id,
                "from_status": old_status,
                "to_status": new_status.value,
            },
        )
        return account
