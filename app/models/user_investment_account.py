"""
User investment account model.

Per-user ledger of invested, available and locked funds plus the
withdrawal eligibility window.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.enums import AccountStatus
from app.models.types import MoneyType


if TYPE_CHECKING:
    from app.models.investment_tier import InvestmentTier
    from app.models.withdrawal_request import WithdrawalRequest


class UserInvestmentAccount(Base):
    """Investment account - balances and withdrawal window of one user."""

    __tablename__ = "user_investment_accounts"
    __table_args__ = (
        CheckConstraint(
            'available_balance >= 0',
            name='check_account_available_non_negative'
        ),
        CheckConstraint(
            'locked_balance >= 0',
            name='check_account_locked_non_negative'
        ),
        CheckConstraint(
            'available_balance + locked_balance <= total_invested',
            name='check_account_balances_within_invested'
        ),
        CheckConstraint(
            "account_status IN ('active', 'suspended', 'closed')",
            name='check_account_status_values'
        ),
        Index('idx_account_user_status', 'user_id', 'account_status'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Owning user (users live in the platform's identity service)
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    tier_id: Mapped[int] = mapped_column(
        ForeignKey("investment_tiers.id"), nullable=False, index=True
    )

    # Balances
    total_invested: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=Decimal("0")
    )
    available_balance: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=Decimal("0")
    )
    locked_balance: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=Decimal("0")
    )

    # Withdrawal window
    last_withdrawal_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    next_eligible_withdrawal: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    lockup_ends_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True, index=True
    )

    account_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=AccountStatus.ACTIVE.value,
        index=True,
    )  # active, suspended, closed

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    tier: Mapped["InvestmentTier"] = relationship(
        "InvestmentTier",
        back_populates="accounts",
        lazy="joined",
        innerjoin=True,
    )
    withdrawal_requests: Mapped[list["WithdrawalRequest"]] = relationship(
        "WithdrawalRequest",
        back_populates="account",
    )

    @property
    def is_active(self) -> bool:
        """Check if account can transact."""
        return self.account_status == AccountStatus.ACTIVE.value

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<UserInvestmentAccount(id={self.id}, user_id={self.user_id}, "
            f"tier_id={self.tier_id}, "
            f"available_balance={self.available_balance}, "
            f"locked_balance={self.locked_balance}, "
            f"account_status={self.account_status})>"
        )
