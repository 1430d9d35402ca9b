"""
Withdrawal request model.

Fee fields are computed once at submission and never recomputed.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.enums import WithdrawalStatus
from app.models.types import MoneyType


if TYPE_CHECKING:
    from app.models.user_investment_account import UserInvestmentAccount


class WithdrawalRequest(Base):
    """Withdrawal request - one user-submitted payout."""

    __tablename__ = "withdrawal_requests"
    __table_args__ = (
        CheckConstraint(
            'requested_amount > 0',
            name='check_withdrawal_amount_positive'
        ),
        CheckConstraint(
            'net_amount >= 0',
            name='check_withdrawal_net_non_negative'
        ),
        CheckConstraint(
            'net_amount = requested_amount - processing_fee - penalty_amount',
            name='check_withdrawal_net_matches_fees'
        ),
        CheckConstraint(
            "withdrawal_type IN ('partial', 'full', 'emergency')",
            name='check_withdrawal_type_values'
        ),
        CheckConstraint(
            "status IN ('pending', 'approved', 'rejected', 'completed')",
            name='check_withdrawal_status_values'
        ),
        Index('idx_withdrawal_account_status', 'account_id', 'status'),
        Index('idx_withdrawal_status_created', 'status', 'created_at'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Ownership
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    account_id: Mapped[int] = mapped_column(
        ForeignKey("user_investment_accounts.id"), nullable=False
    )
    property_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Request
    requested_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    available_amount: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False
    )  # snapshot of available_balance at request time
    withdrawal_type: Mapped[str] = mapped_column(
        String(20), nullable=False
    )  # partial, full, emergency

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=WithdrawalStatus.PENDING.value,
        index=True,
    )  # pending, approved, rejected, completed

    # Fees (computed at submission)
    processing_fee: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    penalty_amount: Mapped[Decimal] = mapped_column(
        MoneyType, nullable=False, default=Decimal("0")
    )
    net_amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    approved_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Fernet-encrypted JSON payout destination
    bank_details: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    approved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    account: Mapped["UserInvestmentAccount"] = relationship(
        "UserInvestmentAccount",
        back_populates="withdrawal_requests",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<WithdrawalRequest(id={self.id}, user_id={self.user_id}, "
            f"account_id={self.account_id}, "
            f"requested_amount={self.requested_amount}, "
            f"net_amount={self.net_amount}, "
            f"withdrawal_type={self.withdrawal_type}, "
            f"status={self.status})>"
        )
