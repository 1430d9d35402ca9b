"""
Investment tier model.

Seeded reference data: lock-up period, withdrawal frequency and
early withdrawal penalty for each tier. Read-only at runtime.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    CheckConstraint,
    DateTime,
    Integer,
    String,
    Text,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.types import MoneyType, PercentType


if TYPE_CHECKING:
    from app.models.user_investment_account import UserInvestmentAccount


class InvestmentTier(Base):
    """Investment tier - withdrawal terms for a range of investment amounts."""

    __tablename__ = "investment_tiers"
    __table_args__ = (
        CheckConstraint(
            'min_investment >= 0', name='check_tier_min_investment_non_negative'
        ),
        CheckConstraint(
            'max_investment IS NULL OR max_investment >= min_investment',
            name='check_tier_investment_corridor'
        ),
        CheckConstraint(
            'lockup_period_months >= 0', name='check_tier_lockup_non_negative'
        ),
        CheckConstraint(
            'withdrawal_frequency_days >= 0',
            name='check_tier_frequency_non_negative'
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Starter, Builder, Partner
    name: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False
    )

    # Investment corridor
    min_investment: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    max_investment: Mapped[Decimal | None] = mapped_column(
        MoneyType, nullable=True
    )

    # Withdrawal terms
    lockup_period_months: Mapped[int] = mapped_column(Integer, nullable=False)
    withdrawal_frequency_days: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    early_withdrawal_penalty: Mapped[Decimal | None] = mapped_column(
        PercentType, nullable=True
    )  # percentage, 5.00 = 5%

    # Display-only; JSON where ARRAY is unsupported (SQLite)
    benefits: Mapped[list[str]] = mapped_column(
        ARRAY(Text).with_variant(JSON(), "sqlite"),
        nullable=False,
        default=list,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )

    accounts: Mapped[list["UserInvestmentAccount"]] = relationship(
        "UserInvestmentAccount",
        back_populates="tier",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<InvestmentTier(id={self.id}, name={self.name}, "
            f"min_investment={self.min_investment}, "
            f"lockup_period_months={self.lockup_period_months}, "
            f"withdrawal_frequency_days={self.withdrawal_frequency_days})>"
        )
