"""Pydantic models for the withdrawal calculator."""

from datetime import datetime
from decimal import Decimal
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from calculator.types import FeeBreakdownDict


class WithdrawalType(StrEnum):
    """Kinds of withdrawal an investor can request."""

    PARTIAL = "partial"
    FULL = "full"
    EMERGENCY = "emergency"


class TierTerms(BaseModel):
    """Withdrawal-relevant terms of an investment tier.

    Built from seeded configuration or from an ``InvestmentTier`` row
    via ``TierTerms.model_validate(row)``.
    """

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
    )

    name: str = Field(..., description="Tier name (Starter, Builder, Partner)")
    min_investment: Decimal = Field(..., ge=0, description="Minimum cumulative investment")
    max_investment: Decimal | None = Field(
        default=None, ge=0, description="Upper bound of the tier corridor, None = open"
    )
    lockup_period_months: int = Field(..., ge=0, description="Months funds stay locked")
    withdrawal_frequency_days: int = Field(
        ..., ge=0, description="Minimum days between regular withdrawals"
    )
    early_withdrawal_penalty: Decimal | None = Field(
        default=None, ge=0, description="Emergency penalty percentage (5.0 = 5%)"
    )
    benefits: list[str] = Field(default_factory=list, description="Display-only benefits")
    description: str | None = Field(default=None, description="Optional tier description")

    @property
    def penalty_percent(self) -> Decimal:
        """Penalty percentage with a missing value read as zero."""
        return self.early_withdrawal_penalty or Decimal("0")


class AccountSnapshot(BaseModel):
    """Point-in-time view of a user investment account.

    The calculator only ever reads this snapshot; it never fetches
    or mutates the account itself.
    """

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
    )

    id: int | None = Field(default=None, description="Account ID, if persisted")
    total_invested: Decimal = Field(default=Decimal("0"), ge=0)
    available_balance: Decimal = Field(default=Decimal("0"), ge=0)
    locked_balance: Decimal = Field(default=Decimal("0"), ge=0)
    last_withdrawal_date: datetime | None = None
    next_eligible_withdrawal: datetime | None = None
    lockup_ends_at: datetime | None = None
    account_status: str = Field(default="active")


class FeeBreakdown(BaseModel):
    """Fee breakdown for a proposed withdrawal.

    ``net_amount`` is not floored at zero; callers decide whether a
    negative payout is acceptable (the request handler rejects it).
    """

    model_config = ConfigDict(frozen=True)

    requested_amount: Decimal = Field(..., gt=0)
    processing_fee: Decimal = Field(..., ge=0)
    penalty_fee: Decimal = Field(..., ge=0)
    net_amount: Decimal
    withdrawal_type: WithdrawalType
    is_eligible: bool

    @property
    def total_fees(self) -> Decimal:
        return self.processing_fee + self.penalty_fee

    @property
    def has_penalty(self) -> bool:
        return self.penalty_fee > 0

    def as_dict(self) -> FeeBreakdownDict:
        """Serialize with string amounts, the format stored and shown to users."""
        return FeeBreakdownDict(
            requested_amount=str(self.requested_amount),
            processing_fee=str(self.processing_fee),
            penalty_amount=str(self.penalty_fee),
            net_amount=str(self.net_amount),
            withdrawal_type=self.withdrawal_type.value,
            is_eligible=self.is_eligible,
        )
