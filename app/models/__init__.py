"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from app.models.base import Base
from app.models.enums import (
    AccountStatus,
    WithdrawalStatus,
    WithdrawalType,
    can_transition,
)
from app.models.investment_tier import InvestmentTier
from app.models.user_investment_account import UserInvestmentAccount
from app.models.withdrawal_request import WithdrawalRequest

__all__ = [
    # Base
    "Base",
    # Enums
    "AccountStatus",
    "WithdrawalStatus",
    "WithdrawalType",
    "can_transition",
    # Models
    "InvestmentTier",
    "UserInvestmentAccount",
    "WithdrawalRequest",
]
