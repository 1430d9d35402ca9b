"""
Services.

Business logic layer.
"""

from app.services.base_service import BaseService, log_operation, transaction
from app.services.investment_account_service import InvestmentAccountService
from app.services.withdrawal import (
    ValidationResult,
    WithdrawalBalanceManager,
    WithdrawalErrorCode,
    WithdrawalFeeService,
    WithdrawalLifecycleHandler,
    WithdrawalPreview,
    WithdrawalQueryService,
    WithdrawalRequestHandler,
    WithdrawalSubmission,
    WithdrawalValidator,
)
from app.services.withdrawal_service import WithdrawalService


__all__ = [
    # Base
    "BaseService",
    "log_operation",
    "transaction",
    # Accounts
    "InvestmentAccountService",
    # Withdrawals
    "WithdrawalService",
    "WithdrawalBalanceManager",
    "WithdrawalErrorCode",
    "WithdrawalFeeService",
    "WithdrawalLifecycleHandler",
    "WithdrawalPreview",
    "WithdrawalQueryService",
    "WithdrawalRequestHandler",
    "WithdrawalSubmission",
    "WithdrawalValidator",
    "ValidationResult",
]
