"""
Withdrawal services package.

This package provides modular withdrawal management functionality:
- withdrawal_validator: Validation logic and error codes
  - withdrawal_basic_checks: Individual checks (status, amount, window)
- withdrawal_fee_service: Fee preview without creating a request
- withdrawal_request_handler: Withdrawal request creation
- withdrawal_lifecycle_handler: Approval, rejection, cancellation, completion
- withdrawal_balance_manager: Locked balance deduction on completion
- withdrawal_query_service: Queues and history
- withdrawal_helpers: Calculator and snapshot factories

All components are re-exported for easy importing.
"""

from app.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from app.services.withdrawal.withdrawal_fee_service import (
    WithdrawalFeeService,
    WithdrawalPreview,
)
from app.services.withdrawal.withdrawal_lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from app.services.withdrawal.withdrawal_query_service import (
    WithdrawalQueryService,
)
from app.services.withdrawal.withdrawal_request_handler import (
    WithdrawalRequestHandler,
    WithdrawalSubmission,
)
from app.services.withdrawal.withdrawal_validator import (
    ValidationResult,
    WithdrawalErrorCode,
    WithdrawalValidator,
)


__all__ = [
    "WithdrawalBalanceManager",
    "WithdrawalFeeService",
    "WithdrawalPreview",
    "WithdrawalValidator",
    "ValidationResult",
    "WithdrawalErrorCode",
    "WithdrawalRequestHandler",
    "WithdrawalSubmission",
    "WithdrawalLifecycleHandler",
    "WithdrawalQueryService",
]
