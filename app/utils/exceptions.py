"""
Exception handling utilities.

Defines the project's exception types and how background jobs classify
database failures.
"""

from sqlalchemy.exc import DBAPIError, OperationalError


class SecurityError(Exception):
    """Raised when a security-critical operation fails."""
    pass


# Connection drops, lock timeouts, failovers: worth another attempt
RETRYABLE_DB_ERRORS = (
    OperationalError,
)


def is_retryable(exc: BaseException) -> bool:
    """
    Check if a database failure is transient.

    Args:
        exc: Exception to check

    Returns:
        True if retrying the operation may succeed
    """
    if isinstance(exc, RETRYABLE_DB_ERRORS):
        return True
    if isinstance(exc, DBAPIError):
        return bool(exc.connection_invalidated)
    return False
