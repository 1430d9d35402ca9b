"""
Utility functions for calculator.

Formatting helpers for amounts, percentages and fee summaries.
"""

from calculator.utils.formatters import (
    format_currency,
    format_days,
    format_fee_breakdown,
    format_percentage,
)

__all__ = [
    "format_currency",
    "format_percentage",
    "format_days",
    "format_fee_breakdown",
]
