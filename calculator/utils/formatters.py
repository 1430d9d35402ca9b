"""
Formatting utilities for amounts, percentages and fee summaries.

Money is formatted from Decimal directly; values are never passed
through float on the way to the user.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Union


if TYPE_CHECKING:
    from calculator.core.models import FeeBreakdown


def format_currency(
    amount: Union[Decimal, int, str],
    currency: str = "$",
    decimals: int = 2,
) -> str:
    """
    Format an amount as currency.

    Half-up rounding is used for display only; stored values keep
    full precision.

    Args:
        amount: Amount to format
        currency: Symbol or code ("$", "USD")
        decimals: Digits after the decimal point

    Returns:
        Formatted string

    Example:
        >>> format_currency(Decimal("1234.5"))
        '$1,234.50'
        >>> format_currency(Decimal("10.005"), currency="USD")
        '10.01 USD'
    """
    value = _quantize(amount, decimals)
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.{decimals}f}"

    if currency in ("$", "€", "£"):
        return f"{sign}{currency}{formatted}"
    return f"{sign}{formatted} {currency}"


def format_percentage(
    value: Union[Decimal, int, str, None],
    decimals: int = 2,
) -> str:
    """
    Format a percentage value (already in percent units).

    Example:
        >>> format_percentage(Decimal("5"))
        '5.00%'
        >>> format_percentage(None, decimals=0)
        '0%'
    """
    return f"{_quantize(value or 0, decimals):.{decimals}f}%"


def format_days(days: int) -> str:
    """
    Format a day count.

    Example:
        >>> format_days(1)
        '1 day'
        >>> format_days(90)
        '90 days'
    """
    if days <= 0:
        return "0 days"
    return "1 day" if days == 1 else f"{days} days"


def format_fee_breakdown(
    breakdown: "FeeBreakdown",
    currency: str = "$",
) -> str:
    """
    Format a fee breakdown as the withdrawal summary shown before submit.

    The penalty line only appears when a penalty applies.

    Args:
        breakdown: FeeBreakdown from the calculator
        currency: Currency symbol

    Returns:
        Multi-line summary
    """
    lines = [
        "Withdrawal Summary",
        f"  Requested Amount:         {format_currency(breakdown.requested_amount, currency)}",
        f"  Processing Fee:           -{format_currency(breakdown.processing_fee, currency)}",
    ]
    if breakdown.has_penalty:
        lines.append(
            f"  Early Withdrawal Penalty: -{format_currency(breakdown.penalty_fee, currency)}"
        )
    lines.append(
        f"  Net Amount:               {format_currency(breakdown.net_amount, currency)}"
    )
    return "\n".join(lines)


def _quantize(value: Union[Decimal, int, str], decimals: int) -> Decimal:
    exponent = Decimal(1).scaleb(-decimals)
    return Decimal(str(value)).quantize(exponent, rounding=ROUND_HALF_UP)
