"""Formatting utilities for currency and text display."""

from __future__ import annotations

import calendar
from typing import Union

SEVERITY_COLORS = {
    'success': '#16a34a',
    'warning': '#ca8a04',
    'error': '#dc2626',
    'info': '#2563eb',
}


def escape_dollar_for_markdown(amount: float) -> str:
    """Format a dollar amount and escape the dollar sign for markdown rendering.

    Streamlit markdown treats ``$`` as a LaTeX delimiter, so amounts shown
    through ``st.markdown`` need the sign escaped.

    Example:
        >>> escape_dollar_for_markdown(1234.56)
        '\\$1,234.56'
    """
    return format_currency(amount).replace("$", "\\$")


def format_currency(amount: Union[float, int], include_sign: bool = True) -> str:
    """Format a currency amount with thousands separators.

    Negative amounts keep the minus in front of the dollar sign.

    Example:
        >>> format_currency(1234.56)
        '$1,234.56'
        >>> format_currency(-5)
        '-$5.00'
        >>> format_currency(1234.56, include_sign=False)
        '1,234.56'
    """
    formatted = f"{abs(amount):,.2f}"
    prefix = "-" if amount < 0 else ""
    return f"{prefix}${formatted}" if include_sign else f"{prefix}{formatted}"


def format_signed_amount(amount: float, txn_type: str) -> str:
    """Render a transaction amount as ``+$10.00`` for income, ``-$10.00`` otherwise."""
    sign = "+" if txn_type == "income" else "-"
    return f"{sign}{format_currency(abs(amount))}"


def month_name(month: int) -> str:
    """Full English month name for 1-12."""
    return calendar.month_name[month]


def month_label(year: int, month: int) -> str:
    return f"{calendar.month_abbr[month]} {year}"


def severity_color(severity: str) -> str:
    return SEVERITY_COLORS.get(severity, SEVERITY_COLORS['info'])
