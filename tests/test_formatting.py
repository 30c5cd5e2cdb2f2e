from finance_tracker.formatting import (
    escape_dollar_for_markdown,
    format_currency,
    format_signed_amount,
    month_label,
    month_name,
    severity_color,
)


def test_format_currency() -> None:
    assert format_currency(1234.5) == '$1,234.50'
    assert format_currency(-5) == '-$5.00'
    assert format_currency(1234.5, include_sign=False) == '1,234.50'


def test_format_signed_amount() -> None:
    assert format_signed_amount(10, 'income') == '+$10.00'
    assert format_signed_amount(10, 'expense') == '-$10.00'


def test_escape_dollar_for_markdown() -> None:
    assert escape_dollar_for_markdown(3) == '\\$3.00'


def test_month_helpers() -> None:
    assert month_name(10) == 'October'
    assert month_label(2026, 10) == 'Oct 2026'
    assert severity_color('unknown') == severity_color('info')
