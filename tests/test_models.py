from __future__ import annotations

from datetime import date, datetime

import pandas as pd
import pytest

from finance_tracker.models import (
    DuplicateBudgetError,
    ValidationError,
    normalize_category,
    parse_budget,
    parse_transaction,
    to_naive_datetime,
)


def _txn_data(**overrides):
    data = {
        'amount': '42.50',
        'description': 'Groceries',
        'date': '2026-10-05',
        'type': 'expense',
        'category': 'Food & Dining',
    }
    data.update(overrides)
    return data


def _budget_data(**overrides):
    data = {'category': 'Food & Dining', 'budget_amount': 400, 'month': 10, 'year': 2026}
    data.update(overrides)
    return data


def test_parse_transaction_coerces_fields() -> None:
    txn = parse_transaction(_txn_data(amount='$1,250.00', type=' Income ', date=date(2026, 10, 1)))
    assert txn.amount == 1250.0
    assert txn.type == 'income'
    assert txn.date == datetime(2026, 10, 1)
    assert txn.is_income and not txn.is_expense


def test_parse_transaction_defaults_category() -> None:
    txn = parse_transaction(_txn_data(category='  '))
    assert txn.category == 'Other'
    assert parse_transaction(_txn_data(category=None)).category == 'Other'


@pytest.mark.parametrize('missing', ['amount', 'description', 'date', 'type'])
def test_parse_transaction_requires_fields(missing) -> None:
    data = _txn_data()
    data[missing] = ''
    with pytest.raises(ValidationError, match='All fields are required'):
        parse_transaction(data)


@pytest.mark.parametrize('amount', [0, -5, '-0.01'])
def test_parse_transaction_rejects_non_positive_amount(amount) -> None:
    with pytest.raises(ValidationError, match='Amount must be greater than 0'):
        parse_transaction(_txn_data(amount=amount))


def test_parse_transaction_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError, match='Type must be either income or expense'):
        parse_transaction(_txn_data(type='transfer'))


def test_parse_transaction_rejects_bad_date() -> None:
    with pytest.raises(ValidationError):
        parse_transaction(_txn_data(date='not a date'))


def test_parse_budget_valid() -> None:
    budget = parse_budget(_budget_data(month='3', year=2027.0))
    assert budget.month == 3
    assert budget.year == 2027
    assert budget.budget_amount == 400.0


def test_parse_budget_rejects_non_positive_amount() -> None:
    with pytest.raises(ValidationError, match='Budget amount must be greater than 0'):
        parse_budget(_budget_data(budget_amount=0))


@pytest.mark.parametrize('month', [0, 13, 2.5])
def test_parse_budget_rejects_bad_month(month) -> None:
    with pytest.raises(ValidationError, match='Month must be between 1 and 12'):
        parse_budget(_budget_data(month=month))


def test_parse_budget_rejects_old_year() -> None:
    with pytest.raises(ValidationError, match='Valid year is required'):
        parse_budget(_budget_data(year=1999))


def test_parse_budget_requires_category() -> None:
    with pytest.raises(ValidationError, match='All fields are required'):
        parse_budget(_budget_data(category=None))


def test_duplicate_budget_error_is_validation_error() -> None:
    assert issubclass(DuplicateBudgetError, ValidationError)


def test_normalize_category() -> None:
    assert normalize_category(' Travel ') == 'Travel'
    assert normalize_category(None) == 'Other'


def test_to_naive_datetime_drops_offset_as_utc() -> None:
    assert to_naive_datetime('2026-10-06T09:00:00+02:00') == datetime(2026, 10, 6, 7, 0)
    assert to_naive_datetime(pd.Timestamp('2026-10-06 23:30', tz='UTC')) == datetime(2026, 10, 6, 23, 30)
    assert to_naive_datetime(date(2026, 10, 5)) == datetime(2026, 10, 5)
    assert to_naive_datetime('') is None


def test_parse_transaction_stores_naive_date() -> None:
    txn = parse_transaction(_txn_data(date='2026-10-06T09:00:00-05:00'))
    assert txn.date.tzinfo is None
    assert txn.date == datetime(2026, 10, 6, 14, 0)
