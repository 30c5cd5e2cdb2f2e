"""Transaction and budget records plus write-side validation.

Forms and scripts hand raw mappings to :func:`parse_transaction` and
:func:`parse_budget`; both return a validated record or raise
:class:`ValidationError` with a message suitable for showing to the user.
Everything downstream of the store (the analytics in particular) assumes
it only ever sees records that passed through here.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional

import pandas as pd

try:
    from .config import DEFAULT_CATEGORY, MIN_BUDGET_YEAR, TRANSACTION_TYPES
except ImportError:
    from config import DEFAULT_CATEGORY, MIN_BUDGET_YEAR, TRANSACTION_TYPES


class ValidationError(ValueError):
    """A write was rejected; ``str(exc)`` is the human-readable reason."""


class DuplicateBudgetError(ValidationError):
    """A budget already exists for the same category, month and year."""


class RecordNotFoundError(LookupError):
    """No record exists with the requested identifier."""


@dataclass
class Transaction:
    """A single income or expense record."""
    amount: float
    description: str
    date: datetime
    type: str
    category: str = DEFAULT_CATEGORY
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_expense(self) -> bool:
        return self.type == "expense"

    @property
    def is_income(self) -> bool:
        return self.type == "income"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Budget:
    """A spending ceiling for one category in one calendar month."""
    category: str
    budget_amount: float
    month: int
    year: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Insight:
    """A short advisory statement shown on the dashboard."""
    kind: str
    severity: str  # info | success | warning | error
    title: str
    message: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def to_naive_datetime(value: Any) -> Optional[datetime]:
    """Coerce dates, datetimes, timestamps and ISO strings to a naive ``datetime``.

    Offset-aware values are converted to UTC and the offset dropped, so the
    store and the month grouping only ever see naive datetimes.
    """
    if _is_blank(value):
        return None
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day)
    ts = pd.to_datetime(value, errors='coerce')
    if pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.to_pydatetime()


def _to_float(value: Any) -> Optional[float]:
    if isinstance(value, str):
        value = value.strip().replace("$", "").replace(",", "")
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if pd.isna(number):
        return None
    return number


def _to_int(value: Any) -> Optional[int]:
    number = _to_float(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def normalize_category(value: Any) -> str:
    """Return a trimmed category name, falling back to ``Other``."""
    if _is_blank(value):
        return DEFAULT_CATEGORY
    return str(value).strip()


def parse_transaction(data: Mapping[str, Any]) -> Transaction:
    """Validate a raw transaction mapping and build a :class:`Transaction`.

    Raises:
        ValidationError: If a required field is missing or out of range.
    """
    required = ('amount', 'description', 'date', 'type')
    if any(_is_blank(data.get(key)) for key in required):
        raise ValidationError("All fields are required")

    amount = _to_float(data.get('amount'))
    if amount is None:
        raise ValidationError("Amount must be a number")
    if amount <= 0:
        raise ValidationError("Amount must be greater than 0")

    txn_type = str(data.get('type')).strip().lower()
    if txn_type not in TRANSACTION_TYPES:
        raise ValidationError("Type must be either income or expense")

    when = to_naive_datetime(data.get('date'))
    if when is None:
        raise ValidationError("Date must be a valid calendar date")

    return Transaction(
        amount=amount,
        description=str(data.get('description')).strip(),
        date=when,
        type=txn_type,
        category=normalize_category(data.get('category')),
        id=data.get('id'),
    )


def parse_budget(data: Mapping[str, Any]) -> Budget:
    """Validate a raw budget mapping and build a :class:`Budget`.

    Raises:
        ValidationError: If a required field is missing or out of range.
    """
    required = ('category', 'budget_amount', 'month', 'year')
    if any(_is_blank(data.get(key)) for key in required):
        raise ValidationError("All fields are required")

    amount = _to_float(data.get('budget_amount'))
    if amount is None:
        raise ValidationError("Budget amount must be a number")
    if amount <= 0:
        raise ValidationError("Budget amount must be greater than 0")

    month = _to_int(data.get('month'))
    if month is None or month < 1 or month > 12:
        raise ValidationError("Month must be between 1 and 12")

    year = _to_int(data.get('year'))
    if year is None or year < MIN_BUDGET_YEAR:
        raise ValidationError("Valid year is required")

    return Budget(
        category=str(data.get('category')).strip(),
        budget_amount=amount,
        month=month,
        year=year,
        id=data.get('id'),
    )
