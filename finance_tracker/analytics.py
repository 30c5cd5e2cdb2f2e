"""Dashboard aggregations over transaction and budget lists.

Every calculation here works on lists that the caller already fetched from
the store.  Nothing is read from or written to the database and the input
lists are never modified.  Records may be :class:`~finance_tracker.models.Transaction`
/ :class:`~finance_tracker.models.Budget` instances or plain mappings with the
same field names.

Results are plain lists and dictionaries so that Streamlit pages, Plotly
figure builders and tests can consume them without knowing about pandas.
Empty inputs always produce empty or zero-valued results, missing
categories count as ``Other`` and a zero denominator yields a percentage of
0 rather than an error.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

try:
    from .config import MAX_INSIGHTS, RECENT_TRANSACTION_COUNT, TREND_MONTHS
    from .formatting import format_currency
    from .models import Insight, normalize_category, to_naive_datetime
except ImportError:
    from config import MAX_INSIGHTS, RECENT_TRANSACTION_COUNT, TREND_MONTHS
    from formatting import format_currency
    from models import Insight, normalize_category, to_naive_datetime

DateLike = Union[date, datetime, pd.Timestamp, str, None]

FRAME_COLUMNS = ['date', 'amount', 'type', 'category', 'description']


def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def _reference_period(today: DateLike = None) -> pd.Period:
    stamp = pd.Timestamp.now() if today is None else pd.Timestamp(today)
    return stamp.to_period('M')


def transactions_frame(transactions: Iterable[Any]) -> pd.DataFrame:
    """Build a tidy DataFrame (one row per record, input order preserved)."""
    rows = [
        {
            'date': to_naive_datetime(_field(t, 'date')),
            'amount': _field(t, 'amount'),
            'type': _field(t, 'type'),
            'category': normalize_category(_field(t, 'category')),
            'description': _field(t, 'description'),
        }
        for t in transactions
    ]
    frame = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    frame['date'] = pd.to_datetime(frame['date'], errors='coerce')
    frame['amount'] = pd.to_numeric(frame['amount'], errors='coerce').fillna(0.0).astype(float)
    frame['type'] = frame['type'].fillna('').astype(str)
    frame['period'] = frame['date'].dt.to_period('M')
    return frame


def _category_totals(expenses: pd.DataFrame) -> pd.Series:
    """Sum expense amounts per category, largest first (ties alphabetical)."""
    if expenses.empty:
        return pd.Series(dtype=float)
    totals = expenses.groupby('category')['amount'].sum()
    return totals.sort_values(ascending=False, kind='mergesort')


class FinanceAnalytics:
    """Aggregations for the dashboard, computed from already-loaded lists."""

    def __init__(
        self,
        transactions: Iterable[Any],
        budgets: Optional[Iterable[Any]] = None,
        today: DateLike = None,
    ):
        self.transactions = list(transactions or [])
        self.budgets = list(budgets or [])
        self.current_period = _reference_period(today)
        self.data = transactions_frame(self.transactions)

    # ------------------------------------------------------------------
    # Row selections
    # ------------------------------------------------------------------
    def _expense_rows(self, df: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        source = df if df is not None else self.data
        return source[source['type'] == 'expense']

    def _income_rows(self, df: Optional[pd.DataFrame] = None) -> pd.DataFrame:
        source = df if df is not None else self.data
        return source[source['type'] == 'income']

    def _rows_in_period(self, period: pd.Period) -> pd.DataFrame:
        return self.data[self.data['period'] == period]

    def _budgets_for(self, month: int, year: int) -> List[Any]:
        return [
            b for b in self.budgets
            if int(_field(b, 'month')) == int(month) and int(_field(b, 'year')) == int(year)
        ]

    # ------------------------------------------------------------------
    # Aggregations
    # ------------------------------------------------------------------
    def monthly_series(self) -> List[Dict[str, Any]]:
        """Income, expenses and net for the trailing months, oldest first."""
        series = []
        for offset in range(TREND_MONTHS - 1, -1, -1):
            period = self.current_period - offset
            month_rows = self._rows_in_period(period)
            income = float(self._income_rows(month_rows)['amount'].sum())
            expenses = float(self._expense_rows(month_rows)['amount'].sum())
            series.append({
                'month': period.strftime('%b %Y'),
                'income': income,
                'expenses': expenses,
                'net': income - expenses,
            })
        return series

    def category_breakdown(self) -> List[Dict[str, Any]]:
        """Total expense per category, largest first."""
        totals = _category_totals(self._expense_rows())
        return [{'category': category, 'total': float(total)} for category, total in totals.items()]

    def budget_comparison(self, month: Optional[int] = None, year: Optional[int] = None) -> List[Dict[str, Any]]:
        """Compare each budget of the given month with what was actually spent.

        ``remaining`` bottoms out at 0 and ``percentage`` is capped at 100,
        so an overspent budget reports 0 remaining, 100 percent and
        ``over_budget=True``.  A zero budget reports 0 percent.
        """
        month = month or self.current_period.month
        year = year or self.current_period.year
        month_budgets = self._budgets_for(month, year)
        if not month_budgets:
            return []

        period = pd.Period(year=int(year), month=int(month), freq='M')
        spent = _category_totals(self._expense_rows(self._rows_in_period(period)))

        comparison = []
        for budget in month_budgets:
            category = normalize_category(_field(budget, 'category'))
            budget_amount = float(_field(budget, 'budget_amount') or 0.0)
            actual = float(spent.get(category, 0.0))
            percentage = (actual / budget_amount * 100) if budget_amount > 0 else 0.0
            comparison.append({
                'category': category,
                'budget': budget_amount,
                'actual': actual,
                'remaining': max(0.0, budget_amount - actual),
                'percentage': min(100.0, percentage),
                'over_budget': actual > budget_amount,
            })
        return sorted(comparison, key=lambda row: (row['category'].lower(), row['category']))

    def dashboard_summary(self) -> Dict[str, Any]:
        """Headline numbers for the dashboard cards."""
        if self.data.empty:
            return {
                'total_income': 0.0,
                'total_expenses': 0.0,
                'net': 0.0,
                'current_month_expenses': 0.0,
                'recent': [],
                'top_category': None,
            }

        income = float(self._income_rows()['amount'].sum())
        expenses = float(self._expense_rows()['amount'].sum())
        current_month = self._expense_rows(self._rows_in_period(self.current_period))

        newest_first = self.data.sort_values('date', ascending=False, kind='mergesort', na_position='last')
        recent = [self.transactions[i] for i in newest_first.index[:RECENT_TRANSACTION_COUNT]]

        breakdown = self.category_breakdown()
        return {
            'total_income': income,
            'total_expenses': expenses,
            'net': income - expenses,
            'current_month_expenses': float(current_month['amount'].sum()),
            'recent': recent,
            'top_category': breakdown[0] if breakdown else None,
        }

    def spending_insights(self) -> List[Dict[str, str]]:
        """Up to four advisory statements about the current month.

        Order is fixed: month-over-month trend, budget status, top category,
        average expense size.  Each is skipped when its inputs are missing.
        """
        if self.data.empty:
            return []

        current = self.current_period
        current_expenses = self._expense_rows(self._rows_in_period(current))
        previous_expenses = self._expense_rows(self._rows_in_period(current - 1))
        current_total = float(current_expenses['amount'].sum())
        previous_total = float(previous_expenses['amount'].sum())
        current_by_category = _category_totals(current_expenses)

        insights: List[Insight] = []

        if previous_total > 0:
            change = (current_total - previous_total) / previous_total * 100
            increased = change > 0
            insights.append(Insight(
                kind='monthly_trend',
                severity='warning' if increased else 'success',
                title='Monthly Spending Trend',
                message=(
                    f"Your spending {'increased' if increased else 'decreased'} by "
                    f"{abs(change):.1f}% compared to last month"
                ),
                value=f"{'+' if increased else ''}{change:.1f}%",
            ))

        month_budgets = self._budgets_for(current.month, current.year)
        if month_budgets:
            over_count = 0
            overage = 0.0
            for budget in month_budgets:
                category = normalize_category(_field(budget, 'category'))
                variance = float(current_by_category.get(category, 0.0)) - float(_field(budget, 'budget_amount') or 0.0)
                if variance > 0:
                    over_count += 1
                    overage += variance
            if over_count:
                noun = 'category' if over_count == 1 else 'categories'
                insights.append(Insight(
                    kind='budget_alert',
                    severity='error',
                    title='Budget Alert',
                    message=f"You're over budget in {over_count} {noun}",
                    value=f"{format_currency(overage)} over",
                ))
            else:
                insights.append(Insight(
                    kind='budget_ok',
                    severity='success',
                    title='Budget Status',
                    message="You're staying within your budgets this month!",
                    value='On track',
                ))

        if not current_by_category.empty:
            top_category = current_by_category.index[0]
            insights.append(Insight(
                kind='top_category',
                severity='info',
                title='Top Spending Category',
                message=f"{top_category} is your highest expense category this month",
                value=format_currency(float(current_by_category.iloc[0])),
            ))

        if len(current_expenses):
            insights.append(Insight(
                kind='average_transaction',
                severity='info',
                title='Average Transaction',
                message='Your average expense transaction this month',
                value=format_currency(current_total / len(current_expenses)),
            ))

        return [insight.to_dict() for insight in insights[:MAX_INSIGHTS]]


def monthly_series(transactions: Iterable[Any], today: DateLike = None) -> List[Dict[str, Any]]:
    return FinanceAnalytics(transactions, today=today).monthly_series()


def category_breakdown(transactions: Iterable[Any]) -> List[Dict[str, Any]]:
    return FinanceAnalytics(transactions).category_breakdown()


def budget_comparison(
    transactions: Iterable[Any],
    budgets: Iterable[Any],
    month: int,
    year: int,
) -> List[Dict[str, Any]]:
    return FinanceAnalytics(transactions, budgets).budget_comparison(month, year)


def dashboard_summary(transactions: Iterable[Any], today: DateLike = None) -> Dict[str, Any]:
    return FinanceAnalytics(transactions, today=today).dashboard_summary()


def spending_insights(
    transactions: Iterable[Any],
    budgets: Optional[Iterable[Any]] = None,
    today: DateLike = None,
) -> List[Dict[str, str]]:
    return FinanceAnalytics(transactions, budgets, today=today).spending_insights()
