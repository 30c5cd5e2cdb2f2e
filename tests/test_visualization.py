from datetime import date, datetime

from finance_tracker import analytics
from finance_tracker.models import Budget, Transaction
from finance_tracker.visualization import (
    create_budget_comparison_chart,
    create_category_pie_chart,
    create_monthly_overview_chart,
)


def _sample():
    return [
        Transaction(amount=1000, description='Pay', date=datetime(2026, 10, 1), type='income'),
        Transaction(amount=50, description='Food', date=datetime(2026, 10, 2), type='expense', category='Food & Dining'),
        Transaction(amount=20, description='Bus', date=datetime(2026, 9, 2), type='expense', category='Transportation'),
    ]


def test_monthly_overview_chart_has_two_series() -> None:
    fig = create_monthly_overview_chart(analytics.monthly_series(_sample(), today=date(2026, 10, 19)))
    assert [trace.name for trace in fig.data] == ['Expenses', 'Income']
    assert len(fig.data[0].x) == 6
    assert fig.layout.barmode == 'group'


def test_category_pie_chart_is_donut() -> None:
    fig = create_category_pie_chart(analytics.category_breakdown(_sample()))
    assert fig.data[0].hole == 0.4
    assert list(fig.data[0].labels) == ['Food & Dining', 'Transportation']


def test_budget_comparison_chart() -> None:
    budgets = [Budget(category='Food & Dining', budget_amount=40, month=10, year=2026)]
    comparison = analytics.budget_comparison(_sample(), budgets, 10, 2026)
    fig = create_budget_comparison_chart(comparison)
    assert [trace.name for trace in fig.data] == ['Budget', 'Actual']
    assert list(fig.data[1].y) == [50.0]


def test_empty_input_gives_placeholder_figure() -> None:
    for builder in (create_monthly_overview_chart, create_category_pie_chart, create_budget_comparison_chart):
        fig = builder([])
        assert len(fig.data) == 0
        assert fig.layout.title.text == 'No data to display'
