"""Plotly visualisation helpers for the finance tracker.

Each function accepts the plain list/dict output of the matching
aggregation in :mod:`finance_tracker.analytics` and returns a
``plotly.graph_objects.Figure`` that Streamlit renders with
``st.plotly_chart``.  Empty input produces a blank figure titled
"No data to display" instead of raising.
"""

from __future__ import annotations

from typing import Any, Dict, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

INCOME_COLOR = '#22c55e'
EXPENSE_COLOR = '#ef4444'
BUDGET_COLOR = '#3b82f6'
CATEGORY_COLORS = [
    '#0088FE', '#00C49F', '#FFBB28', '#FF8042', '#8884D8', '#82CA9D',
    '#FFC658', '#FF7300', '#8DD1E1', '#D0743C', '#FF6B9D',
]


def _empty_figure(title: str = "No data to display") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title=title)
    return fig


def create_monthly_overview_chart(series: Sequence[Dict[str, Any]], title: str | None = None) -> go.Figure:
    """Grouped income/expense bars for each month of the trailing window.

    Parameters
    ----------
    series : sequence of dict
        Output of :func:`analytics.monthly_series` (``month``, ``income``,
        ``expenses``, ``net``), oldest first.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        Grouped bar chart.
    """
    if not series:
        return _empty_figure()
    df = pd.DataFrame(list(series))
    fig = go.Figure()
    fig.add_trace(go.Bar(name='Expenses', x=df['month'], y=df['expenses'], marker_color=EXPENSE_COLOR))
    fig.add_trace(go.Bar(name='Income', x=df['month'], y=df['income'], marker_color=INCOME_COLOR))
    fig.update_layout(
        title=title or "Monthly Overview",
        barmode='group',
        xaxis_title="Month",
        yaxis_title="Amount",
        yaxis_tickprefix='$',
    )
    return fig


def create_category_pie_chart(breakdown: Sequence[Dict[str, Any]], title: str | None = None) -> go.Figure:
    """Donut chart of expense totals per category.

    Parameters
    ----------
    breakdown : sequence of dict
        Output of :func:`analytics.category_breakdown` (``category``, ``total``).
    title : str, optional
        Chart title.
    """
    if not breakdown:
        return _empty_figure()
    df = pd.DataFrame(list(breakdown))
    fig = px.pie(
        df,
        names='category',
        values='total',
        hole=0.4,
        color_discrete_sequence=CATEGORY_COLORS,
    )
    fig.update_traces(textposition='inside', textinfo='percent+label')
    fig.update_layout(title=title or "Expense Categories")
    return fig


def create_budget_comparison_chart(comparison: Sequence[Dict[str, Any]], title: str | None = None) -> go.Figure:
    """Budget vs actual bars per category.

    Parameters
    ----------
    comparison : sequence of dict
        Output of :func:`analytics.budget_comparison`.
    title : str, optional
        Chart title.
    """
    if not comparison:
        return _empty_figure()
    df = pd.DataFrame(list(comparison))
    fig = go.Figure()
    fig.add_trace(go.Bar(name='Budget', x=df['category'], y=df['budget'], marker_color=BUDGET_COLOR))
    fig.add_trace(go.Bar(name='Actual', x=df['category'], y=df['actual'], marker_color=EXPENSE_COLOR))
    fig.update_layout(
        title=title or "Budget vs Actual",
        barmode='group',
        xaxis_tickangle=-45,
        yaxis_title="Amount",
        yaxis_tickprefix='$',
    )
    return fig
