"""Dashboard page: headline numbers, insights and the two overview charts.

Streamlit discovers the other pages from the pages/ directory next to
this file.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import streamlit as st

# Add project root to path for imports
project_root = Path(__file__).parent.parent.resolve()
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from finance_tracker.analytics import FinanceAnalytics
from finance_tracker.formatting import escape_dollar_for_markdown, format_currency, severity_color
from finance_tracker.shared_sidebar import render_shared_sidebar
from finance_tracker.visualization import create_category_pie_chart, create_monthly_overview_chart

SEVERITY_ICONS = {'success': '✅', 'warning': '📈', 'error': '⚠️', 'info': '💡'}


def _render_summary(summary: Dict[str, Any]) -> None:
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("💰 Total Income", format_currency(summary['total_income']))
    col2.metric("💸 Total Expenses", format_currency(summary['total_expenses']))
    col3.metric(
        "📈 Net Amount",
        format_currency(summary['net']),
        delta="Positive" if summary['net'] >= 0 else "Negative",
        delta_color="normal" if summary['net'] >= 0 else "inverse",
    )
    col4.metric("📅 This Month", format_currency(summary['current_month_expenses']))

    left, right = st.columns(2)
    with left:
        st.subheader("🏷️ Top Expense Category")
        top = summary['top_category']
        if top:
            st.markdown(f"**{top['category']}**")
            st.metric("Spent", format_currency(top['total']), label_visibility="collapsed")
        else:
            st.info("No expense data available")

    with right:
        st.subheader("🕒 Recent Transactions")
        if not summary['recent']:
            st.info("No transactions yet")
        for txn in summary['recent']:
            col_a, col_b = st.columns([3, 1])
            col_a.markdown(f"**{txn.description}**  \n{txn.date.strftime('%b %d')}")
            sign = "+" if txn.type == "income" else "-"
            col_b.markdown(f"{sign}{escape_dollar_for_markdown(abs(txn.amount))}")


def _render_insights(insights: List[Dict[str, str]]) -> None:
    st.subheader("💡 Spending Insights")
    if not insights:
        st.info("Add more transactions to get personalized spending insights.")
        return
    for insight in insights:
        icon = SEVERITY_ICONS.get(insight['severity'], '💡')
        color = severity_color(insight['severity'])
        st.markdown(
            f"{icon} **{insight['title']}**: {insight['message']} "
            f"<span style='color:{color};font-weight:600'>{insight['value']}</span>".replace("$", "\\$"),
            unsafe_allow_html=True,
        )


def main() -> None:
    """Render the dashboard."""
    st.set_page_config(page_title="Personal Finance Tracker", page_icon="💰", layout="wide")
    sidebar = render_shared_sidebar()
    transactions = sidebar['transactions']

    st.title("💰 Personal Finance Tracker")
    st.markdown("Track your income and expenses")

    analytics = FinanceAnalytics(transactions, sidebar['budgets'])
    _render_summary(analytics.dashboard_summary())
    _render_insights(analytics.spending_insights())

    col1, col2 = st.columns(2)
    with col1:
        if transactions:
            st.plotly_chart(create_monthly_overview_chart(analytics.monthly_series()), use_container_width=True)
        else:
            st.info("No data to display. Add some transactions to see your monthly overview.")
    with col2:
        breakdown = analytics.category_breakdown()
        if breakdown:
            st.plotly_chart(create_category_pie_chart(breakdown), use_container_width=True)
        else:
            st.info("No expense data to display. Add some expense transactions to see category breakdown.")


if __name__ == "__main__":
    main()
