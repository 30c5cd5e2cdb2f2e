"""Shared sidebar components for the multi-page tracker.

Every page calls :func:`render_shared_sidebar` first.  It reloads the full
transaction and budget lists from the store on each run, so the pages always
aggregate fresh data, and it owns the month/year selection used by the
budget views.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date
from typing import Any, Dict

import streamlit as st

try:
    from . import db
    from .config import configure_logging, get_db_path
    from .formatting import month_name
except ImportError:
    import sys
    from pathlib import Path
    parent_dir = Path(__file__).parent
    if str(parent_dir) not in sys.path:
        sys.path.insert(0, str(parent_dir))
    import db
    from config import configure_logging, get_db_path
    from formatting import month_name

logger = logging.getLogger(__name__)


def _rerun() -> None:
    if hasattr(st, 'rerun'):
        st.rerun()
    else:
        st.experimental_rerun()


def load_records() -> Dict[str, Any]:
    """Fetch every transaction and budget; on database errors return empty lists."""
    try:
        return {
            'transactions': db.list_transactions(),
            'budgets': db.list_budgets(),
            'error': None,
        }
    except sqlite3.Error as e:
        logger.exception("Failed to load records from %s", get_db_path())
        return {'transactions': [], 'budgets': [], 'error': f"Failed to load data: {e}"}


def render_period_selector() -> Dict[str, int]:
    """Month/year pickers shared across pages (defaults to the current month)."""
    today = date.today()
    st.session_state.setdefault('selected_month', today.month)
    st.session_state.setdefault('selected_year', today.year)

    st.sidebar.subheader("📅 Budget Month")
    col1, col2 = st.sidebar.columns(2)
    with col1:
        month = st.selectbox(
            "Month",
            options=list(range(1, 13)),
            index=st.session_state['selected_month'] - 1,
            format_func=month_name,
            key="sidebar_month",
        )
    with col2:
        year = st.number_input(
            "Year",
            min_value=2000,
            max_value=today.year + 10,
            value=st.session_state['selected_year'],
            step=1,
            key="sidebar_year",
        )
    st.session_state['selected_month'] = int(month)
    st.session_state['selected_year'] = int(year)
    return {'month': int(month), 'year': int(year)}


def confirm_delete(key: str, warning: str, label: str = "🗑️ Delete", help: str | None = None) -> bool:
    """Two-step delete button; returns True only on the run where the user confirms."""
    state_key = f"confirm_{key}"
    if st.button(label, key=key, help=help):
        st.session_state[state_key] = True

    if not st.session_state.get(state_key, False):
        return False

    st.warning(warning)
    if st.button("✅ Confirm", key=f"{key}_confirm"):
        st.session_state[state_key] = False
        return True
    if st.button("❌ Cancel", key=f"{key}_cancel"):
        st.session_state[state_key] = False
        _rerun()
    return False


def _render_database_management() -> None:
    st.sidebar.subheader("🗄️ Database Management")
    if st.sidebar.button("🗑️ Clear Database", help="Delete all transactions and budgets"):
        st.session_state.confirm_clear = True

    if st.session_state.get('confirm_clear', False):
        st.sidebar.warning("⚠️ This will delete ALL transactions and budgets!")
        col1, col2 = st.sidebar.columns(2)
        with col1:
            if st.button("✅ Confirm", key="confirm_clear_btn"):
                if db.clear_database():
                    st.session_state.confirm_clear = False
                    st.sidebar.success("Database cleared successfully!")
                    _rerun()
        with col2:
            if st.button("❌ Cancel", key="cancel_clear_btn"):
                st.session_state.confirm_clear = False
                _rerun()


def render_shared_sidebar() -> Dict[str, Any]:
    """Render shared sidebar elements available on all pages.

    Returns:
        Dict with keys: 'transactions', 'budgets', 'month', 'year', 'error'
    """
    configure_logging()
    st.sidebar.title("💰 Finance Tracker")

    period = render_period_selector()
    records = load_records()
    if records['error']:
        st.error(records['error'])

    counts = {'transactions': len(records['transactions']), 'budgets': len(records['budgets'])}
    st.sidebar.caption(f"{counts['transactions']} transactions · {counts['budgets']} budgets")
    _render_database_management()

    return {**records, **period}
