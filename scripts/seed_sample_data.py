#!/usr/bin/env python3
"""Populate the database with a few months of demo transactions and budgets."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker import db
from finance_tracker.config import configure_logging

logger = logging.getLogger(__name__)

# (description, category, typical amount)
EXPENSE_TEMPLATES = [
    ("Grocery store", "Food & Dining", 85.0),
    ("Coffee shop", "Food & Dining", 6.5),
    ("Gas station", "Transportation", 45.0),
    ("Transit pass", "Transportation", 90.0),
    ("Online order", "Shopping", 60.0),
    ("Movie tickets", "Entertainment", 30.0),
    ("Electric bill", "Bills & Utilities", 110.0),
    ("Pharmacy", "Healthcare", 25.0),
]
MONTHLY_BUDGETS = {
    "Food & Dining": 400.0,
    "Transportation": 200.0,
    "Shopping": 150.0,
    "Entertainment": 100.0,
    "Bills & Utilities": 150.0,
}


def build_sample_transactions(months: int, seed: int, today: date) -> List[Dict[str, object]]:
    rng = np.random.default_rng(seed)
    current = pd.Timestamp(today).to_period('M')
    rows: List[Dict[str, object]] = []
    for offset in range(months - 1, -1, -1):
        period = current - offset
        last_day = period.days_in_month if offset else today.day
        rows.append({
            'description': "Monthly salary",
            'amount': 3200.0,
            'date': period.start_time.date(),
            'type': 'income',
            'category': 'Other',
        })
        for description, category, typical in EXPENSE_TEMPLATES:
            for _ in range(int(rng.integers(1, 4))):
                day = int(rng.integers(1, last_day + 1))
                amount = round(float(typical * rng.uniform(0.6, 1.4)), 2)
                rows.append({
                    'description': description,
                    'amount': amount,
                    'date': date(period.year, period.month, day),
                    'type': 'expense',
                    'category': category,
                })
    return rows


def main(months: int = 3, seed: int = 42, reset: bool = False) -> None:
    db.init_db()
    if reset:
        db.clear_database()

    today = date.today()
    for row in build_sample_transactions(months, seed, today):
        db.create_transaction(row)

    existing = {(b.category, b.month, b.year) for b in db.list_budgets(today.month, today.year)}
    for category, amount in MONTHLY_BUDGETS.items():
        if (category, today.month, today.year) in existing:
            logger.info("Budget for %s already exists, skipping", category)
            continue
        db.create_budget({'category': category, 'budget_amount': amount, 'month': today.month, 'year': today.year})

    totals = db.counts()
    print(f"Database now holds {totals['transactions']} transactions and {totals['budgets']} budgets.")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Seed the finance tracker with demo data.')
    parser.add_argument('--months', type=int, default=3, help='How many months of history to generate')
    parser.add_argument('--seed', type=int, default=42, help='Random seed for amounts and days')
    parser.add_argument('--reset', action='store_true', help='Clear existing data first')
    parser.add_argument('--log-level', default=None, help='Override FINTRACK_LOG_LEVEL')
    args = parser.parse_args()
    configure_logging(args.log_level)
    main(months=args.months, seed=args.seed, reset=args.reset)
