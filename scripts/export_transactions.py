#!/usr/bin/env python3
"""Write every transaction to a CSV file."""

from __future__ import annotations

import argparse
import sys
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from finance_tracker import db
from finance_tracker.config import EXPORTS_DIR, configure_logging, ensure_data_directories


def export_transactions(output: Path) -> int:
    """Export all transactions to ``output``; returns the number of rows written."""
    df = db.fetch_transactions_frame()
    output.parent.mkdir(parents=True, exist_ok=True)
    if not df.empty:
        df['Date'] = df['Date'].dt.strftime('%Y-%m-%d')
    df.drop(columns=['id']).to_csv(output, index=False)
    return len(df)


def main(output: Path | None = None) -> None:
    if output is None:
        ensure_data_directories()
        output = EXPORTS_DIR / f"transactions_{date.today():%Y%m%d}.csv"
    count = export_transactions(output)
    if count == 0:
        print(f"No transactions yet; wrote header only to {output}")
    else:
        print(f"Exported {count} transactions to {output}")


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Export transactions to CSV.')
    parser.add_argument('--output', type=Path, default=None, help='Destination CSV path')
    args = parser.parse_args()
    configure_logging()
    main(output=args.output)
