"""Top‑level package for the Personal Finance Tracker.

This file makes the directory a Python package and exposes
convenient names.  The primary modules are:

* ``models`` – transaction/budget records and write-side validation
* ``db`` – the SQLite store for transactions and budgets
* ``analytics`` – dashboard aggregations over the loaded lists
* ``visualization`` – functions that generate Plotly figures

To run the dashboard from the command line you can execute:

```bash
python run_dashboard.py
```
"""

from . import analytics  # noqa: F401  # re-exported for convenience
from . import models  # noqa: F401  # re-exported for convenience
from . import visualization  # noqa: F401  # re-exported for convenience


__all__ = ["analytics", "models", "visualization"]
