#!/usr/bin/env python3
"""Launcher for the Personal Finance Tracker.

Runs Streamlit with the finance_tracker directory as the app root so the
pages/ subdirectory is discovered automatically.
"""

import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_dir = project_root / "finance_tracker"

if __name__ == "__main__":
    os.chdir(app_dir)
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(project_root), env.get("PYTHONPATH")]))
    raise SystemExit(subprocess.run(
        [sys.executable, "-m", "streamlit", "run", "Home.py", *sys.argv[1:]],
        env=env,
    ).returncode)
