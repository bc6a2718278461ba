"""
Script: theme_deploy/workspace.py
What: Prepares and removes the scratch directory used to hold a downloaded theme.
Doing: Deletes any leftover `tmp/` directory, recreates it, and removes it once the run finishes.
Why: Theme Kit writes files and a `config.yml` into this directory; stale files would leak into a new theme.
Goal: Start each run from an empty scratch directory without changing the process working directory.
"""

from __future__ import annotations

import shutil
from pathlib import Path


def prepare_workspace(scratch_dir: Path, *, quick_test: bool) -> Path:
    # Quick-test runs keep whatever an earlier run downloaded.
    print("Removing existing tmp directory")
    if scratch_dir.exists() and not quick_test:
        shutil.rmtree(scratch_dir)
    scratch_dir.mkdir(parents=True, exist_ok=True)
    return scratch_dir


def cleanup_workspace(scratch_dir: Path, *, quick_test: bool) -> None:
    if quick_test:
        return
    print("Removing tmp directory")
    shutil.rmtree(scratch_dir, ignore_errors=True)
