"""Path helpers for golden fixtures, reports and provenance metadata.

Environment variables win; otherwise paths resolve against the project checkout
(the directory whose pyproject.toml declares this package), falling back to the
current directory when installed as a plain wheel.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

PROJECT_MARKER = 'name = "cephalopod"'


def _is_project_root(path: Path) -> bool:
    pyproject = path / "pyproject.toml"
    return pyproject.is_file() and PROJECT_MARKER in pyproject.read_text()


def _find_project_root(start: Path) -> Path | None:
    for cur in [start, *start.parents]:
        if _is_project_root(cur):
            return cur
    return None


def repo_root() -> Path:
    """Project checkout root.

    Order: env var CEPHALOPOD_REPO_ROOT -> ancestor of this file holding the
    project's pyproject.toml -> same search from CWD -> CWD.
    """
    env = os.getenv("CEPHALOPOD_REPO_ROOT")
    if env:
        return Path(env)
    for start in (Path(__file__).resolve().parent, Path.cwd()):
        root = _find_project_root(start)
        if root is not None:
            return root
    return Path.cwd()


def fixtures_dir() -> Path:
    p = os.getenv("CEPHALOPOD_FIXTURES")
    return Path(p) if p else repo_root() / "tests" / "data"


def reports_dir() -> Path:
    p = os.getenv("CEPHALOPOD_REPORTS")
    return Path(p) if p else repo_root() / "reports"


def get_git_commit() -> str | None:
    """Commit of the checkout the fixtures came from, or None when not under git."""
    try:
        out = subprocess.check_output(
            ["git", "-C", str(repo_root()), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
    except (OSError, subprocess.SubprocessError):
        return None
    return out.strip() or None
