"""cephalopod package.

Board model, memoized depth-bounded search, golden-case runner, and a small CLI
for the 3x3 capture puzzle.

Convenience imports are exposed for common workflows.
"""

from .board import InvalidInput, fingerprint, initial, successors, terminal_value
from .cases import Case, load_case, parse_case
from .search import MemoCache, SearchKey, SearchStats, naive_search, search

__all__ = [
    "InvalidInput",
    "initial",
    "successors",
    "fingerprint",
    "terminal_value",
    "search",
    "naive_search",
    "MemoCache",
    "SearchKey",
    "SearchStats",
    "Case",
    "parse_case",
    "load_case",
]
