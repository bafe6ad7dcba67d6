"""
Exact enumeration helpers around the search.

These walk the same transition graph as cephalopod.search but keep the
structure instead of folding it into a checksum: which (board, depth) pairs
get cached, and which terminal boards are reached by how many paths.
"""
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Set

import numpy as np

from .board import (
    CELLS,
    MAX_VALUE,
    MODULO_MASK,
    SIZE,
    Board,
    fingerprint,
    is_full,
    successors,
    terminal_value,
    validate_board,
)
from .search import SearchKey, validate_depth


def reachable_keys(board: Board, depth: int) -> Set[SearchKey]:
    """Non-terminal (fingerprint, remaining) pairs reachable within ``depth`` moves.

    A search with a fresh cache stores exactly one entry per element.
    """
    board = validate_board(board)
    depth = validate_depth(depth)
    seen: Set[SearchKey] = set()
    stack = [(board, depth)]
    while stack:
        b, remaining = stack.pop()
        if remaining == 0 or is_full(b):
            continue
        key = SearchKey(fingerprint(b), remaining)
        if key in seen:
            continue
        seen.add(key)
        for child in successors(b):
            stack.append((child, remaining - 1))
    return seen


def terminal_frontier(board: Board, depth: int) -> Counter:
    """Terminal boards reached from ``board``, mapped to the number of paths reaching them.

    Every cached (board, remaining) pair keeps its own frontier Counter, so memory
    is roughly keys x frontier size. Fine for small depths; on open boards past
    depth ~10 use search() for the checksum instead.
    """
    board = validate_board(board)
    depth = validate_depth(depth)
    memo: Dict[SearchKey, Counter] = {}

    def walk(b: Board, remaining: int) -> Counter:
        if remaining == 0 or is_full(b):
            return Counter({b: 1})
        key = SearchKey(fingerprint(b), remaining)
        if key in memo:
            return memo[key]
        acc: Counter = Counter()
        for child in successors(b):
            acc.update(walk(child, remaining - 1))
        memo[key] = acc
        return acc

    return Counter(walk(board, depth))


def checksum_of(frontier: Counter) -> int:
    total = 0
    for b, paths in frontier.items():
        total = (total + terminal_value(b) * paths) & MODULO_MASK
    return total


def frontier_summary(board: Board, depth: int) -> Dict[str, Any]:
    frontier = terminal_frontier(board, depth)
    boards = np.array(list(frontier.keys()), dtype=np.int64).reshape(-1, CELLS)
    weights = np.array(list(frontier.values()), dtype=np.float64)
    paths = int(sum(frontier.values()))

    cell_means = (boards * weights[:, None]).sum(axis=0) / weights.sum()
    histogram = np.bincount(
        boards.ravel(),
        weights=np.repeat(weights, CELLS),
        minlength=MAX_VALUE + 1,
    )
    full = np.all(boards != 0, axis=1)
    return {
        'distinct_terminals': int(boards.shape[0]),
        'paths': paths,
        'full_boards': int(full.sum()),
        'checksum': checksum_of(frontier),
        'cell_means': cell_means.reshape(SIZE, SIZE),
        'value_histogram': histogram,
    }
