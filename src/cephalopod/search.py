"""
Depth-bounded DFS with memoization over board states.

A search sums the terminal value of the board reached by every move sequence,
modulo 2**30. A sequence ends when the remaining depth hits zero or the board
fills up. Subtrees are cached by (fingerprint, remaining depth); the cached
value is the exact subtree sum, so caching never changes the result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, NamedTuple, Optional

from .board import (
    MODULO_MASK,
    Board,
    InvalidInput,
    fingerprint,
    is_full,
    successors,
    terminal_value,
    validate_board,
)


class SearchKey(NamedTuple):
    fingerprint: int
    remaining: int


class MemoCache:
    """Subtree results keyed by SearchKey, with hit/miss counters.

    Pass the same instance to several searches to reuse it; keys carry the
    remaining depth, so results from different depth budgets never collide.
    """

    def __init__(self) -> None:
        self._data: Dict[SearchKey, int] = {}
        self.hits = 0
        self.misses = 0

    def get(self, key: SearchKey) -> Optional[int]:
        val = self._data.get(key)
        if val is None:
            self.misses += 1
        else:
            self.hits += 1
        return val

    def store(self, key: SearchKey, value: int) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[SearchKey]:
        return iter(self._data)

    def clear(self) -> None:
        self._data.clear()
        self.hits = 0
        self.misses = 0


@dataclass
class SearchStats:
    nodes: int = 0
    terminals: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    max_depth_reached: int = 0


def validate_depth(depth: object) -> int:
    if isinstance(depth, bool) or not isinstance(depth, int):
        raise InvalidInput(f"depth must be an integer, got {depth!r}")
    if depth < 0:
        raise InvalidInput(f"depth must be non-negative, got {depth}")
    return depth


def _dfs(board: Board, remaining: int, ply: int, cache: MemoCache,
         stats: Optional[SearchStats]) -> int:
    if stats is not None:
        stats.nodes += 1
        if ply > stats.max_depth_reached:
            stats.max_depth_reached = ply
    if remaining == 0 or is_full(board):
        if stats is not None:
            stats.terminals += 1
        return terminal_value(board)

    key = SearchKey(fingerprint(board), remaining)
    cached = cache.get(key)
    if cached is not None:
        if stats is not None:
            stats.cache_hits += 1
        return cached
    if stats is not None:
        stats.cache_misses += 1

    total = 0
    for child in successors(board):
        total = (total + _dfs(child, remaining - 1, ply + 1, cache, stats)) & MODULO_MASK
    cache.store(key, total)
    return total


def search(board: Board, depth: int, cache: Optional[MemoCache] = None,
           stats: Optional[SearchStats] = None) -> int:
    """Checksum of all boards reachable within ``depth`` moves of ``board``.

    Raises InvalidInput before traversal if the board or depth is invalid.
    """
    board = validate_board(board)
    depth = validate_depth(depth)
    if cache is None:
        cache = MemoCache()
    result = _dfs(board, depth, 0, cache, stats)
    logging.debug("search depth=%d result=%d cache_size=%d hits=%d misses=%d",
                  depth, result, len(cache), cache.hits, cache.misses)
    return result


def _naive(board: Board, remaining: int) -> int:
    if remaining == 0 or is_full(board):
        return terminal_value(board)
    total = 0
    for child in successors(board):
        total = (total + _naive(child, remaining - 1)) & MODULO_MASK
    return total


def naive_search(board: Board, depth: int) -> int:
    """Same checksum as search(), without memoization. Exponential; small depths only."""
    board = validate_board(board)
    depth = validate_depth(depth)
    return _naive(board, depth)
