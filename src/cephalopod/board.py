"""
Board state model for the 3x3 capture puzzle.
Teaching notes:
- A board is a plain tuple of 9 ints in row-major order; 0 is empty, 1..6 are dice.
- Moves never mutate: every successor is a fresh tuple, so boards stay valid cache keys.
- Placing a die next to two or more capturable dice may capture a subset whose sum is <= 6.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

SIZE = 3
CELLS = SIZE * SIZE
MAX_VALUE = 6
MODULO = 1 << 30
MODULO_MASK = MODULO - 1

Board = Tuple[int, ...]

NEIGHBORS: Tuple[Tuple[int, ...], ...] = (
    (1, 3),
    (0, 2, 4),
    (1, 5),
    (0, 4, 6),
    (1, 3, 5, 7),
    (2, 4, 8),
    (3, 7),
    (4, 6, 8),
    (5, 7),
)

# Capture subsets, indexed by the number of capturable neighbours.
COMBOS: Tuple[Tuple[Tuple[int, ...], ...], ...] = (
    (),
    (),
    ((0, 1),),
    ((0, 1), (0, 2), (1, 2), (0, 1, 2)),
    (
        (0, 1), (0, 2), (0, 3),
        (1, 2), (1, 3), (2, 3),
        (0, 1, 2), (0, 1, 3), (0, 2, 3), (1, 2, 3),
        (0, 1, 2, 3),
    ),
)


class InvalidInput(ValueError):
    """Raised for a malformed board, an out-of-domain cell or a bad depth."""


def _check_cell(value: object, where: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{where}: expected an integer, got {value!r}")
    if value < 0 or value > MAX_VALUE:
        raise InvalidInput(f"{where}: value {value} outside 0..{MAX_VALUE}")
    return value


def initial(rows: Sequence[Sequence[int]]) -> Board:
    """Build a board from three rows of three values."""
    rows = list(rows)
    if len(rows) != SIZE:
        raise InvalidInput(f"expected {SIZE} rows, got {len(rows)}")
    cells: List[int] = []
    for r, row in enumerate(rows):
        row = list(row)
        if len(row) != SIZE:
            raise InvalidInput(f"row {r}: expected {SIZE} values, got {len(row)}")
        for c, v in enumerate(row):
            cells.append(_check_cell(v, f"row {r} col {c}"))
    return tuple(cells)


def validate_board(board: Iterable[int]) -> Board:
    """Check a flat 9-cell board and return it as a tuple."""
    cells = tuple(board)
    if len(cells) != CELLS:
        raise InvalidInput(f"expected {CELLS} cells, got {len(cells)}")
    for i, v in enumerate(cells):
        _check_cell(v, f"cell {i}")
    return cells


def rows_of(board: Board) -> List[List[int]]:
    return [list(board[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE)]


def serialize_board(board: Iterable[int]) -> str:
    return ''.join(str(v) for v in board)


def deserialize_board(raw: str) -> Board:
    raw = raw.strip()
    if len(raw) != CELLS or any(ch not in "0123456" for ch in raw):
        raise InvalidInput(f"board string must be {CELLS} digits in 0..{MAX_VALUE}: {raw!r}")
    return tuple(int(ch) for ch in raw)


def fingerprint(board: Board) -> int:
    """Pack the board into one int, 4 bits per cell, cell 0 lowest."""
    key = 0
    for i, v in enumerate(board):
        key |= v << (i << 2)
    return key


def unpack(key: int) -> Board:
    return tuple((key >> (i << 2)) & 0xF for i in range(CELLS))


def is_full(board: Board) -> bool:
    return 0 not in board


def terminal_value(board: Board) -> int:
    """Cells read as base-10 digits, row-major, reduced modulo 2**30."""
    value = 0
    for v in board:
        value = (value * 10 + v) & MODULO_MASK
    return value


def empty_cells(board: Board) -> List[int]:
    return [i for i, v in enumerate(board) if v == 0]


def capturable_neighbors(board: Board, idx: int) -> List[int]:
    return [n for n in NEIGHBORS[idx] if 0 < board[n] < MAX_VALUE]


def place(board: Board, idx: int, value: int, captured: Iterable[int] = ()) -> Board:
    lst = list(board)
    for n in captured:
        lst[n] = 0
    lst[idx] = value
    return tuple(lst)


def moves_at(board: Board, idx: int) -> List[Board]:
    """Boards produced by playing into empty cell ``idx``."""
    capt = capturable_neighbors(board, idx)
    if len(capt) < 2:
        return [place(board, idx, 1)]
    out: List[Board] = []
    for combo in COMBOS[len(capt)]:
        picked = [capt[i] for i in combo]
        total = sum(board[n] for n in picked)
        if total > MAX_VALUE:
            continue
        out.append(place(board, idx, total, picked))
    if not out:
        out.append(place(board, idx, 1))
    return out


def successors(board: Board) -> List[Board]:
    """All boards one move away, empty cells ascending, captures in combo order."""
    out: List[Board] = []
    for idx in empty_cells(board):
        out.extend(moves_at(board, idx))
    return out
