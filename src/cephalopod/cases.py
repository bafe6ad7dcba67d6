"""
Reading search cases from text.

A case is a depth line, three board rows of three space-separated ints, and an
optional expected checksum line. Golden fixture files always carry the
expected line.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .board import Board, InvalidInput, initial
from .search import validate_depth


@dataclass(frozen=True)
class Case:
    depth: int
    board: Board
    expected: Optional[int] = None
    source: Optional[str] = None


def _parse_int(token: str, what: str, source: Optional[str]) -> int:
    # plain ASCII digits with an optional leading '-'; int() alone also takes '+3', '1_0', '٣'
    digits = token[1:] if token.startswith("-") else token
    if not (digits.isascii() and digits.isdigit()):
        where = f"{source}: " if source else ""
        raise InvalidInput(f"{where}{what} is not an integer: {token!r}")
    return int(token)


def parse_case(text: str, source: Optional[str] = None, require_expected: bool = False) -> Case:
    lines = [ln.strip() for ln in text.splitlines()]
    lines = [ln for ln in lines if ln]
    where = f"{source}: " if source else ""
    if len(lines) < 4:
        raise InvalidInput(f"{where}expected a depth line and 3 board rows, got {len(lines)} lines")
    if len(lines) > 5:
        raise InvalidInput(f"{where}unexpected trailing content: {lines[5]!r}")

    depth = validate_depth(_parse_int(lines[0], "depth", source))
    rows = [
        [_parse_int(tok, f"row {r}", source) for tok in lines[1 + r].split()]
        for r in range(3)
    ]
    board = initial(rows)

    expected: Optional[int] = None
    if len(lines) == 5:
        expected = _parse_int(lines[4], "expected result", source)
    elif require_expected:
        raise InvalidInput(f"{where}missing expected result line")
    return Case(depth=depth, board=board, expected=expected, source=source)


def load_case(path: Path, require_expected: bool = True) -> Case:
    return parse_case(path.read_text(), source=str(path), require_expected=require_expected)


def discover_cases(directory: Path) -> List[Path]:
    """Fixture files (*.txt) in ``directory``, sorted by name."""
    return sorted(p for p in directory.glob("*.txt") if p.is_file())
