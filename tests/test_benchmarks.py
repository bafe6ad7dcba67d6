from pathlib import Path

import pytest

from cephalopod.cases import load_case
from cephalopod.search import search

DATA = Path(__file__).parent / "data"

try:
    import pytest_benchmark  # noqa: F401
    HAS_BENCH = True
except ImportError:
    HAS_BENCH = False


@pytest.mark.skipif(not HAS_BENCH, reason="pytest-benchmark not installed")
def test_benchmark_empty_board_depth_5(benchmark):
    def _search():
        return search(tuple([0] * 9), 5)

    result = benchmark(_search)
    assert result == 50441886


@pytest.mark.skipif(not HAS_BENCH, reason="pytest-benchmark not installed")
def test_benchmark_fixture(benchmark):
    case = load_case(DATA / "empty_board_depth_3.txt")
    result = benchmark(search, case.board, case.depth)
    assert result == case.expected
