import numpy as np

from cephalopod.analysis import checksum_of, frontier_summary, reachable_keys, terminal_frontier
from cephalopod.search import SearchKey, search

EMPTY = tuple([0] * 9)


def test_reachable_keys_depth_zero_is_empty():
    assert reachable_keys(EMPTY, 0) == set()


def test_reachable_keys_small_depth():
    keys = reachable_keys(EMPTY, 2)
    # the root plus nine single-die boards one move later
    assert len(keys) == 10
    assert SearchKey(0, 2) in keys
    assert all(k.remaining in (1, 2) for k in keys)


def test_frontier_checksum_matches_search():
    for depth in range(5):
        assert checksum_of(terminal_frontier(EMPTY, depth)) == search(EMPTY, depth)


def test_frontier_counts_paths():
    b = (0, 6, 0, 2, 2, 2, 1, 6, 1)
    f = terminal_frontier(b, 20)
    assert f == {(1, 6, 1, 2, 2, 2, 1, 6, 1): 2}


def test_frontier_summary_shapes_and_totals():
    s = frontier_summary(EMPTY, 1)
    assert s['distinct_terminals'] == 9
    assert s['paths'] == 9
    assert s['full_boards'] == 0
    assert s['checksum'] == 111111111
    assert s['cell_means'].shape == (3, 3)
    assert np.allclose(s['cell_means'], 1.0 / 9.0)
    hist = s['value_histogram']
    assert hist.shape == (7,)
    assert hist[1] == 9
    assert hist[0] == 72


def test_frontier_summary_weights_by_paths():
    s = frontier_summary((5, 0, 6, 4, 5, 0, 0, 6, 4), 20)
    assert s['distinct_terminals'] == 1
    assert s['paths'] == 6
    assert s['full_boards'] == 1
    assert np.array_equal(s['cell_means'], np.array([[5, 1, 6], [4, 5, 1], [1, 6, 4]], dtype=float))
