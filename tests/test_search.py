from itertools import product

import pytest

from alphabet import default_partition
from dictionary import filter_by_sides, prune_dictionary
from graph import build_graph
from search import (
    all_shortest_paths,
    coverage,
    full_mask,
    is_chain,
    letter_masks,
    shortest_path,
)

ABCD = "abcd"
# depth 1 covers nothing; at depth 2 ab-bcd, bcd-dca, bd-dca and dca-ab all cover
SMALL = ["ab", "bcd", "bd", "dca"]

PUZZLE_WORDS = ["jowly", "yogis", "snack", "wacky", "yogi", "sign", "lying"]


def brute_force_covering_chains(graph, alphabet, length):
    """Every covering chain of exactly ``length`` words, found without the graph buckets."""
    found = []
    for path in product(range(len(graph.words)), repeat=length):
        if is_chain(path, graph) and set(alphabet) <= coverage(path, graph):
            found.append(list(path))
    return found


def test_letter_masks_ignore_letters_outside_alphabet():
    graph = build_graph(["abz", "dd"])
    assert letter_masks(graph, ABCD) == [0b0011, 0b1000]
    assert full_mask(ABCD) == 0b1111


def test_shortest_path_returns_first_found():
    graph = build_graph(SMALL)
    assert shortest_path(graph, ABCD, 5) == [0, 1]


def test_all_shortest_paths_in_discovery_order():
    graph = build_graph(SMALL)
    assert all_shortest_paths(graph, ABCD, 5) == [[0, 1], [1, 3], [2, 3], [3, 0]]


def test_all_shortest_paths_matches_brute_force_and_is_minimal():
    words = ["abe", "ecd", "dfa", "bf", "fab", "ace", "eb", "cf", "fed"]
    alphabet = "abcdef"
    graph = build_graph(words)
    found = all_shortest_paths(graph, alphabet, 5)
    assert found
    depth = len(found[0])
    assert all(len(path) == depth for path in found)
    for shallower in range(1, depth):
        assert brute_force_covering_chains(graph, alphabet, shallower) == []
    assert sorted(found) == sorted(brute_force_covering_chains(graph, alphabet, depth))


def test_returned_paths_chain_and_cover():
    graph = build_graph(SMALL)
    for path in all_shortest_paths(graph, ABCD, 5):
        assert is_chain(path, graph)
        assert len(coverage(path, graph)) >= len(ABCD)


def test_single_word_cover_is_found_at_depth_one():
    graph = build_graph(SMALL + ["abcd"])
    assert shortest_path(graph, ABCD, 1) == [4]
    assert all_shortest_paths(graph, ABCD, 5) == [[4]]


def test_max_depth_zero_finds_nothing():
    graph = build_graph(SMALL + ["abcd"])
    assert shortest_path(graph, ABCD, 0) is None
    assert all_shortest_paths(graph, ABCD, 0) == []


def test_max_depth_one_without_single_cover():
    graph = build_graph(SMALL)
    assert shortest_path(graph, ABCD, 1) is None
    assert all_shortest_paths(graph, ABCD, 1) == []


@pytest.mark.parametrize("max_depth", [0, 1, 3, 5])
def test_empty_word_set(max_depth):
    graph = build_graph([])
    assert shortest_path(graph, ABCD, max_depth) is None
    assert all_shortest_paths(graph, ABCD, max_depth) == []


def test_unreachable_coverage():
    graph = build_graph(["ab", "ba", "bc"])
    assert shortest_path(graph, ABCD, 5) is None
    assert all_shortest_paths(graph, ABCD, 5) == []


def test_slow_wacky_yogi():
    # the three words only use these ten letters
    alphabet = sorted(set("slowwackyyogi"))
    graph = build_graph(["yogi", "wacky", "slow"])
    assert graph.texts(shortest_path(graph, alphabet, 3)) == ["slow", "wacky", "yogi"]
    assert shortest_path(graph, alphabet, 2) is None
    # j and n are never used, so the full twelve-letter box is not covered
    assert shortest_path(graph, default_partition(), 5) is None


def test_puzzle_box_end_to_end():
    partition = default_partition()
    raw = PUZZLE_WORDS + ["slow", "ball", "cat", "zany", "it's"]
    graph = build_graph(filter_by_sides(prune_dictionary(raw), partition))
    path = shortest_path(graph, partition, 5)
    assert graph.texts(path) == ["jowly", "yogis", "snack"]
    assert all_shortest_paths(graph, partition, 5) == [path]
    assert shortest_path(graph, partition, 2) is None


def test_out_of_partition_words_never_returned():
    partition = default_partition()
    raw = PUZZLE_WORDS + ["jowlz", "zsnack"]
    graph = build_graph(filter_by_sides(raw, partition))
    for path in all_shortest_paths(graph, partition, 5):
        assert all(letter in partition for letter in coverage(path, graph))


def test_dedupe_drops_repeated_word_chains():
    graph = build_graph(["ab", "bcd", "ab"])
    assert all_shortest_paths(graph, ABCD, 5) == [[0, 1], [2, 1]]
    assert all_shortest_paths(graph, ABCD, 5, dedupe=True) == [[0, 1]]


def test_parallel_search_matches_sequential():
    words = ["abe", "ecd", "dfa", "bf", "fab", "ace", "eb", "cf", "fed"]
    graph = build_graph(words)
    assert all_shortest_paths(graph, "abcdef", 5, workers=2) == all_shortest_paths(graph, "abcdef", 5)
    assert shortest_path(graph, "abcdef", 5, workers=2) == shortest_path(graph, "abcdef", 5)


def test_progress_does_not_change_results():
    graph = build_graph(SMALL)
    assert all_shortest_paths(graph, ABCD, 5, show_progress=True) == [[0, 1], [1, 3], [2, 3], [3, 0]]


def test_invalid_arguments():
    graph = build_graph(SMALL)
    with pytest.raises(ValueError):
        shortest_path(graph, ABCD, -1)
    with pytest.raises(ValueError):
        all_shortest_paths(graph, ABCD, 3, workers=0)


def test_all_matches_stops_expanding_at_completing_depth(monkeypatch):
    import search

    # every d-word can follow every d-word, so a next level would be 50 x 50
    words = ["abcd"] + ["da" + "x" * i + "d" for i in range(50)]
    graph = build_graph(words)
    next_sizes = []
    original = search._expand

    def recording_expand(*args):
        complete, next_frontier = original(*args)
        next_sizes.append(len(next_frontier))
        return complete, next_frontier

    monkeypatch.setattr(search, "_expand", recording_expand)
    assert all_shortest_paths(graph, ABCD, 5) == [[0]]
    assert next_sizes == [0]


def test_expand_drops_next_frontier_once_complete():
    import search

    graph = build_graph(SMALL + ["abcd"])
    masks = letter_masks(graph, ABCD)
    successors = [graph.successors(index) for index in range(len(graph.words))]
    frontier = [((index,), mask) for index, mask in enumerate(masks)]
    complete, next_frontier = search._expand(frontier, masks, successors, full_mask(ABCD), True, False)
    assert complete == [(4,)]
    assert next_frontier == []
