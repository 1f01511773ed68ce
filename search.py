"""
Breadth-first chain search.

Chains are explored one length at a time. Every path in the current frontier is
checked for full alphabet coverage; paths that do not cover yet are extended by
every word that can follow their last word and become the next frontier.

Coverage is tracked as a bitmask with one bit per alphabet letter. Each frontier
entry carries the OR of its words' masks, which gives the same answer as
re-unioning the letter sets of the whole path.
"""

from __future__ import annotations

from multiprocessing import Pool
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from tqdm import tqdm

from graph import ChainGraph

DEFAULT_MAX_DEPTH = 5
CHUNKS_PER_WORKER = 4

Path = Tuple[int, ...]
FrontierEntry = Tuple[Path, int]


def progress(iterable, desc=""):
    return tqdm(iterable, desc=desc, ascii=" ▖▘▝▗▚▞█", bar_format='{desc}: |{bar:20}|')


# ============================================================================ #
#                              COVERAGE                                        #
# ============================================================================ #

def letter_masks(graph: ChainGraph, alphabet: Sequence[str]) -> List[int]:
    """Per-word bitmask of the alphabet letters it uses. Other letters are ignored."""
    bits = {letter: 1 << position for position, letter in enumerate(alphabet)}
    masks = []
    for word in graph.words:
        mask = 0
        for letter in word.letters:
            mask |= bits.get(letter, 0)
        masks.append(mask)
    return masks


def full_mask(alphabet: Sequence[str]) -> int:
    return (1 << len(alphabet)) - 1


def coverage(path: Iterable[int], graph: ChainGraph) -> Set[str]:
    """Union of the distinct letters of every word in ``path``."""
    letters: Set[str] = set()
    for index in path:
        letters.update(graph.words[index].letters)
    return letters


def is_chain(path: Sequence[int], graph: ChainGraph) -> bool:
    """True if each word starts with the previous word's last letter."""
    words = graph.words
    return all(words[a].last == words[b].first for a, b in zip(path, path[1:]))


# ============================================================================ #
#                              LEVEL EXPANSION                                 #
# ============================================================================ #

def _expand(
    frontier: Iterable[FrontierEntry],
    masks: Sequence[int],
    successors: Sequence[Sequence[int]],
    full: int,
    extend: bool,
    first_only: bool,
) -> Tuple[List[Path], List[FrontierEntry]]:
    """Drain one frontier level.

    Returns (complete paths in frontier order, next frontier). With
    ``first_only`` the drain stops at the first complete path. Once anything
    completes the next frontier is always empty.
    """
    complete: List[Path] = []
    next_frontier: List[FrontierEntry] = []

    for path, mask in frontier:
        if mask & full == full:
            if not complete:
                next_frontier = []
            complete.append(path)
            if first_only:
                break
            continue
        if not extend or complete:
            continue
        for successor in successors[path[-1]]:
            next_frontier.append((path + (successor,), mask | masks[successor]))

    return complete, next_frontier


_worker_masks: Sequence[int] = ()
_worker_successors: Sequence[Sequence[int]] = ()


def _init_worker(masks: Sequence[int], successors: Sequence[Sequence[int]]) -> None:
    global _worker_masks, _worker_successors
    _worker_masks = masks
    _worker_successors = successors


def _expand_worker(args: Tuple[List[FrontierEntry], int, bool, bool]) -> Tuple[List[Path], List[FrontierEntry]]:
    """Worker function to drain one chunk of a frontier level."""
    chunk, full, extend, first_only = args
    return _expand(chunk, _worker_masks, _worker_successors, full, extend, first_only)


def _chunked(frontier: List[FrontierEntry], n_chunks: int) -> List[List[FrontierEntry]]:
    size = max(1, -(-len(frontier) // n_chunks))
    return [frontier[i:i + size] for i in range(0, len(frontier), size)]


# ============================================================================ #
#                              SEARCH                                          #
# ============================================================================ #

def _search(
    graph: ChainGraph,
    alphabet: Sequence[str],
    max_depth: int,
    *,
    find_all: bool,
    workers: int,
    show_progress: bool,
) -> List[Path]:
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    alphabet = list(dict.fromkeys(alphabet))
    masks = letter_masks(graph, alphabet)
    full = full_mask(alphabet)
    successors = [graph.successors(index) for index in range(len(graph.words))]
    frontier: List[FrontierEntry] = [((index,), mask) for index, mask in enumerate(masks)]

    pool = Pool(workers, initializer=_init_worker, initargs=(masks, successors)) if workers > 1 else None
    try:
        for depth in range(1, max_depth + 1):
            if not frontier:
                break
            # the last level is only checked, never extended
            extend = depth < max_depth

            if pool is None:
                level = progress(frontier, f"Depth {depth}") if show_progress else frontier
                complete, next_frontier = _expand(level, masks, successors, full, extend, not find_all)
            else:
                chunks = _chunked(frontier, workers * CHUNKS_PER_WORKER)
                tasks = [(chunk, full, extend, not find_all) for chunk in chunks]
                results = pool.imap(_expand_worker, tasks)
                if show_progress:
                    results = progress(results, f"Depth {depth}")
                complete, next_frontier = [], []
                for chunk_complete, chunk_next in results:
                    if chunk_complete and not complete:
                        next_frontier = []
                    complete.extend(chunk_complete)
                    if not complete:
                        next_frontier.extend(chunk_next)

            if complete:
                return complete if find_all else complete[:1]
            frontier = next_frontier
    finally:
        if pool is not None:
            pool.terminate()
            pool.join()

    return []


def shortest_path(
    graph: ChainGraph,
    alphabet: Sequence[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    workers: int = 1,
    show_progress: bool = False,
) -> Optional[List[int]]:
    """First covering chain found at the shallowest depth, or None.

    ``max_depth`` is the maximum number of words in a chain; 0 never finds anything.
    """
    found = _search(
        graph, alphabet, max_depth,
        find_all=False, workers=workers, show_progress=show_progress,
    )
    return list(found[0]) if found else None


def all_shortest_paths(
    graph: ChainGraph,
    alphabet: Sequence[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    dedupe: bool = False,
    workers: int = 1,
    show_progress: bool = False,
) -> List[List[int]]:
    """Every covering chain at the minimal depth, in discovery order.

    Returns an empty list when nothing covers within ``max_depth`` words. With
    ``dedupe`` a chain whose word texts repeat an earlier result is dropped
    (duplicate dictionary entries produce such chains).
    """
    found = _search(
        graph, alphabet, max_depth,
        find_all=True, workers=workers, show_progress=show_progress,
    )
    if not dedupe:
        return [list(path) for path in found]

    seen: Set[Tuple[str, ...]] = set()
    unique: List[List[int]] = []
    for path in found:
        key = tuple(graph.texts(path))
        if key in seen:
            continue
        seen.add(key)
        unique.append(list(path))
    return unique
