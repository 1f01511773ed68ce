#!/usr/bin/env python3
"""Chain solver for letter-box style puzzles.

Features
- Loads a dictionary (default: ``dictionary.txt``, or the wordfreq top-N list).
- Prunes it once and caches the pruned list under ``.cache/``; ``--prune``
  forces a rebuild.
- Keeps only words that respect the sides of the box, builds the chain graph
  and searches for the shortest chain covering every letter.
"""
from __future__ import annotations

import argparse
import sys
from functools import lru_cache
from multiprocessing import cpu_count
from pathlib import Path
from typing import List, Optional, Sequence

from wordfreq import zipf_frequency

from alphabet import DEFAULT_LETTERS, SIDE_SIZE, AlphabetPartition
from dictionary import (
    DEFAULT_CACHE_DIR,
    DEFAULT_DICTIONARY,
    WORDFREQ_LIMIT,
    filter_by_sides,
    load_pruned_words,
    load_wordfreq_words,
    load_words,
)
from graph import ChainGraph, build_graph
from search import DEFAULT_MAX_DEPTH, all_shortest_paths, shortest_path


@lru_cache(maxsize=None)
def get_zipf(word: str) -> float:
    return zipf_frequency(word, 'en')


def chain_familiarity(path: Sequence[int], graph: ChainGraph) -> float:
    """Mean Zipf frequency of the words in the chain; higher reads more naturally."""
    texts = graph.texts(path)
    if not texts:
        return 0.0
    return sum(get_zipf(text) for text in texts) / len(texts)


def rank_by_frequency(paths: List[List[int]], graph: ChainGraph) -> List[List[int]]:
    return sorted(paths, key=lambda path: -chain_familiarity(path, graph))


def format_chain(path: Sequence[int], graph: ChainGraph) -> str:
    return " ".join(graph.texts(path))


def non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def build_partition(args: argparse.Namespace) -> AlphabetPartition:
    if args.sides:
        return AlphabetPartition.from_sides(args.sides.split(","))
    return AlphabetPartition.from_letters(args.letters, args.side_size)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Find the shortest word chain covering every puzzle letter")
    parser.add_argument(
        "--dictionary-source",
        choices=["file", "wordfreq"],
        default="file",
        help="Load words from a file (default) or from the Wordfreq top-N list",
    )
    parser.add_argument(
        "--dictionary",
        type=Path,
        default=DEFAULT_DICTIONARY,
        help=f"Path to the word list, one word per line (default: {DEFAULT_DICTIONARY})",
    )
    parser.add_argument(
        "--wordfreq-limit",
        type=int,
        default=WORDFREQ_LIMIT,
        help="Top-N threshold when sampling from Wordfreq",
    )
    parser.add_argument(
        "--prune",
        action="store_true",
        help="Re-prune the dictionary even if a cached pruned list exists",
    )
    parser.add_argument(
        "--cache-dir",
        type=Path,
        default=DEFAULT_CACHE_DIR,
        help="Directory holding the pruned dictionary cache",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Neither read nor write the pruned dictionary cache",
    )
    parser.add_argument(
        "--letters",
        default="".join(DEFAULT_LETTERS),
        help="Puzzle letters in side order (default: %(default)s)",
    )
    parser.add_argument(
        "--side-size",
        type=int,
        default=SIDE_SIZE,
        help="Number of consecutive --letters on each side",
    )
    parser.add_argument(
        "--sides",
        help="Comma-separated sides, e.g. slc,wij,agy,kon (overrides --letters)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help="Maximum number of words in a chain",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        help="Report every chain of the minimal length instead of the first one found",
    )
    parser.add_argument(
        "--dedupe",
        action="store_true",
        help="With --all, drop chains that repeat an earlier chain word for word",
    )
    parser.add_argument(
        "--rank-by-frequency",
        action="store_true",
        help="With --all, list the most familiar chains (Wordfreq Zipf) first",
    )
    parser.add_argument(
        "--workers",
        type=non_negative_int,
        default=1,
        help="Processes used to expand each search level (0 = one per CPU)",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar for each search level",
    )
    args = parser.parse_args(argv)
    if not args.all and (args.dedupe or args.rank_by_frequency):
        parser.error("--dedupe and --rank-by-frequency require --all")
    return args


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    try:
        partition = build_partition(args)
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if args.dictionary_source == "wordfreq":
        source = f"wordfreq:{args.wordfreq_limit}"
        loader = lambda: load_wordfreq_words(args.wordfreq_limit)
    else:
        source = f"file:{args.dictionary.resolve()}"
        loader = lambda: load_words(args.dictionary)

    try:
        pruned = load_pruned_words(
            source,
            loader,
            cache_dir=None if args.no_cache else args.cache_dir,
            reprune=args.prune,
        )
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    print(f"Box: {' '.join(partition.side_groups())}")
    words = filter_by_sides(pruned, partition)
    graph = build_graph(words)
    print(f"words: {graph.node_count}\nedges: {graph.edge_count}")

    workers = args.workers or cpu_count()

    try:
        if args.all:
            paths = all_shortest_paths(
                graph, partition, args.max_depth,
                dedupe=args.dedupe, workers=workers, show_progress=args.progress,
            )
        else:
            path = shortest_path(
                graph, partition, args.max_depth,
                workers=workers, show_progress=args.progress,
            )
            paths = [path] if path is not None else []
    except ValueError as exc:
        print(f"Error: {exc}")
        sys.exit(1)

    if not paths:
        print("No path found")
        return

    if args.all:
        if args.rank_by_frequency:
            paths = rank_by_frequency(paths, graph)
        print(f"Found {len(paths):,} shortest paths of {len(paths[0])} words:")
        for path in paths:
            print(f"  {format_chain(path, graph)}")
    else:
        print(f"Shortest path: {format_chain(paths[0], graph)}")


if __name__ == "__main__":
    main()
