"""
Word model and chain graph.

Words are referred to everywhere by their index into ``ChainGraph.words``.
Adjacency only depends on a single character match (last letter of one word,
first letter of the next), so instead of an all-pairs edge list the graph keeps
one bucket of word indices per starting letter.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class Word:
    text: str
    letters: Tuple[str, ...]  # sorted, distinct

    @classmethod
    def from_text(cls, text: str) -> Word:
        return cls(text, tuple(sorted(set(text))))

    @property
    def first(self) -> str:
        return self.text[0]

    @property
    def last(self) -> str:
        return self.text[-1]


def model_words(texts: Iterable[str]) -> List[Word]:
    return [Word.from_text(text) for text in texts if text]


@dataclass
class ChainGraph:
    words: List[Word] = field(default_factory=list)
    # buckets[letter] = indices of words starting with letter, in word order
    buckets: Dict[str, List[int]] = field(default_factory=dict)

    def successors(self, index: int) -> List[int]:
        """Indices of words that can follow ``words[index]`` in a chain."""
        return self.starting_with(self.words[index].last)

    def starting_with(self, letter: str) -> List[int]:
        return self.buckets.get(letter, [])

    @property
    def node_count(self) -> int:
        return len(self.words)

    @property
    def edge_count(self) -> int:
        return sum(len(self.buckets.get(word.last, ())) for word in self.words)

    def texts(self, path: Sequence[int]) -> List[str]:
        return [self.words[index].text for index in path]


def build_graph(texts: Iterable[str]) -> ChainGraph:
    graph = ChainGraph(words=model_words(texts))
    for index, word in enumerate(graph.words):
        graph.buckets.setdefault(word.first, []).append(index)
    return graph
