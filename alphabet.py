"""Alphabet partition for the chain puzzle.

The puzzle letters sit on the sides of a box. A word may never trace two
letters from the same side back-to-back, and a word using a letter that is not
on the box is unusable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Optional, Sequence, Tuple

# ============================================================================ #
#                              CONFIGURATION                                   #
# ============================================================================ #

DEFAULT_LETTERS: Tuple[str, ...] = ('s', 'l', 'c', 'w', 'i', 'j', 'a', 'g', 'y', 'k', 'o', 'n')
SIDE_SIZE = 3


@dataclass(frozen=True)
class AlphabetPartition:
    """Ordered puzzle letters plus the side each one lives on. Fixed once built."""
    letters: Tuple[str, ...]
    sides: Dict[str, int] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "letters", tuple(self.letters))
        seen = set()
        for letter in self.letters:
            if not isinstance(letter, str) or len(letter) != 1 or not letter.isalpha():
                raise ValueError(f"partition letters must be single alphabetic characters, got {letter!r}")
            if letter in seen:
                raise ValueError(f"letter '{letter}' appears more than once in the partition")
            seen.add(letter)
        if set(self.sides) != seen:
            raise ValueError("every partition letter needs exactly one side, and sides may only name partition letters")

    @classmethod
    def from_letters(cls, letters: Iterable[str], side_size: int = SIDE_SIZE) -> AlphabetPartition:
        """Group ``letters`` into consecutive runs of ``side_size``."""
        if side_size < 1:
            raise ValueError(f"side size must be at least 1, got {side_size}")
        ordered = tuple(letter.lower() for letter in letters)
        sides = {letter: index // side_size for index, letter in enumerate(ordered)}
        return cls(ordered, sides)

    @classmethod
    def from_sides(cls, sides: Sequence[str]) -> AlphabetPartition:
        """Build from explicit side strings, e.g. ``["slc", "wij", "agy", "kon"]``."""
        letters = []
        side_map: Dict[str, int] = {}
        for side_id, side in enumerate(sides):
            side = side.strip().lower()
            if not side:
                raise ValueError(f"side {side_id} is empty")
            for letter in side:
                letters.append(letter)
                side_map[letter] = side_id
        return cls(tuple(letters), side_map)

    def __len__(self) -> int:
        return len(self.letters)

    def __iter__(self) -> Iterator[str]:
        return iter(self.letters)

    def __contains__(self, letter: object) -> bool:
        return letter in self.sides

    def side_of(self, letter: str) -> Optional[int]:
        return self.sides.get(letter)

    def allows(self, word: str) -> bool:
        """True if every letter is on the box and no two neighbours share a side."""
        previous_side = None
        for index, letter in enumerate(word):
            side = self.sides.get(letter)
            if side is None:
                return False
            if index and side == previous_side:
                return False
            previous_side = side
        return True

    def side_groups(self) -> list[str]:
        groups: Dict[int, str] = {}
        for letter in self.letters:
            side = self.sides[letter]
            groups[side] = groups.get(side, "") + letter
        return [groups[side] for side in sorted(groups)]


def default_partition() -> AlphabetPartition:
    return AlphabetPartition.from_letters(DEFAULT_LETTERS, SIDE_SIZE)
