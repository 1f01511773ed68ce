"""
Dictionary loading and pruning for the chain solver.

- Loads a raw word list from a file or from the wordfreq top-N list
- Prunes it down to words that can ever appear in a chain
- Caches the pruned list on disk so later runs skip the pruning pass
"""

from __future__ import annotations

import hashlib
import pickle
from pathlib import Path
from typing import Iterable, List, Optional

from wordfreq import top_n_list

from alphabet import AlphabetPartition

# ============================================================================ #
#                              CONFIGURATION                                   #
# ============================================================================ #

DEFAULT_DICTIONARY = Path("dictionary.txt")
DEFAULT_CACHE_DIR = Path(".cache")
MIN_WORD_LENGTH = 4
WORDFREQ_LIMIT = 50000

CACHE_VERSION = 1


# ============================================================================ #
#                              LOADING                                         #
# ============================================================================ #

def load_words(path: Path) -> List[str]:
    """Read one word per line, stripped and lowercased. Blank lines are skipped."""
    if not path.exists():
        raise FileNotFoundError(f"Dictionary file not found: {path}")

    words: List[str] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            word = line.strip().lower()
            if word:
                words.append(word)
    return words


def load_wordfreq_words(limit: int = WORDFREQ_LIMIT) -> List[str]:
    return [word.lower() for word in top_n_list('en', limit, wordlist='best')]


# ============================================================================ #
#                              PRUNING                                         #
# ============================================================================ #

def has_repeated_letter(word: str) -> bool:
    """True if two adjacent characters are identical, e.g. 'ball'."""
    return any(a == b for a, b in zip(word, word[1:]))


def prune_dictionary(words: Iterable[str], *, min_length: int = MIN_WORD_LENGTH) -> List[str]:
    """Drop words that are too short, non-alphabetic, or have a doubled letter.

    Order is preserved and duplicates are kept; the result of pruning a pruned
    list is the same list.
    """
    pruned: List[str] = []
    for word in words:
        if len(word) < min_length:
            continue
        if not word.isalpha():
            continue
        if has_repeated_letter(word):
            continue
        pruned.append(word)
    return pruned


def filter_by_sides(words: Iterable[str], partition: AlphabetPartition) -> List[str]:
    """Keep words whose letters are all on the box with no side used twice in a row."""
    return [word for word in words if partition.allows(word)]


# ============================================================================ #
#                              CACHE                                           #
# ============================================================================ #

def get_cache_key(source: str, min_length: int = MIN_WORD_LENGTH) -> str:
    """Generate cache file name based on the dictionary source and prune settings."""
    config_str = f"{CACHE_VERSION}_{source}_{min_length}"
    cache_hash = hashlib.md5(config_str.encode()).hexdigest()[:8]
    return f".cache_pruned_{cache_hash}.pkl"


def save_cache(cache_path: Path, words: List[str]) -> None:
    print(f"Saving cache to {cache_path}...")
    cache_path.parent.mkdir(parents=True, exist_ok=True)
    with cache_path.open('wb') as f:
        pickle.dump((CACHE_VERSION, words), f)
    print("Cache saved!")


def load_cache(cache_path: Path) -> List[str]:
    """Load pruned words; raises ValueError if the payload is not ours."""
    print(f"Loading cache from {cache_path}...")
    with cache_path.open('rb') as f:
        payload = pickle.load(f)
    if (
        not isinstance(payload, tuple)
        or len(payload) != 2
        or payload[0] != CACHE_VERSION
        or not isinstance(payload[1], list)
    ):
        raise ValueError(f"unexpected cache payload in {cache_path}")
    print("Cache loaded!")
    return payload[1]


def load_pruned_words(
    source: str,
    loader,
    *,
    cache_dir: Optional[Path] = DEFAULT_CACHE_DIR,
    reprune: bool = False,
    min_length: int = MIN_WORD_LENGTH,
) -> List[str]:
    """Return the pruned word list for ``source``, using the cache when possible.

    ``loader`` is a zero-argument callable producing the raw words; it is only
    called when the cache is missing, unreadable, disabled, or ``reprune`` is set.
    Errors from ``loader`` (e.g. a missing dictionary file) propagate.
    """
    cache_path = None
    if cache_dir is not None:
        cache_path = cache_dir / get_cache_key(source, min_length)
        if cache_path.exists() and not reprune:
            try:
                return load_cache(cache_path)
            except Exception as e:
                print(f"Cache load failed: {e}, rebuilding...")

    print("Loading dictionary...")
    raw = loader()
    words = prune_dictionary(raw, min_length=min_length)
    print(f"Pruned {len(raw):,} words down to {len(words):,}")

    if cache_path is not None:
        save_cache(cache_path, words)
    return words
