#!/usr/bin/env python3
"""
Transition Model
================
Character-transition statistics learned from a seed corpus of names.

A model maps a context key to a weighted bag of successor tokens:

- ``parts``    -> how many words a name contains (int tokens)
- ``name_len`` -> character length of a single word (int tokens)
- ``initial``  -> first character of a word (str tokens)
- ``<char>``   -> characters observed directly after ``<char>``

Building happens in two phases. ``ChainBuilder`` accumulates raw counts,
then ``build()`` rescales every count with ``floor(count ** 1.3)`` and
freezes the result into a read-only ``TransitionModel``. The superlinear
exponent makes frequent transitions disproportionately more likely while
rare ones keep a weight of at least 1.

Usage:
    from namechain.chain import build_model

    model = build_model(['Aa', 'Ab', 'Ba'])
    model['A']          # WeightedBag({'a': 1, 'b': 1})
    model['A'].total    # 2
"""

import json
import math
import re
from collections import Counter, defaultdict
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Mapping, Tuple, Union


# =============================================================================
# Constants
# =============================================================================

PARTS = 'parts'
NAME_LEN = 'name_len'
INITIAL = 'initial'

# Bags whose tokens are integers rather than characters
INT_KEYS = frozenset({PARTS, NAME_LEN})
STRUCTURAL_KEYS = (PARTS, NAME_LEN, INITIAL)

SCALE_EXPONENT = 1.3

_WHITESPACE = re.compile(r'\s+')

Token = Union[int, str]


def scale_count(count: int, exponent: float = SCALE_EXPONENT) -> int:
    """Rescale a raw occurrence count: ``floor(count ** exponent)``."""
    return int(math.floor(math.pow(count, exponent)))


def split_words(name: str) -> list[str]:
    """Split a name on runs of whitespace, rejecting blank names."""
    words = _WHITESPACE.split(name.strip()) if isinstance(name, str) else []
    if not words or not words[0]:
        raise ValueError(f"Names must be non-empty strings, got {name!r}")
    return words


# =============================================================================
# Weighted Bag
# =============================================================================

class WeightedBag(Mapping):
    """
    Read-only mapping of token -> weight with a cached total.

    Iteration follows the order tokens were first counted, which gives
    the sampler a fixed walk order.
    """

    __slots__ = ('_weights', '_total')

    def __init__(self, weights: Iterable[Tuple[Token, int]]):
        items = dict(weights)
        for token, weight in items.items():
            if weight < 0:
                raise ValueError(f"Negative weight {weight} for token {token!r}")
        self._weights = items
        self._total = sum(items.values())

    @property
    def total(self) -> int:
        return self._total

    def __getitem__(self, token: Token) -> int:
        return self._weights[token]

    def __iter__(self) -> Iterator[Token]:
        return iter(self._weights)

    def __len__(self) -> int:
        return len(self._weights)

    def __repr__(self) -> str:
        return f"WeightedBag({self._weights!r})"


def _parse_entry(key: str, entry) -> Tuple[Token, int]:
    """Validate one serialized [token, weight] pair for context ``key``."""
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        raise ValueError(f"Entry for context {key!r} must be a [token, weight] pair, got {entry!r}")
    token, weight = entry
    if isinstance(weight, bool) or not isinstance(weight, int):
        raise ValueError(f"Weight for context {key!r} must be an integer, got {weight!r}")
    if key in INT_KEYS:
        if isinstance(token, bool) or not isinstance(token, int):
            raise ValueError(f"Token for context {key!r} must be an integer, got {token!r}")
    elif not isinstance(token, str) or len(token) != 1:
        raise ValueError(f"Token for context {key!r} must be a single character, got {token!r}")
    return token, weight


# =============================================================================
# Transition Model
# =============================================================================

class TransitionModel(Mapping):
    """Frozen mapping of context key -> WeightedBag."""

    __slots__ = ('_bags',)

    def __init__(self, bags: Mapping[str, WeightedBag] = None):
        self._bags = MappingProxyType(dict(bags or {}))

    def __getitem__(self, key: str) -> WeightedBag:
        return self._bags[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bags)

    def __len__(self) -> int:
        return len(self._bags)

    def __repr__(self) -> str:
        return f"TransitionModel(keys={len(self._bags)})"

    def total(self, key: str) -> int:
        """Total weight of a bag, 0 if the key was never observed."""
        bag = self._bags.get(key)
        return bag.total if bag is not None else 0

    @property
    def is_empty(self) -> bool:
        """True when the model lacks any of the structural bags."""
        return any(self.total(key) <= 0 for key in STRUCTURAL_KEYS)

    def to_dict(self) -> dict:
        """Serialize model to a JSON-ready dictionary (token order kept)."""
        return {
            'bags': {
                key: [[token, weight] for token, weight in bag.items()]
                for key, bag in self._bags.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'TransitionModel':
        """Deserialize model from dictionary; totals are recomputed."""
        if not isinstance(data, dict):
            raise ValueError(f"Model data must be a mapping, got {type(data).__name__}")
        raw_bags = data.get('bags') or {}
        if not isinstance(raw_bags, dict):
            raise ValueError("Model 'bags' must be a mapping of context -> entries")

        bags = {}
        for key, entries in raw_bags.items():
            if key not in STRUCTURAL_KEYS and (not isinstance(key, str) or len(key) != 1):
                raise ValueError(f"Context key must be a single character, got {key!r}")
            if not isinstance(entries, list):
                raise ValueError(f"Entries for context {key!r} must be a list of [token, weight] pairs")
            bags[key] = WeightedBag(_parse_entry(key, entry) for entry in entries)
        return cls(bags)


# =============================================================================
# Builder
# =============================================================================

class ChainBuilder:
    """Accumulates raw transition counts from a corpus of names."""

    def __init__(self, exponent: float = SCALE_EXPONENT):
        self.exponent = exponent
        self.counts: Dict[str, Counter] = defaultdict(Counter)

    def increment(self, key: str, token: Token):
        self.counts[key][token] += 1

    def add_name(self, name: str):
        """Count one name: word count, word lengths, initials, transitions."""
        words = split_words(name)
        self.increment(PARTS, len(words))

        for word in words:
            self.increment(NAME_LEN, len(word))
            self.increment(INITIAL, word[0])

            last_char = word[0]
            for char in word[1:]:
                self.increment(last_char, char)
                last_char = char

    def add_names(self, names: Iterable[str]) -> 'ChainBuilder':
        for name in names:
            self.add_name(name)
        return self

    def merge(self, other: 'ChainBuilder') -> 'ChainBuilder':
        """Add another builder's raw counts into this one."""
        for key, counter in other.counts.items():
            self.counts[key].update(counter)
        return self

    def build(self) -> TransitionModel:
        """Scale every count and freeze the result."""
        bags = {}
        for key, counter in self.counts.items():
            bags[key] = WeightedBag(
                (token, scale_count(count, self.exponent))
                for token, count in counter.items()
            )
        return TransitionModel(bags)


def build_model(names: Iterable[str],
                exponent: float = SCALE_EXPONENT) -> TransitionModel:
    """Learn a TransitionModel from a sequence of names."""
    return ChainBuilder(exponent=exponent).add_names(names).build()


# =============================================================================
# Persistence
# =============================================================================

def save_models(models: Mapping[str, TransitionModel], filepath):
    """Save a {label: model} mapping to a JSON file."""
    data = {label: model.to_dict() for label, model in models.items()}
    Path(filepath).write_text(json.dumps(data, indent=2, ensure_ascii=False),
                              encoding='utf-8')


def load_models(filepath) -> Dict[str, TransitionModel]:
    """Load a {label: model} mapping from a JSON file."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Model file not found: {path}")
    data = json.loads(path.read_text(encoding='utf-8'))
    if not isinstance(data, dict):
        raise ValueError(f"Model file must contain a mapping: {path}")
    return {label: TransitionModel.from_dict(d) for label, d in data.items()}


__all__ = [
    'PARTS',
    'NAME_LEN',
    'INITIAL',
    'SCALE_EXPONENT',
    'scale_count',
    'split_words',
    'WeightedBag',
    'TransitionModel',
    'ChainBuilder',
    'build_model',
    'save_models',
    'load_models',
]
