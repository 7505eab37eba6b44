#!/usr/bin/env python3
"""
Name Sampler
============
Draws random names from a built TransitionModel.

A name is composed from three nested weighted draws: a word count from
``parts``, then per word a target length from ``name_len``, an initial
character from ``initial`` and successor characters keyed by the last
character until the word reaches its target length.
"""

import math
import random
from typing import Optional

from .chain import INITIAL, NAME_LEN, PARTS, STRUCTURAL_KEYS, Token, TransitionModel
from .errors import NoDataError

PLACEHOLDER = '-'


class NameSampler:
    """Generates names from a single TransitionModel."""

    def __init__(self,
                 model: TransitionModel,
                 rng: Optional[random.Random] = None,
                 placeholder: str = PLACEHOLDER,
                 strict: bool = False):
        """
        Args:
            model: Built transition model
            rng: Random source (a fresh unseeded Random if omitted)
            placeholder: Token returned when a context key has no bag
            strict: Raise NoDataError instead of returning the placeholder
        """
        if not isinstance(placeholder, str) or len(placeholder) != 1:
            raise ValueError(f"placeholder must be a single character, got {placeholder!r}")
        self.model = model
        self.rng = rng if rng is not None else random.Random()
        self.placeholder = placeholder
        self.strict = strict

    def select(self, key: str) -> Token:
        """Weighted random draw from the bag stored under ``key``."""
        total = self.model.total(key)
        if total <= 0:
            if self.strict:
                raise NoDataError(key)
            return self.placeholder

        idx = int(math.floor(self.rng.random() * total))
        running = 0
        for token, weight in self.model[key].items():
            running += weight
            if idx < running:
                return token

        # Unreachable while total matches the bag's weights
        raise NoDataError(key, f"weights for context '{key}' do not sum to {total}")

    def generate_word(self) -> str:
        """Draw one word; its length equals the drawn target (minimum 1)."""
        target = self.select(NAME_LEN)
        char = self.select(INITIAL)
        word = char
        last_char = char

        while len(word) < target:
            char = self.select(last_char)
            word += char
            last_char = char

        return word

    def generate(self) -> str:
        """Generate a single name."""
        for key in STRUCTURAL_KEYS:
            if self.model.total(key) <= 0:
                raise NoDataError(key, "model has no learned statistics")

        parts = self.select(PARTS)
        return ' '.join(self.generate_word() for _ in range(parts))


__all__ = [
    'PLACEHOLDER',
    'NameSampler',
]
