#!/usr/bin/env python3
"""
Variant Registry
================
Holds one TransitionModel per variant label and generates names on demand.

Usage:
    from namechain import NameGenerator

    gen = NameGenerator()
    gen.seed('elf-male', ['Aelar', 'Thalion', 'Erevan'])
    gen.variants()              # ['elf-male']
    gen.generate('elf-male')    # e.g. 'Thaelan'
"""

import logging
import random
import threading
from typing import Dict, Iterable, List, Mapping, Optional

from .chain import TransitionModel, build_model
from .errors import UnknownVariantError
from .sampler import NameSampler
from .settings import get_setting

logger = logging.getLogger(__name__)


class NameGenerator:
    """Registry of variant label -> frozen TransitionModel."""

    def __init__(self,
                 rng: Optional[random.Random] = None,
                 exponent: float = None,
                 placeholder: str = None,
                 strict: bool = None):
        """
        Args:
            rng: Random source shared by all variants (seed it for reproducible output)
            exponent: Scaling exponent (default: generation.scale_exponent)
            placeholder: Token for unseen contexts (default: generation.placeholder)
            strict: Raise NoDataError on unseen contexts (default: generation.strict)
        """
        cfg = get_setting("generation", {}) or {}
        self.rng = rng if rng is not None else random.Random()
        self.exponent = exponent if exponent is not None else cfg.get("scale_exponent", 1.3)
        self.placeholder = placeholder if placeholder is not None else cfg.get("placeholder", "-")
        self.strict = strict if strict is not None else bool(cfg.get("strict", False))
        self._attempts_factor = cfg.get("max_attempts_factor", 20)

        self._chains: Dict[str, TransitionModel] = {}
        self._seed_names: Dict[str, frozenset] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_corpora(cls, corpora: Mapping[str, Iterable[str]], **kwargs) -> 'NameGenerator':
        """Create a generator seeded with every variant of a corpus mapping."""
        gen = cls(**kwargs)
        for label, names in corpora.items():
            gen.seed(label, names)
        return gen

    # -------------------------------------------------------------------------
    # Registry operations
    # -------------------------------------------------------------------------

    def seed(self, label: str, names: Iterable[str]):
        """Build a model from ``names`` and store it under ``label``, replacing any previous one."""
        names = list(names)
        model = build_model(names, exponent=self.exponent)
        with self._lock:
            replaced = label in self._chains
            self._chains[label] = model
            self._seed_names[label] = frozenset(n.strip().lower() for n in names)
        logger.debug(f"Seeded variant '{label}' from {len(names)} names "
                     f"({len(model)} contexts{', replaced' if replaced else ''})")

    def load(self, label: str, model: TransitionModel):
        """Register a pre-built model under ``label``."""
        with self._lock:
            self._chains[label] = model
            self._seed_names[label] = frozenset()
        logger.debug(f"Loaded model for variant '{label}' ({len(model)} contexts)")

    def model(self, label: str) -> TransitionModel:
        with self._lock:
            model = self._chains.get(label)
        if model is None:
            raise UnknownVariantError(label)
        return model

    def variants(self) -> List[str]:
        """Labels of all registered variants."""
        with self._lock:
            return list(self._chains)

    def __contains__(self, label: str) -> bool:
        with self._lock:
            return label in self._chains

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def _sampler(self, label: str) -> NameSampler:
        return NameSampler(self.model(label), rng=self.rng,
                           placeholder=self.placeholder, strict=self.strict)

    def generate(self, label: str) -> str:
        """Generate one name for ``label``; raises UnknownVariantError if never seeded."""
        return self._sampler(label).generate()

    def generate_batch(self,
                       label: str,
                       count: int,
                       unique: bool = True,
                       novel: bool = False,
                       max_attempts: int = None) -> List[str]:
        """
        Generate up to ``count`` names for ``label``.

        Args:
            label: Variant label
            count: Number of names wanted
            unique: Drop case-insensitive duplicates
            novel: Drop names that appear in the variant's seed corpus
            max_attempts: Draw limit (default: count * generation.max_attempts_factor)

        Returns:
            List of generated names, possibly shorter than ``count`` when the
            model cannot produce enough distinct names.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        sampler = self._sampler(label)
        with self._lock:
            known = self._seed_names.get(label, frozenset())

        if max_attempts is None:
            max_attempts = count * self._attempts_factor

        results = []
        seen = set()
        attempts = 0

        while len(results) < count and attempts < max_attempts:
            attempts += 1
            name = sampler.generate()
            key = name.lower()

            if unique and key in seen:
                continue
            if novel and key in known:
                continue

            seen.add(key)
            results.append(name)

        if len(results) < count:
            logger.warning(f"Generated only {len(results)}/{count} names for "
                           f"'{label}' after {attempts} attempts")
        return results


__all__ = [
    'NameGenerator',
]
