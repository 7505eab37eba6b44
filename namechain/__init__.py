#!/usr/bin/env python3
"""
namechain - Markov Chain Name Generator
=======================================

Learns character-transition statistics from labelled seed corpora
("variants") and samples new names that follow the same phonetic
patterns.

Quick Start
-----------
    from namechain import NameGenerator

    gen = NameGenerator()
    gen.seed('elf-male', ['Aelar', 'Thalion', 'Erevan'])
    gen.generate('elf-male')

    # Bundled corpora
    from namechain import load_bundled_corpora
    gen = NameGenerator.from_corpora(load_bundled_corpora())
    gen.generate_batch('dwarf-female', count=5, novel=True)

Modules
-------
    namechain.chain    - Transition model, scaling transform, persistence
    namechain.sampler  - Weighted sampling of names from a model
    namechain.registry - Variant registry (seed / generate / variants)
    namechain.corpora  - Seed corpus loading (YAML / text)
    namechain.settings - Application config (configs/app.yaml)

CLI Usage
---------
    python -m namechain variants
    python -m namechain generate elf-female -n 10 --seed 42
    python -m namechain train -o models.json
    python -m namechain inspect dwarf-male --key a
"""

__version__ = "0.1.0"
__author__ = "namechain"

from .chain import (
    SCALE_EXPONENT,
    ChainBuilder,
    TransitionModel,
    WeightedBag,
    build_model,
    load_models,
    save_models,
    scale_count,
)
from .corpora import load_bundled_corpora, load_corpora
from .errors import NameChainError, NoDataError, UnknownVariantError
from .registry import NameGenerator
from .sampler import PLACEHOLDER, NameSampler


def new(**kwargs) -> NameGenerator:
    """Create an empty NameGenerator with no seed data."""
    return NameGenerator(**kwargs)


__all__ = [
    '__version__',
    # Model
    'SCALE_EXPONENT',
    'ChainBuilder',
    'TransitionModel',
    'WeightedBag',
    'build_model',
    'scale_count',
    'save_models',
    'load_models',
    # Sampling
    'PLACEHOLDER',
    'NameSampler',
    # Registry
    'NameGenerator',
    'new',
    # Corpora
    'load_corpora',
    'load_bundled_corpora',
    # Errors
    'NameChainError',
    'NoDataError',
    'UnknownVariantError',
]
