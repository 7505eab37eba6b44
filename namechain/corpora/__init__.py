#!/usr/bin/env python3
"""
Seed Corpus Loader
==================
Loads labelled seed corpora for the name generator.

Two file formats are understood:
- ``.yaml`` / ``.yml``: a mapping of variant label -> list of names
- ``.txt``: one name per line, the file stem is the label
  (blank lines and ``#`` comments are skipped)

Usage:
    from namechain.corpora import load_bundled_corpora, load_corpus_file

    corpora = load_bundled_corpora()
    corpora['elf-male'][:3]
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Tuple

import yaml

from ..settings import get_setting, resolve_path

logger = logging.getLogger(__name__)

CORPORA_DIR = Path(__file__).parent
YAML_SUFFIXES = ('.yaml', '.yml')
TEXT_SUFFIXES = ('.txt',)


def _validate(label, names, source: Path) -> List[str]:
    if not isinstance(label, str) or not label.strip():
        raise ValueError(f"Invalid variant label {label!r} in {source}")
    if not isinstance(names, list):
        raise ValueError(f"Variant '{label}' in {source} must be a list of names")

    cleaned = []
    for name in names:
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Variant '{label}' in {source} has an empty or non-string name: {name!r}")
        cleaned.append(name.strip())
    return cleaned


def _load_yaml(filepath: Path) -> Dict[str, List[str]]:
    with open(filepath, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Corpus file must contain a mapping of label -> names: {filepath}")
    return {str(label): _validate(label, names, filepath) for label, names in raw.items()}


def _load_text(filepath: Path) -> Dict[str, List[str]]:
    names = []
    for line in filepath.read_text(encoding='utf-8').splitlines():
        line = line.strip()
        if line and not line.startswith('#'):
            names.append(line)
    return {filepath.stem: names}


def load_corpus_file(filepath) -> Dict[str, List[str]]:
    """Load one corpus file into a {label: names} mapping."""
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Corpus file not found: {path}")

    suffix = path.suffix.lower()
    if suffix in YAML_SUFFIXES:
        corpora = _load_yaml(path)
    elif suffix in TEXT_SUFFIXES:
        corpora = _load_text(path)
    else:
        raise ValueError(f"Unsupported corpus format '{path.suffix}': {path}")

    logger.debug(f"Loaded {len(corpora)} variant(s) from {path}")
    return corpora


def load_corpus_dir(directory) -> Dict[str, List[str]]:
    """Load and merge every corpus file in a directory."""
    path = Path(directory)
    if not path.is_dir():
        raise FileNotFoundError(f"Corpus directory not found: {path}")

    corpora: Dict[str, List[str]] = {}
    for filepath in sorted(path.iterdir()):
        if filepath.suffix.lower() not in YAML_SUFFIXES + TEXT_SUFFIXES:
            continue
        for label, names in load_corpus_file(filepath).items():
            if label in corpora:
                raise ValueError(f"Duplicate variant '{label}' in {filepath}")
            corpora[label] = names
    return corpora


def load_corpora(source=None) -> Dict[str, List[str]]:
    """Load corpora from a file or directory (bundled corpora if omitted)."""
    if source is None:
        return load_bundled_corpora()
    path = Path(source)
    if path.is_dir():
        return load_corpus_dir(path)
    return load_corpus_file(path)


@lru_cache(maxsize=1)
def _bundled_corpora() -> Dict[str, Tuple[str, ...]]:
    directory = get_setting("corpora.directory")
    corpora = load_corpus_dir(resolve_path(directory) if directory else CORPORA_DIR)
    return {label: tuple(names) for label, names in corpora.items()}


def load_bundled_corpora() -> Dict[str, List[str]]:
    """Load the corpora shipped with the package (``corpora.directory``).

    Files are parsed once; every call returns a fresh copy.
    """
    return {label: list(names) for label, names in _bundled_corpora().items()}


__all__ = [
    'CORPORA_DIR',
    'load_corpus_file',
    'load_corpus_dir',
    'load_corpora',
    'load_bundled_corpora',
]
