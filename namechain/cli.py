#!/usr/bin/env python3
"""
namechain CLI
=============
Command-line interface for training and sampling name models.

Usage:
    namechain variants
    namechain generate elf-male -n 10 --seed 42
    namechain train -o models.json
    namechain inspect dwarf-female --key a
"""

import argparse
import logging
import random
import sys

from rich.console import Console
from rich.table import Table

from namechain import __version__
from namechain.chain import INITIAL, NAME_LEN, PARTS, save_models, load_models
from namechain.corpora import load_corpora
from namechain.errors import NameChainError
from namechain.registry import NameGenerator
from namechain.settings import get_setting

logger = logging.getLogger(__name__)


# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False):
        self.quiet = quiet
        self.console = Console(highlight=False)
        self.err_console = Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def result(self, text: str):
        """Print essential output (shown even in quiet mode)."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def error(self, msg: str):
        self.err_console.print(f"Error: {msg}", markup=False, soft_wrap=True)

    def success(self, msg: str):
        if not self.quiet:
            self.console.print(f"OK: {msg}", markup=False, soft_wrap=True)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a formatted table."""
        if self.quiet:
            return

        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def setup_logging(verbose: bool = False):
    level_name = 'DEBUG' if verbose else get_setting('logging.level', 'WARNING')
    logging.basicConfig(
        level=getattr(logging, str(level_name).upper(), logging.WARNING),
        format=get_setting('logging.format', '%(levelname)s %(name)s: %(message)s'),
    )


def build_generator(args) -> NameGenerator:
    """Create a registry from --models or --corpus (bundled corpora by default)."""
    rng = random.Random(args.seed) if getattr(args, 'seed', None) is not None else None
    strict = True if getattr(args, 'strict', False) else None
    gen = NameGenerator(rng=rng, strict=strict)

    if getattr(args, 'models', None):
        for label, model in load_models(args.models).items():
            gen.load(label, model)
        return gen

    corpora = load_corpora(getattr(args, 'corpus', None))
    wanted = getattr(args, 'variant', None)
    for label, names in corpora.items():
        if wanted is None or label == wanted:
            gen.seed(label, names)
    return gen


# =============================================================================
# Commands
# =============================================================================

def cmd_variants(args, out: Output):
    """List available variants."""
    corpora = load_corpora(args.corpus)
    if not corpora:
        out.print("No variants found.")
        return 0

    if args.quiet:
        for label in corpora:
            out.result(label)
        return 0

    rows = []
    for label, names in corpora.items():
        multi = sum(1 for n in names if len(n.split()) > 1)
        rows.append([label, len(names), multi])
    out.table(['Variant', 'Names', 'Multi-word'], rows)
    return 0


def cmd_generate(args, out: Output):
    """Generate names for a variant."""
    count = args.count if args.count is not None else get_setting('generation.default_count', 10)
    gen = build_generator(args)

    names = gen.generate_batch(args.variant, count=count,
                               unique=args.unique, novel=args.novel)
    if not names:
        out.print("No names generated.")
        return 0

    for name in names:
        out.result(name)

    if len(names) < count:
        out.print(f"Only {len(names)} of {count} names could be generated.")
    return 0


def cmd_train(args, out: Output):
    """Build models from corpora and save them as JSON."""
    corpora = load_corpora(args.corpus)
    labels = args.variants or list(corpora)

    missing = [label for label in labels if label not in corpora]
    if missing:
        out.error(f"Unknown variant(s): {', '.join(missing)}")
        return 1

    gen = NameGenerator()
    for label in labels:
        gen.seed(label, corpora[label])

    save_models({label: gen.model(label) for label in labels}, args.output)
    out.success(f"Saved {len(labels)} model(s) to {args.output}")
    return 0


def cmd_inspect(args, out: Output):
    """Show bag weights for a variant's model."""
    model = build_generator(args).model(args.variant)

    keys = [args.key] if args.key else [PARTS, NAME_LEN, INITIAL]
    for key in keys:
        if key not in model:
            out.print(f"No bag for context '{key}'.")
            continue
        bag = model[key]
        rows = [[repr(token), weight, f"{weight / bag.total:.1%}" if bag.total else '-']
                for token, weight in sorted(bag.items(), key=lambda kv: -kv[1])]
        out.table(['Token', 'Weight', 'Share'], rows,
                  title=f"{key} (total {bag.total})")

    if not args.key:
        contexts = sorted(k for k in model if k not in (PARTS, NAME_LEN, INITIAL))
        out.print(f"Character contexts: {' '.join(contexts)}")
    return 0


# =============================================================================
# Main
# =============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog='namechain',
        description='namechain - Markov chain name generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s variants
  %(prog)s generate elf-female -n 10 --seed 42
  %(prog)s generate dwarf-male --novel --corpus my_names.yaml
  %(prog)s train -o models.json
  %(prog)s generate elf-male --models models.json
  %(prog)s inspect halfling --key a
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- variants ---
    p = subparsers.add_parser('variants', aliases=['ls'], help='List available variants')
    p.add_argument('--corpus', '-c', help='Corpus file or directory (default: bundled corpora)')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate names')
    p.add_argument('variant', help='Variant label (e.g. elf-male)')
    p.add_argument('-n', '--count', type=int, help='Number of names (default: generation.default_count)')
    p.add_argument('--seed', type=int, help='Random seed for reproducible output')
    p.add_argument('--allow-duplicates', dest='unique', action='store_false',
                   help='Keep duplicate names')
    p.add_argument('--novel', action='store_true', help='Skip names present in the seed corpus')
    p.add_argument('--strict', action='store_true',
                   help='Fail instead of inserting a placeholder for unseen characters')
    source = p.add_mutually_exclusive_group()
    source.add_argument('--corpus', '-c', help='Corpus file or directory')
    source.add_argument('--models', '-m', help='Load pre-trained models from JSON')

    # --- train ---
    p = subparsers.add_parser('train', help='Train models and save them as JSON')
    p.add_argument('variants', nargs='*', help='Variants to train (default: all)')
    p.add_argument('--output', '-o', required=True, help='Output JSON file')
    p.add_argument('--corpus', '-c', help='Corpus file or directory')

    # --- inspect ---
    p = subparsers.add_parser('inspect', help='Show learned weights for a variant')
    p.add_argument('variant', help='Variant label')
    p.add_argument('--key', '-k', help='Context key (parts, name_len, initial or a character)')
    source = p.add_mutually_exclusive_group()
    source.add_argument('--corpus', '-c', help='Corpus file or directory')
    source.add_argument('--models', '-m', help='Load pre-trained models from JSON')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    cmd_map = {
        'ls': 'variants',
        'gen': 'generate', 'g': 'generate',
    }
    command = cmd_map.get(args.command, args.command)

    setup_logging(args.verbose)
    out = Output(quiet=args.quiet)

    commands = {
        'variants': cmd_variants,
        'generate': cmd_generate,
        'train': cmd_train,
        'inspect': cmd_inspect,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (NameChainError, ValueError, OSError) as e:
            logger.debug("Command failed", exc_info=True)
            out.error(str(e))
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
