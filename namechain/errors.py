#!/usr/bin/env python3
"""Exceptions raised by namechain."""


class NameChainError(Exception):
    """Base class for namechain errors."""


class UnknownVariantError(NameChainError, LookupError):
    """Raised when a variant label was never seeded."""

    def __init__(self, variant: str):
        self.variant = variant
        super().__init__(
            f"unable to generate name of type {variant}: no sample data exists"
        )


class NoDataError(NameChainError):
    """Raised when a model has no weighted bag for a required context key."""

    def __init__(self, key: str, message: str = None):
        self.key = key
        super().__init__(message or f"no learned statistics for context '{key}'")


__all__ = [
    'NameChainError',
    'UnknownVariantError',
    'NoDataError',
]
