"""
Search handlers - Pluggable query processors.

Each handler checks if it can handle a query and returns typed results.
"""

from .wiktionary import WiktionarySearchHandler

__all__ = ["WiktionarySearchHandler"]
