# wiktsearch Utilities Package
"""
Shared utility functions and helpers for the Wiktionary search provider.
"""

from .helpers import load_settings, open_url

__all__ = ["load_settings", "open_url"]
