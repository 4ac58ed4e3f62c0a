# wiktsearch Package
"""
Wiktionary search provider for launcher search surfaces.

Queries starting with "wikt" (or "wikt-<lang>") are forwarded to the
Wiktionary entity search API and shown as search results:

  wikt chat       -> search in the default language
  wikt-fr chat    -> search in French
"""

__version__ = "0.1.0-dev"
