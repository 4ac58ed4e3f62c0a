"""
Search package - Query routing and handler framework.

The launcher dispatches queries to priority-ordered handlers; the
Wiktionary handler is one of them.
"""

from .router import QueryRouter, SearchHandler, ResultItem

__all__ = ["QueryRouter", "SearchHandler", "ResultItem"]
