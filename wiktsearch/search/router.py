"""
Query Router - Dispatches launcher queries to priority-ordered handlers.

Each handler declares a priority (lower = higher priority) and a matches()
method. The router finds the first matching handler and returns its
immediate results. Handlers that answer asynchronously push later results
through their own update callback.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class ResultItem:
    """A single search result from any handler."""
    title: str
    description: str = ""
    icon: str = "image-missing"
    result_type: str = "dictionary"
    result_id: str = ""
    on_activate: Optional[Callable] = None


class SearchHandler(ABC):
    """Base class for all search handlers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Handler identifier."""
        ...

    @property
    @abstractmethod
    def priority(self) -> int:
        """Lower number = checked first."""
        ...

    @abstractmethod
    def matches(self, query: str) -> bool:
        """Return True if this handler should process the query."""
        ...

    @abstractmethod
    def get_results(self, query: str) -> list[ResultItem]:
        """Return results for the query."""
        ...


class QueryRouter:
    """Routes queries to the appropriate handler based on priority."""

    def __init__(self):
        self._handlers: list[SearchHandler] = []

    def register(self, handler: SearchHandler) -> None:
        """Register a handler and re-sort by priority."""
        self._handlers.append(handler)
        self._handlers.sort(key=lambda h: h.priority)

    def unregister(self, handler: SearchHandler) -> None:
        """Remove a handler. Unknown handlers are ignored."""
        if handler in self._handlers:
            self._handlers.remove(handler)

    @property
    def handlers(self) -> list[SearchHandler]:
        return list(self._handlers)

    def route(self, query: str) -> tuple[str, list[ResultItem]]:
        """
        Find the first matching handler and return its results.

        Args:
            query: The search query string

        Returns:
            Tuple of (handler_name, results_list).
            Returns ("none", []) if no handler matches.
        """
        if not query or not query.strip():
            return "none", []

        for handler in self._handlers:
            if handler.matches(query):
                return handler.name, handler.get_results(query)

        return "none", []
