"""
Debounced Dispatcher - Turn keystrokes into at most one API lookup.

Every eligible submit:
  1. Reports the loading message to the caller right away
  2. Cancels the previous lookup if its timer has not fired yet
  3. Schedules a new lookup after `delay_ms`, tagged with a fresh generation

When a response comes back it is only applied if its generation is still
the current one. Anything older is dropped without touching the cache,
calling back or logging. A lookup that already hit the network cannot be
aborted; the generation check is what makes it harmless.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Protocol, Sequence

from loguru import logger

from wiktsearch.services.query import (
    DEFAULT_LANGUAGE,
    DEFAULT_MARKER,
    DictionaryQuery,
    parse_query,
)
from wiktsearch.services.results import ERROR_ID, LOADING_ID, ResultCache, ResultRecord

REQUEST_DELAY_MS = 200

ResultCallback = Callable[[list[str]], None]
SearchFunc = Callable[[str, str], Sequence[ResultRecord]]


class Scheduler(Protocol):
    """Single-threaded timer queue plus off-loop execution of blocking jobs."""

    def timeout_add(self, delay_ms: int, callback: Callable[[], Any]) -> int:
        ...

    def source_remove(self, source_id: int) -> None:
        ...

    def run_in_thread(
        self,
        func: Callable[[], Any],
        on_done: Callable[[Any, Optional[BaseException]], None],
    ) -> None:
        ...


@dataclass
class PendingLookup:
    """Handle for one scheduled lookup."""
    generation: int
    query: DictionaryQuery
    dispatcher: "Dispatcher"

    @property
    def superseded(self) -> bool:
        """True once a newer submit (or destroy) replaced this lookup."""
        return self.dispatcher.generation != self.generation


class Dispatcher:
    """Debounces dictionary queries and applies only the latest response."""

    def __init__(
        self,
        search: SearchFunc,
        cache: ResultCache,
        scheduler: Scheduler,
        marker: str = DEFAULT_MARKER,
        default_language: str = DEFAULT_LANGUAGE,
        delay_ms: int = REQUEST_DELAY_MS,
    ):
        self._search = search
        self._cache = cache
        self._scheduler = scheduler
        self.marker = marker
        self.default_language = default_language
        self.delay_ms = delay_ms

        # Language of the last lookup that fired, used to build result URLs
        self.language = default_language

        self.generation = 0
        self.cancelled_count = 0
        self._timeout_id = 0

    def submit(self, terms: Sequence[str], callback: ResultCallback) -> Optional[PendingLookup]:
        """
        Dispatch a term list.

        Args:
            terms: Whitespace-split query
            callback: Receives identifier lists, possibly more than once

        Returns:
            PendingLookup for dictionary queries, None otherwise.
        """
        query = parse_query(terms, self.marker, self.default_language)
        if query is None:
            callback([])
            return None

        callback([LOADING_ID])

        self._cancel_timer()
        self.generation += 1
        generation = self.generation
        self._timeout_id = self._scheduler.timeout_add(
            self.delay_ms,
            lambda: self._fire(query, generation, callback),
        )
        return PendingLookup(generation=generation, query=query, dispatcher=self)

    def destroy(self) -> None:
        """Cancel the scheduled lookup and ignore any response still in flight."""
        self._cancel_timer()
        self.generation += 1

    def _cancel_timer(self) -> None:
        if self._timeout_id > 0:
            self._scheduler.source_remove(self._timeout_id)
            self._timeout_id = 0
            self.cancelled_count += 1

    def _fire(self, query: DictionaryQuery, generation: int, callback: ResultCallback) -> bool:
        """Timer callback: start the API request for this generation."""
        self._timeout_id = 0
        if generation != self.generation:
            return False

        self.language = query.language
        logger.debug(f"Looking up '{query.text}' ({query.language}), generation {generation}")
        self._scheduler.run_in_thread(
            lambda: self._search(query.text, query.language),
            lambda records, error: self._on_response(generation, records, error, callback),
        )
        return False

    def _on_response(
        self,
        generation: int,
        records: Optional[Sequence[ResultRecord]],
        error: Optional[BaseException],
        callback: ResultCallback,
    ) -> None:
        """Apply a response, unless a newer lookup superseded it."""
        if generation != self.generation:
            return

        if error is not None:
            logger.error(f"Wiktionary lookup failed: {error}")
            callback([ERROR_ID])
            return

        callback(self._cache.store(records or []))
