"""
Wiktionary Handler - Dictionary lookups from the launcher search entry.

Triggers on the provider's marker:
  wikt chat       -> Wiktionary in the default language
  wikt-fr chat    -> Wiktionary in French

The lookup is debounced and asynchronous. get_results() returns what is
known right away (the loading message); the final results are pushed to
on_update once the API answers.
"""

from typing import Callable, Optional, Sequence

from wiktsearch.search.router import ResultItem
from wiktsearch.services.provider import WiktionarySearchProvider
from wiktsearch.services.query import parse_query
from wiktsearch.services.results import ResultMeta, is_message

ICON = "accessories-dictionary"


class WiktionarySearchHandler:
    """Forward marker queries to a WiktionarySearchProvider."""

    name = "wiktionary"
    priority = 150

    def __init__(
        self,
        provider: WiktionarySearchProvider,
        on_update: Optional[Callable[[list[ResultItem]], None]] = None,
    ):
        self.provider = provider
        self.on_update = on_update
        self._immediate: Optional[list[ResultItem]] = None

    def matches(self, query: str) -> bool:
        dispatcher = self.provider.dispatcher
        return parse_query(query.split(), dispatcher.marker, dispatcher.default_language) is not None

    def get_results(self, query: str) -> list[ResultItem]:
        # Anything delivered synchronously is returned; later deliveries go to on_update
        self._immediate = []
        self.provider.get_initial_result_set(query.split(), self._on_identifiers)
        results, self._immediate = self._immediate, None
        return results

    def _on_identifiers(self, identifiers: Sequence[str]) -> None:
        identifiers = self.provider.filter_results(identifiers, len(identifiers))
        self.provider.get_result_metas(identifiers, self._on_metas)

    def _on_metas(self, metas: list[ResultMeta]) -> None:
        items = [self._meta_to_result(meta) for meta in metas]
        if self._immediate is not None:
            self._immediate = items
        elif self.on_update:
            self.on_update(items)

    def _meta_to_result(self, meta: ResultMeta) -> ResultItem:
        """Convert provider metadata to a ResultItem."""
        on_activate = None
        if not is_message(meta.id):
            on_activate = lambda i=meta.id: self.provider.activate_result(i)

        return ResultItem(
            title=meta.name,
            description=meta.description,
            icon=ICON,
            result_type="dictionary",
            result_id=meta.id,
            on_activate=on_activate,
        )
