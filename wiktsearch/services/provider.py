"""
Wiktionary Search Provider - The entry points a search surface calls.

  get_initial_result_set(terms, callback)   start (or restart) a lookup
  get_subset_result_set(prev, terms, cb)    refine while the user keeps typing
  get_result_metas(identifiers, callback)   identifiers -> display metadata
  activate_result(identifier)               open the result in the browser
  filter_results(results, max_count)        cap the number of shown results
  launch_search(terms)                      open the full-text search page

The provider owns its API session, cache and dispatcher. Call destroy()
when the host disables it.
"""

from typing import Any, Callable, Dict, Optional, Sequence

from loguru import logger

from wiktsearch.exceptions import ResultNotFoundError
from wiktsearch.services.api import WiktionaryApi
from wiktsearch.services.dispatcher import Dispatcher, PendingLookup, ResultCallback, Scheduler
from wiktsearch.services.query import parse_query
from wiktsearch.services.results import ERROR_ID, MESSAGES, ResultCache, ResultMeta, is_message
from wiktsearch.utils.helpers import open_url


class WiktionarySearchProvider:
    """Search provider forwarding "wikt" queries to Wiktionary."""

    name = "Wiktionary Search Provider"

    def __init__(
        self,
        api: WiktionaryApi,
        scheduler: Scheduler,
        marker: str = "wikt",
        default_language: str = "en",
        request_delay_ms: int = 200,
        cache_size: int = 200,
        opener: Callable[[str], Any] = open_url,
    ):
        self._api = api
        self._opener = opener
        self.cache = ResultCache(capacity=cache_size)
        self.dispatcher = Dispatcher(
            search=api.search,
            cache=self.cache,
            scheduler=scheduler,
            marker=marker,
            default_language=default_language,
            delay_ms=request_delay_ms,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Dict[str, Any],
        scheduler: Scheduler,
        opener: Callable[[str], Any] = open_url,
    ) -> "WiktionarySearchProvider":
        """Build a provider from the [wiktionary] section of load_settings()."""
        conf = settings["wiktionary"]
        api = WiktionaryApi(
            protocol=conf["protocol"],
            base_url=conf["base_url"],
            api_path=conf["api_path"],
            limit=conf["limit"],
            timeout=conf["timeout"],
            user_agent=conf["user_agent"],
        )
        return cls(
            api,
            scheduler,
            marker=conf["marker"],
            default_language=conf["language"],
            request_delay_ms=conf["request_delay_ms"],
            cache_size=conf["cache_size"],
            opener=opener,
        )

    @property
    def language(self) -> str:
        """Language of the most recent lookup."""
        return self.dispatcher.language

    @property
    def limit(self) -> int:
        return self._api.limit

    def get_initial_result_set(self, terms: Sequence[str], callback: ResultCallback) -> Optional[PendingLookup]:
        return self.dispatcher.submit(terms, callback)

    def get_subset_result_set(
        self,
        previous_results: Sequence[str],
        terms: Sequence[str],
        callback: ResultCallback,
    ) -> Optional[PendingLookup]:
        """
        Refine a previous result set.

        The API ranks results by the full text, so narrowing the old set
        locally would miss better matches; a fresh lookup is dispatched.
        """
        return self.dispatcher.submit(terms, callback)

    def get_result_metas(self, identifiers: Sequence[str], callback: Callable[[list[ResultMeta]], None]) -> None:
        """Run callback with metadata for each identifier, in order."""
        metas = []
        for identifier in identifiers:
            try:
                metas.append(self.cache.resolve(identifier))
            except ResultNotFoundError as e:
                logger.warning(str(e))
                metas.append(MESSAGES[ERROR_ID])
        callback(metas)

    def resolve_url(self, identifier: str) -> Optional[str]:
        """Absolute URL of a cached result, None for messages and unknown ids."""
        if is_message(identifier):
            return None

        record = self.cache.get(identifier)
        if record is None or not record.url:
            return None

        return self._api.build_result_url(record.url, self.language)

    def activate_result(self, identifier: str) -> bool:
        """
        Open a result in the default browser.

        Returns:
            True if a URL was handed to the opener
        """
        url = self.resolve_url(identifier)
        if url is None:
            return False

        self._opener(url)
        return True

    def filter_results(self, results: Sequence[str], max_count: int) -> list[str]:
        """Return the first `limit` results (the API page size wins over max_count)."""
        return list(results[:self._api.limit])

    def launch_search(self, terms: Sequence[str]) -> str:
        """Open the full-text search page for the query text."""
        query = parse_query(terms, self.dispatcher.marker, self.dispatcher.default_language)
        if query is None:
            text, language = " ".join(terms[1:]), self.language
        else:
            text, language = query.text, query.language

        url = self._api.get_full_search_url(text, language)
        self._opener(url)
        return url

    def destroy(self) -> None:
        """Stop pending lookups and close the HTTP session."""
        self.dispatcher.destroy()
        self._api.close()
