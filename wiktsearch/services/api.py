"""
Wiktionary API client.

Thin wrapper around a requests.Session that searches entities through
the wbsearchentities action and builds the URLs the provider opens.

All calls are blocking; the dispatcher runs them off the main loop.
"""

from typing import Optional
from urllib.parse import urlencode, urljoin

import requests
from loguru import logger

from wiktsearch.exceptions import DecodeError, TransportError
from wiktsearch.services.results import ResultRecord

PROTOCOL = "https"
BASE_URL = "en.wiktionary.org"
DEFAULT_LANG = "en"
API_PATH = "w/api.php"
API_LIMIT = 10
HTTP_TIMEOUT = 10
USER_AGENT = "WiktionarySearchProvider (wiktsearch launcher plugin)"


class WiktionaryApi:
    """Client for the Wiktionary entity search API."""

    def __init__(
        self,
        protocol: str = PROTOCOL,
        base_url: str = BASE_URL,
        api_path: str = API_PATH,
        limit: int = API_LIMIT,
        timeout: float = HTTP_TIMEOUT,
        user_agent: str = USER_AGENT,
        session: Optional[requests.Session] = None,
    ):
        self.protocol = protocol
        self.base_url = base_url
        self.api_path = api_path.lstrip("/")
        self.limit = limit
        self.timeout = timeout

        # requests picks up HTTP(S)_PROXY from the environment on its own
        self._session = session or requests.Session()
        self._session.headers["User-Agent"] = user_agent

    @property
    def api_url(self) -> str:
        return f"{self.protocol}://{self.base_url}/{self.api_path}"

    def get(self, params: dict, language: str) -> dict:
        """
        Query the API and return the decoded JSON body.

        Args:
            params: Action-specific query parameters
            language: Language the API should answer in

        Raises:
            TransportError: Network failure or non-200 status
            DecodeError: Body is not a JSON object
        """
        query = {"format": "json", "language": language, **params}

        try:
            response = self._session.get(self.api_url, params=query, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {self.api_url} failed: {e}") from e

        if response.status_code != 200:
            raise TransportError(f"Error code: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"{e}. Response body: {response.text[:200]}") from e

        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")

        return data

    def search(
        self,
        text: str,
        language: str,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[ResultRecord]:
        """
        Search entities matching `text`.

        Args:
            text: Free text to search for
            language: Search language code
            limit: Page size, defaults to the configured limit
            offset: Index of the first result (API "continue")

        Returns:
            Records in API order.

        Raises:
            TransportError, DecodeError
        """
        data = self.get({
            "action": "wbsearchentities",
            "search": text,
            "type": "item",
            "continue": offset,
            "limit": limit or self.limit,
        }, language)

        if "error" in data:
            error = data["error"]
            info = error.get("info", error) if isinstance(error, dict) else error
            raise TransportError(f"API error: {info}")

        entries = data.get("search", [])
        if not isinstance(entries, list):
            raise DecodeError(f"Expected 'search' to be a list, got {type(entries).__name__}")

        records = [ResultRecord.from_api(entry) for entry in entries]
        logger.debug(f"Search '{text}' ({language}) returned {len(records)} results")
        return records

    def get_full_search_url(self, term: str, language: str) -> str:
        """
        Build the browser URL for a full-text search.

        Example: https://en.wiktionary.org/w/index.php?search=chat&setlang=fr
        """
        query = urlencode({"search": term, "setlang": language})
        return f"{self.protocol}://{self.base_url}/w/index.php?{query}"

    def build_result_url(self, fragment: str, language: str) -> str:
        """
        Turn a record's url fragment into an absolute URL.

        Accepts protocol-relative fragments (//host/wiki/Q1) as the API
        returns them, and plain paths (/wiki/Q1) resolved against the host.
        """
        base = f"{self.protocol}://{self.base_url}/"
        url = urljoin(base, fragment)
        return f"{url}?{urlencode({'setlang': language})}"

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()
