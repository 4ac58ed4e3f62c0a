# wiktsearch Services Package
"""
Backend services for the Wiktionary search provider.

Services handle query dispatching, the result cache and the API client.
"""

from .api import WiktionaryApi
from .dispatcher import Dispatcher, PendingLookup
from .provider import WiktionarySearchProvider
from .query import DictionaryQuery, parse_query
from .results import ERROR_ID, LOADING_ID, ResultCache, ResultMeta, ResultRecord

__all__ = [
    "WiktionaryApi",
    "Dispatcher",
    "PendingLookup",
    "WiktionarySearchProvider",
    "DictionaryQuery",
    "parse_query",
    "ResultCache",
    "ResultMeta",
    "ResultRecord",
    "LOADING_ID",
    "ERROR_ID",
]
