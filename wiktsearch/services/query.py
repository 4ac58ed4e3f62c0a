"""
Query parsing - Decide whether typed terms are a dictionary query.

A dictionary query has at least two terms and the first one starts with
the marker ("wikt" by default). The marker may carry a language code:

  wikt chat           -> text "chat", default language
  wikt-ru кошка       -> text "кошка", language "ru"
  wikt-en-extra word  -> text "word", default language (only one hyphen honoured)
  wikt- word          -> text "word", default language
"""

from dataclasses import dataclass
from typing import Optional, Sequence

DEFAULT_MARKER = "wikt"
DEFAULT_LANGUAGE = "en"


@dataclass(frozen=True)
class DictionaryQuery:
    """Search text plus the language it should be looked up in."""
    text: str
    language: str


def parse_language(head: str, default_language: str = DEFAULT_LANGUAGE) -> str:
    """
    Return the language code carried by the first term, if any.

    An empty code ("wikt-") is treated as no code.
    """
    parts = head.split("-")
    if len(parts) == 2 and parts[1]:
        return parts[1]
    return default_language


def parse_query(
    terms: Sequence[str],
    marker: str = DEFAULT_MARKER,
    default_language: str = DEFAULT_LANGUAGE,
) -> Optional[DictionaryQuery]:
    """
    Parse a term list into a DictionaryQuery.

    Args:
        terms: Whitespace-split query as typed by the user
        marker: Prefix the first term must start with
        default_language: Language used when the marker carries none

    Returns:
        DictionaryQuery, or None if the terms are not a dictionary query.
    """
    if len(terms) < 2 or not terms[0].startswith(marker):
        return None

    return DictionaryQuery(
        text=" ".join(terms[1:]),
        language=parse_language(terms[0], default_language),
    )
