"""
Result Cache - Map opaque result identifiers back to full records.

The host search surface only ever sees identifiers. It comes back later
asking for display metadata (name, description) or to activate a result,
and the cache resolves those identifiers to the records the API returned.

Two synthetic messages ("__loading__" and "__error__") are always
resolvable and never stored in the cache.

Entries are bounded by recency: storing or overwriting a record makes it
the most recent one, and the oldest entries are evicted once the cache
holds more than `capacity` records.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Iterable, Optional

from loguru import logger

from wiktsearch.exceptions import DecodeError, ResultNotFoundError

LOADING_ID = "__loading__"
ERROR_ID = "__error__"

DEFAULT_CAPACITY = 200


@dataclass(frozen=True)
class ResultRecord:
    """A single entity returned by the search API."""
    id: str
    label: str
    description: str = ""
    url: str = ""  # protocol-relative or path fragment, e.g. //en.wiktionary.org/wiki/Q1

    @classmethod
    def from_api(cls, entry: dict) -> "ResultRecord":
        """
        Build a record from one element of the API's "search" array.

        Raises:
            DecodeError: If the entry is not an object or has no id
        """
        if not isinstance(entry, dict) or not entry.get("id"):
            raise DecodeError(f"Malformed search entry: {entry!r}")

        return cls(
            id=str(entry["id"]),
            label=entry.get("label") or str(entry["id"]),
            description=entry.get("description") or "",
            url=entry.get("url") or "",
        )


@dataclass(frozen=True)
class ResultMeta:
    """Display metadata handed to the host for one identifier."""
    id: str
    name: str
    description: str = ""


MESSAGES = {
    LOADING_ID: ResultMeta(
        id=LOADING_ID,
        name="Wiktionary",
        description="Loading items from Wiktionary, please wait...",
    ),
    ERROR_ID: ResultMeta(
        id=ERROR_ID,
        name="Wiktionary",
        description="Oops, an error occurred while searching.",
    ),
}


def is_message(identifier: str) -> bool:
    """Return True for the synthetic loading/error identifiers."""
    return identifier in MESSAGES


class ResultCache:
    """Identifier -> ResultRecord mapping with recency-bounded eviction."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._records: "OrderedDict[str, ResultRecord]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._records

    def store(self, records: Iterable[ResultRecord]) -> list[str]:
        """
        Insert records, overwriting any previous record with the same id.

        Args:
            records: Records in the order the API returned them

        Returns:
            Identifiers in the same order.
        """
        identifiers = []
        for record in records:
            self._records[record.id] = record
            self._records.move_to_end(record.id)
            identifiers.append(record.id)

        while len(self._records) > self.capacity:
            evicted, _ = self._records.popitem(last=False)
            logger.debug(f"Evicted result {evicted} from cache")

        return identifiers

    def get(self, identifier: str) -> Optional[ResultRecord]:
        """Return the stored record, or None for messages and unknown ids."""
        return self._records.get(identifier)

    def resolve(self, identifier: str) -> ResultMeta:
        """
        Resolve an identifier to display metadata.

        Messages are checked first, then the cache.

        Raises:
            ResultNotFoundError: If the identifier is neither a message nor cached
        """
        if identifier in MESSAGES:
            return MESSAGES[identifier]

        record = self._records.get(identifier)
        if record is None:
            raise ResultNotFoundError(identifier)

        return ResultMeta(
            id=record.id,
            name=record.label,
            description=record.description,
        )

    def clear(self) -> None:
        self._records.clear()
