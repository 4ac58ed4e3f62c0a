"""Custom exceptions for the Wiktionary search provider."""


class WiktionaryError(Exception):
    """Base exception for all wiktsearch errors."""

    pass


class TransportError(WiktionaryError):
    """Raised when the API answers with a non-OK status or cannot be reached."""

    pass


class DecodeError(WiktionaryError):
    """Raised when the API response body is not the expected JSON payload."""

    pass


class ResultNotFoundError(WiktionaryError, KeyError):
    """Raised when metadata is requested for an identifier nobody stored."""

    def __init__(self, identifier: str):
        super().__init__(identifier)
        self.identifier = identifier

    def __str__(self) -> str:
        return f"Unknown result identifier: {self.identifier!r}"
