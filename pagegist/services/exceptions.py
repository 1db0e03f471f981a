from __future__ import annotations


class ExtractionError(Exception):
    """Base class for extraction errors."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class DocumentError(ExtractionError):
    """The supplied document cannot be navigated (e.g. it has no body)."""


class ExtractionFailure(ExtractionError):
    """An extraction pass failed as a whole; no partial result exists."""


__all__ = [
    "ExtractionError",
    "DocumentError",
    "ExtractionFailure",
]
