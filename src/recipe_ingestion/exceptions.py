"""Exceptions for recipe ingestion package."""

from enum import Enum
from typing import Optional


class RecipeIngestionError(Exception):
    """Base class for every error raised by the ingestion pipeline."""
    pass


class ChunkingError(RecipeIngestionError):
    """Raised when chunking parameters cannot produce a valid window sequence."""
    pass


class ExtractionFailure(str, Enum):
    """Why a single extraction call failed."""

    UNAVAILABLE = "unavailable"
    TIMED_OUT = "timed_out"
    RATE_LIMITED = "rate_limited"
    MALFORMED_PAYLOAD = "malformed_payload"
    QUOTA_EXHAUSTED = "quota_exhausted"


class ExtractionError(RecipeIngestionError):
    """Raised when the extraction service does not return usable text for a chunk."""

    def __init__(self, reason: ExtractionFailure, message: str = "", attempts: int = 1):
        self.reason = reason
        self.attempts = attempts
        self.history: list = []
        super().__init__(message or reason.value)


class NormalizationError(RecipeIngestionError):
    """Raised when a response cannot be turned into a candidate recipe."""
    pass


class EmptyResultError(RecipeIngestionError):
    """Raised when an import finishes without a single usable recipe."""

    def __init__(self, message: str = "No recipes found in the text.", failures: Optional[list] = None):
        self.failures = failures or []
        super().__init__(message)
