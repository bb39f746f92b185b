from .chunking import chunk_text, estimate_recipe_count
from .extraction import ExtractionClient, ExtractionResult, RequestPacer, RetryState
from .normalizer import normalize, normalize_all
from .deduplication import dedupe, normalize_title
from .validation import (
    ProbeTempErrors,
    validate,
    validate_parameters,
    validate_probe_temps,
    default_parameters,
)
from .formatting import ParameterCategory, format_summary, resolve_parameters
from .decoration import coerce_suggestions, decorate_steps, analyze_and_decorate
from .pipeline import ChunkFailure, IngestionResult, ingest_text

__all__ = [
    "chunk_text",
    "estimate_recipe_count",
    "ExtractionClient",
    "ExtractionResult",
    "RequestPacer",
    "RetryState",
    "normalize",
    "normalize_all",
    "dedupe",
    "normalize_title",
    "ProbeTempErrors",
    "validate",
    "validate_parameters",
    "validate_probe_temps",
    "default_parameters",
    "ParameterCategory",
    "format_summary",
    "resolve_parameters",
    "coerce_suggestions",
    "decorate_steps",
    "analyze_and_decorate",
    "ChunkFailure",
    "IngestionResult",
    "ingest_text",
]
