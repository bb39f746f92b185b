"""Recipe ingestion package: unstructured text in, validated recipe records out."""

import asyncio
import logging
from typing import Any, Mapping, Optional, Union

from .config import IngestionSettings
from .exceptions import (
    RecipeIngestionError,
    ChunkingError,
    ExtractionError,
    ExtractionFailure,
    NormalizationError,
    EmptyResultError,
)
from .models import ApplianceFamily, CandidateRecipe, CookingAction, Step
from .services.decoration import Analyzer
from .services.formatting import format_summary
from .services.pipeline import IngestionResult, ProgressCallback, ingest_text
from .services.validation import ProbeTempErrors, ValidationErrors, validate, validate_parameters, validate_probe_temps

logger = logging.getLogger(__name__)


class RecipeIngestor:
    """Main entry point for importing recipes and checking appliance actions."""

    def __init__(
        self,
        settings: Optional[IngestionSettings] = None,
        analyzer: Optional[Analyzer] = None,
        client=None,
    ):
        """
        Args:
            settings: Defaults to ``IngestionSettings.from_env()``.
            analyzer: Optional appliance analyzer used to decorate steps.
            client: Optional AsyncOpenAI-compatible client shared by imports.
        """
        self.settings = settings or IngestionSettings.from_env()
        self.analyzer = analyzer
        self.client = client

    async def ingest(
        self,
        text: str,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> IngestionResult:
        logger.info(f"Starting import ({len(text or '')} chars)")
        return await ingest_text(
            text,
            self.settings,
            client=self.client,
            analyzer=self.analyzer,
            progress_callback=progress_callback,
            cancel_event=cancel_event,
        )

    @staticmethod
    def validate_parameter(
        family: Union[str, ApplianceFamily],
        method_id: Union[str, int],
        key: str,
        raw_value: Any,
        current_parameters: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        return validate(family, method_id, key, raw_value, current_parameters)

    @staticmethod
    def validate_action(family: Union[str, ApplianceFamily], action: CookingAction) -> ValidationErrors:
        return validate_parameters(family, action.methodId, action.parameters)

    @staticmethod
    def summarize(action: CookingAction) -> str:
        return format_summary(action)


__all__ = [
    "RecipeIngestor",
    "IngestionSettings",
    "IngestionResult",
    "CandidateRecipe",
    "CookingAction",
    "Step",
    "ApplianceFamily",
    "ProbeTempErrors",
    "validate",
    "validate_parameters",
    "validate_probe_temps",
    "format_summary",
    "ingest_text",
    "RecipeIngestionError",
    "ChunkingError",
    "ExtractionError",
    "ExtractionFailure",
    "NormalizationError",
    "EmptyResultError",
]
