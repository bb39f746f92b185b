"""
Extraction client: send one chunk of text to the LLM and get raw JSON text back.

Retries are owned here rather than by the OpenAI SDK so that every attempt
is visible as a state transition:

    PENDING -> RETRYING -> ... -> SUCCEEDED | FAILED

Only rate limits are retried (once, after a fixed delay). Timeouts, quota
exhaustion, transport failures and empty responses fail immediately. Sleep
and clock are injectable so tests never wait on real timers.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Awaitable, Callable, List, Optional

import openai
from pydantic import BaseModel, Field

from ..config import IngestionSettings, SamplingConfig, PROVIDERS
from ..exceptions import ExtractionError, ExtractionFailure
from ..models.recipe import TextChunk
from ..observability import observe, get_async_openai_class
from ..prompts.extraction import EXTRACTION_SYSTEM_PROMPT, get_extraction_user_prompt

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]
ClockFn = Callable[[], float]

# Gemini mentions "quota" in ordinary per-minute 429s too; only hard limits count
QUOTA_CODES = ("insufficient_quota",)
QUOTA_MESSAGE_MARKERS = ("insufficient_quota", "billing", "perday", "per day")


class RetryState(str, Enum):
    PENDING = "pending"
    RETRYING = "retrying"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ExtractionResult(BaseModel):
    """Raw response text for one chunk, plus how it was obtained."""

    text: str
    attempts: int = Field(ge=1)
    state: RetryState = RetryState.SUCCEEDED
    history: List[RetryState] = Field(default_factory=list)


class RequestPacer:
    """
    Keep a minimum gap between the end of one request and the start of the next.

    One pacer belongs to one import; nothing is shared between imports.
    """

    def __init__(self, min_interval_s: float, sleep: SleepFn = asyncio.sleep, clock: ClockFn = time.monotonic):
        self.min_interval_s = min_interval_s
        self._sleep = sleep
        self._clock = clock
        self._last_finished: Optional[float] = None

    async def wait(self) -> float:
        """Sleep until the gap has elapsed. Returns the delay actually waited."""
        if self._last_finished is None or self.min_interval_s <= 0:
            return 0.0
        remaining = self.min_interval_s - (self._clock() - self._last_finished)
        if remaining <= 0:
            return 0.0
        await self._sleep(remaining)
        return remaining

    def mark_finished(self) -> None:
        self._last_finished = self._clock()


def _is_quota_error(exc: openai.RateLimitError) -> bool:
    code = str(getattr(exc, "code", "") or "").lower()
    if code in QUOTA_CODES:
        return True
    message = str(exc).lower()
    return any(marker in message for marker in QUOTA_MESSAGE_MARKERS)


class ExtractionClient:
    """Send chunks to an OpenAI-compatible chat endpoint, one at a time."""

    def __init__(
        self,
        settings: Optional[IngestionSettings] = None,
        client=None,
        sleep: SleepFn = asyncio.sleep,
        clock: ClockFn = time.monotonic,
    ):
        """
        Initialize the extraction client.

        Args:
            settings: Provider, credentials and sampling defaults.
                Defaults to ``IngestionSettings.from_env()``.
            client: Pre-built AsyncOpenAI-compatible client (tests inject a mock).
            sleep: Coroutine used for every delay.
            clock: Monotonic clock used by the pacer.
        """
        self.settings = settings or IngestionSettings.from_env()
        self.model = self.settings.resolved_model
        self._sleep = sleep
        self.pacer = RequestPacer(self.settings.retry.inter_chunk_delay_s, sleep=sleep, clock=clock)

        if client is None:
            env_key = PROVIDERS[self.settings.provider]["env_key"]
            if not self.settings.api_key:
                raise ValueError(
                    f"{self.settings.provider.upper()} API key is required. "
                    f"Set {env_key} env var or pass api_key."
                )

            extra_headers = {}
            if self.settings.provider == "openrouter":
                extra_headers = {
                    "HTTP-Referer": "https://github.com/recipe-display",
                    "X-Title": "Recipe Ingestion",
                }

            AsyncOpenAI = get_async_openai_class()
            client = AsyncOpenAI(
                api_key=self.settings.api_key,
                base_url=self.settings.resolved_base_url,
                default_headers=extra_headers if extra_headers else None,
                max_retries=0,
            )

        self.client = client
        logger.info(f"ExtractionClient initialized with {self.settings.provider}: {self.model}")

    @observe(name="extract_chunk")
    async def extract(self, chunk: TextChunk, config: Optional[SamplingConfig] = None) -> ExtractionResult:
        """
        Extract raw recipe JSON text from one chunk.

        Args:
            chunk: The text window to send.
            config: Sampling overrides. Defaults to the settings' sampling config.

        Returns:
            ExtractionResult with the response text and the attempt history.

        Raises:
            ExtractionError: With the failure reason once no further retry is allowed.
        """
        config = config or self.settings.sampling
        policy = self.settings.retry
        max_attempts = 1 + policy.max_rate_limit_retries

        history = [RetryState.PENDING]
        attempt = 0

        while True:
            attempt += 1
            try:
                text = await self._call_once(chunk, config)
            except ExtractionError as exc:
                exc.attempts = attempt
                if exc.reason == ExtractionFailure.RATE_LIMITED and attempt < max_attempts:
                    history.append(RetryState.RETRYING)
                    logger.warning(
                        f"[Extraction] Rate limited (attempt {attempt}/{max_attempts}), "
                        f"retrying in {policy.rate_limit_retry_delay_s}s..."
                    )
                    await self._sleep(policy.rate_limit_retry_delay_s)
                    continue

                history.append(RetryState.FAILED)
                exc.history = history
                logger.error(f"[Extraction] Failed after {attempt} attempt(s): {exc.reason.value}: {exc}")
                raise

            history.append(RetryState.SUCCEEDED)
            return ExtractionResult(
                text=text,
                attempts=attempt,
                state=RetryState.SUCCEEDED,
                history=history,
            )

    async def _call_once(self, chunk: TextChunk, config: SamplingConfig) -> str:
        await self.pacer.wait()
        try:
            return await self._request(chunk, config)
        finally:
            self.pacer.mark_finished()

    async def _request(self, chunk: TextChunk, config: SamplingConfig) -> str:
        messages = [
            {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
            {"role": "user", "content": get_extraction_user_prompt(chunk.text)},
        ]

        logger.info(f"Calling extraction API ({self.model}, {len(chunk.text)} chars)...")

        try:
            response = await asyncio.wait_for(
                self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=config.temperature,
                    max_tokens=config.max_output_tokens,
                    top_p=config.top_p,
                    extra_body={"top_k": config.top_k},
                ),
                timeout=config.timeout_s,
            )
        except asyncio.TimeoutError as exc:
            raise ExtractionError(
                ExtractionFailure.TIMED_OUT, f"No response within {config.timeout_s}s"
            ) from exc
        except openai.APITimeoutError as exc:
            raise ExtractionError(ExtractionFailure.TIMED_OUT, str(exc)) from exc
        except openai.RateLimitError as exc:
            if _is_quota_error(exc):
                raise ExtractionError(ExtractionFailure.QUOTA_EXHAUSTED, str(exc)) from exc
            raise ExtractionError(ExtractionFailure.RATE_LIMITED, str(exc)) from exc
        except (openai.APIConnectionError, openai.APIStatusError) as exc:
            raise ExtractionError(ExtractionFailure.UNAVAILABLE, str(exc)) from exc

        choices = getattr(response, "choices", None)
        if not choices:
            raise ExtractionError(ExtractionFailure.MALFORMED_PAYLOAD, "Response has no choices")

        content = choices[0].message.content
        if not content or not content.strip():
            raise ExtractionError(ExtractionFailure.MALFORMED_PAYLOAD, "Response text is empty")

        usage = getattr(response, "usage", None)
        if usage is not None:
            logger.info(
                f"Extraction complete: {len(content)} chars "
                f"(tokens: {getattr(usage, 'prompt_tokens', 0)} in / {getattr(usage, 'completion_tokens', 0)} out)"
            )
        else:
            logger.info(f"Extraction complete: {len(content)} chars")

        return content
