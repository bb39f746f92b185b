"""Langfuse tracing for extraction calls.

When LANGFUSE_PUBLIC_KEY and LANGFUSE_SECRET_KEY are not set, ``observe``
returns functions unchanged and ``get_async_openai_class`` returns the plain
OpenAI client class.

Env vars:
    LANGFUSE_PUBLIC_KEY
    LANGFUSE_SECRET_KEY
    LANGFUSE_HOST          (default: http://localhost:3000)
"""

import logging
import os
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def langfuse_enabled() -> bool:
    return bool(os.getenv("LANGFUSE_PUBLIC_KEY") and os.getenv("LANGFUSE_SECRET_KEY"))


_LANGFUSE_ENABLED = langfuse_enabled()

if _LANGFUSE_ENABLED:
    logger.info(
        "Langfuse observability ENABLED (host=%s)",
        os.getenv("LANGFUSE_HOST", "http://localhost:3000"),
    )
else:
    logger.debug("Langfuse observability disabled (no LANGFUSE_PUBLIC_KEY/SECRET_KEY)")


def observe(name: Optional[str] = None, **kwargs) -> Callable:
    """Decorator that wraps Langfuse @observe() if enabled, otherwise no-op."""
    if _LANGFUSE_ENABLED:
        from langfuse import observe as _lf_observe
        return _lf_observe(name=name, **kwargs)

    def noop_decorator(fn: Callable) -> Callable:
        return fn
    return noop_decorator


def get_async_openai_class():
    """Return the AsyncOpenAI class, instrumented when Langfuse is enabled."""
    if _LANGFUSE_ENABLED:
        from langfuse.openai import AsyncOpenAI as LangfuseAsyncOpenAI
        logger.info("Using Langfuse-instrumented AsyncOpenAI")
        return LangfuseAsyncOpenAI

    from openai import AsyncOpenAI
    return AsyncOpenAI
