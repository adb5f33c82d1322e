"""
Purpose: OpenAI chat-completions behind the LLMClient interface.
Owns auth, the request timeout, retry back-off on transient errors and the
mapping of SDK usage onto the (text, meta) shape the controller expects.

Testing: Swap `client` for a stub exposing `chat.completions.create`.
"""

from __future__ import annotations
import logging
import time
from typing import Any, Optional

from openai import OpenAI
from openai import APIError, RateLimitError, APITimeoutError

from ..models import LLMSettings

logger = logging.getLogger(__name__)

RETRY_DELAYS = (0.5, 1.0, 2.0)
TRANSIENT_ERRORS = (RateLimitError, APITimeoutError, APIError)


def _completion_kwargs(settings: LLMSettings, messages: list[dict[str, str]]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "model": settings.model,
        "messages": messages,
        "temperature": settings.temperature,
        "top_p": settings.top_p,
        "max_tokens": settings.max_tokens,
        "frequency_penalty": settings.frequency_penalty,
        "presence_penalty": settings.presence_penalty,
    }
    if settings.response_format:
        kwargs["response_format"] = settings.response_format
    return kwargs


class OpenAILLMClient:
    def __init__(self, api_key: str, *, timeout: float = 20.0, max_retries: int = 0):
        if not api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        self.api_key = api_key
        self.timeout = timeout
        try:
            # back-off lives in _call, so SDK retries default to 0
            self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=max_retries)
        except Exception as e:
            raise RuntimeError(f"Failed to initialize OpenAI client: {e}") from e

    def _call(self, kwargs: dict[str, Any]):
        create = self.client.chat.completions.create
        for attempt, delay in enumerate(RETRY_DELAYS, start=1):
            try:
                return create(**kwargs)
            except TRANSIENT_ERRORS as e:
                logger.info(
                    "OpenAI attempt %d failed (%s); retrying in %.1fs",
                    attempt,
                    type(e).__name__,
                    delay,
                )
                time.sleep(delay)
        return create(**kwargs)

    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]:
        payload = ([{"role": "system", "content": system}] if system else []) + list(messages)
        completion = self._call(_completion_kwargs(settings, payload))

        text = completion.choices[0].message.content or ""
        usage = getattr(completion, "usage", None)
        return text, {
            "model": getattr(completion, "model", None) or settings.model,
            "tokens_in": int(getattr(usage, "prompt_tokens", 0) or 0),
            "tokens_out": int(getattr(usage, "completion_tokens", 0) or 0),
            "usage_reported": usage is not None,
        }
