"""Completion service: the one outbound model call behind study suggestions."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional, Protocol

import anthropic

from brain.errors import UpstreamUnavailableError
from brain.interpreter import interpret
from brain.prompts import SUGGESTION_SYSTEM_PROMPT, build_suggestion_prompt
from brain.schemas import SuggestionResult

logger = logging.getLogger(__name__)


class CompletionService(Protocol):
    def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...


class AnthropicCompletionService:
    """One-shot Messages API call with a hard timeout and no SDK retries."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str,
        timeout: float,
        max_tokens: int = 1024,
        client: Optional[anthropic.Anthropic] = None,
    ):
        self.model = model
        self.timeout = timeout
        self.max_tokens = max_tokens
        if client is not None:
            self.client = client
        else:
            self.client = (
                anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
                if api_key else None
            )

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        if not self.client:
            raise UpstreamUnavailableError("ANTHROPIC_API_KEY is not set, cannot reach completion service")

        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
                timeout=self.timeout,
            )
        except anthropic.APITimeoutError as exc:
            logger.error(f"Completion call timed out after {self.timeout}s")
            raise UpstreamUnavailableError(f"Completion service timed out after {self.timeout}s") from exc
        except anthropic.APIStatusError as exc:
            logger.error(f"Completion service returned {exc.status_code}: {exc.message}")
            raise UpstreamUnavailableError(f"Completion service returned {exc.status_code}") from exc
        except anthropic.APIError as exc:
            logger.error(f"Completion call failed: {exc}")
            raise UpstreamUnavailableError("Completion service unavailable") from exc

        raw_response = "".join(
            block.text for block in message.content if getattr(block, "type", None) == "text"
        ).strip()
        logger.debug(f"Completion reply: {len(raw_response)} chars")
        return raw_response


@lru_cache(maxsize=1)
def get_completion_service() -> CompletionService:
    """FastAPI dependency; overridden in tests."""
    from server.config import (
        ANTHROPIC_API_KEY,
        ANTHROPIC_MODEL,
        COMPLETION_MAX_TOKENS,
        COMPLETION_TIMEOUT_SECONDS,
    )

    return AnthropicCompletionService(
        api_key=ANTHROPIC_API_KEY,
        model=ANTHROPIC_MODEL,
        timeout=COMPLETION_TIMEOUT_SECONDS,
        max_tokens=COMPLETION_MAX_TOKENS,
    )


def suggest_study_plan(completion: CompletionService, subject: str, topic: str) -> SuggestionResult:
    """Ask the model for a plan and interpret the reply.

    Transport failures raise UpstreamUnavailableError; a reply that is not a
    structured plan comes back as the fallback suggestion instead.
    """
    raw_text = completion.complete(SUGGESTION_SYSTEM_PROMPT, build_suggestion_prompt(subject, topic))
    return interpret(raw_text, topic)
