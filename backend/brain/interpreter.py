"""Suggestion interpreter: turns raw model text into a renderable study plan.

The completion model has no schema guarantee, so every reply maps to a
SuggestionResult: either the decoded JSON object, or a fallback that keeps
the whole reply as the plan body.
"""
from __future__ import annotations

import logging

from pydantic import ValidationError

from brain.schemas import FallbackSuggestion, ParsedSuggestion, ParseOutcome, SuggestionResult

logger = logging.getLogger(__name__)


def fallback_title(topic: str) -> str:
    return f"Study Plan: {topic}"


def _extract_json_text(raw_text: str) -> str:
    """Strip markdown fences and any preamble around the outermost {...}."""
    response_text = raw_text.strip()
    if response_text.startswith("```"):
        # Opening fence (```json\n or ```\n), then closing fence
        response_text = response_text.split("\n", 1)[1] if "\n" in response_text else response_text[3:]
        response_text = response_text.rstrip()
        if response_text.endswith("```"):
            response_text = response_text[:-3]

    first_brace = response_text.find("{")
    last_brace = response_text.rfind("}")
    if first_brace != -1 and last_brace != -1 and last_brace > first_brace:
        response_text = response_text[first_brace: last_brace + 1]
    return response_text


def parse_suggestion(raw_text: str, fallback_topic: str) -> ParseOutcome:
    try:
        suggestion = SuggestionResult.model_validate_json(_extract_json_text(raw_text))
    except ValidationError as exc:
        reason = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        fallback = SuggestionResult(
            title=fallback_title(fallback_topic),
            studyPlan=raw_text,
            resources=[],
        )
        return FallbackSuggestion(suggestion=fallback, reason=reason)
    return ParsedSuggestion(suggestion=suggestion)


def interpret(raw_text: str, fallback_topic: str) -> SuggestionResult:
    """Never raises: unparseable replies become the fallback suggestion."""
    outcome = parse_suggestion(raw_text, fallback_topic)
    if isinstance(outcome, FallbackSuggestion):
        logger.warning(
            f"Suggestion reply is not a structured plan ({outcome.reason}); "
            f"using fallback for topic {fallback_topic!r}. Raw: {raw_text[:200]!r}"
        )
    return outcome.suggestion
