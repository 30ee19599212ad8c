"""Brain suggestion schemas."""

from dataclasses import dataclass
from typing import List, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class SuggestionRequest(BaseModel):
    subject: str = "General"
    topic: str


class SuggestionResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: StrictStr
    study_plan: StrictStr = Field(alias="studyPlan")
    resources: List[StrictStr]


class SuggestionResponse(BaseModel):
    suggestion: SuggestionResult


# ─── Parse outcome ───────────────────────────────────────────

@dataclass(frozen=True)
class ParsedSuggestion:
    suggestion: SuggestionResult


@dataclass(frozen=True)
class FallbackSuggestion:
    suggestion: SuggestionResult
    reason: str


ParseOutcome = Union[ParsedSuggestion, FallbackSuggestion]
