"""Brain routes: AI study-plan suggestions."""

from fastapi import APIRouter, Depends, HTTPException
from brain.completion import CompletionService, get_completion_service, suggest_study_plan
from brain.schemas import SuggestionRequest, SuggestionResponse

router = APIRouter()


@router.post("/ai-suggest", response_model=SuggestionResponse)
def ai_suggest(
    body: SuggestionRequest,
    completion: CompletionService = Depends(get_completion_service),
):
    topic = body.topic.strip()
    if not topic:
        raise HTTPException(status_code=400, detail="Please enter a topic")

    subject = body.subject.strip() or "General"
    suggestion = suggest_study_plan(completion, subject, topic)
    return SuggestionResponse(suggestion=suggestion)
