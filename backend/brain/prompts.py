"""Prompts for the study-suggestion completion call."""

SUGGESTION_SYSTEM_PROMPT = (
    "You are a helpful study assistant. Provide concise, actionable study advice."
)


def build_suggestion_prompt(subject: str, topic: str) -> str:
    return (
        f"Create a study plan for: {topic} (Subject: {subject}). "
        "Include: 1) A catchy title 2) A brief study plan (2-3 paragraphs) "
        "3) 3 recommended resources. "
        "Format as JSON with keys: title, studyPlan, resources (array)."
    )
