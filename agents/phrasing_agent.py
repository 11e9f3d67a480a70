import json
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from services.llm_client import LLMError, chat_json
from utils.console_logger import log

GENERIC_ERROR_MESSAGE = (
    "An unexpected error occurred while generating suggestions. Please try again."
)


class SectionType(str, Enum):
    SUMMARY = "Summary"
    PROJECT_DESCRIPTION = "Project Description"
    ACHIEVEMENT = "Achievement / Event"
    LEADERSHIP = "Leadership"


# --- 1. Define Schema ---
class PhrasingSuggestion(BaseModel):
    suggestedPhrasing: str


@dataclass(frozen=True)
class SuggestionResult:
    success: bool
    suggestion: Optional[str] = None
    error: Optional[str] = None


SYSTEM_PROMPT = """
You are a resume writing expert.
Return ONLY valid JSON of the form {"suggestedPhrasing": "<text>"} with no extra commentary.
"""

USER_PROMPT_TEMPLATE = """You are a resume writing expert. Your task is to provide suggested phrasing for the {section_type} section of a resume, based on the information provided.

Information: {information}

Suggested Phrasing:"""


def build_information(document, current_text: Optional[str], context: Optional[dict] = None) -> str:
    """Context blob sent with a request: the field's text plus the skills and summary."""
    skills = document.skills.model_dump()
    return (
        f"Current Text: {current_text or ''}\n"
        f"User's Skills: {json.dumps(skills)}\n"
        f"User's Summary: {document.summary}\n"
        f"Section Context: {json.dumps(context or {})}"
    )


def suggest_phrasing(section_type, information: str, llm_settings: Optional[dict] = None) -> SuggestionResult:
    """
    Asks the configured model for new phrasing of one resume field.

    Unknown section types raise ValueError before anything is sent. Every
    other failure comes back as an unsuccessful result carrying only
    GENERIC_ERROR_MESSAGE; the details are logged.
    """
    section = SectionType(section_type)

    user_prompt = USER_PROMPT_TEMPLATE.format(
        section_type=section.value, information=information
    )

    log(f"✍️  Suggesting phrasing for '{section.value}'...")
    try:
        result = chat_json(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=user_prompt,
            llm_settings=llm_settings,
            schema=PhrasingSuggestion,
        )
        suggestion = result["suggestedPhrasing"]
    except (LLMError, KeyError, TypeError) as e:
        log(f"   ❌ Phrasing suggestion failed: {e}")
        return SuggestionResult(success=False, error=GENERIC_ERROR_MESSAGE)

    if not isinstance(suggestion, str) or not suggestion:
        log("   ❌ Phrasing suggestion came back empty.")
        return SuggestionResult(success=False, error=GENERIC_ERROR_MESSAGE)

    return SuggestionResult(success=True, suggestion=suggestion)
