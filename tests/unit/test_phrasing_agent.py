from unittest.mock import patch

import pytest

from agents.phrasing_agent import (
    GENERIC_ERROR_MESSAGE,
    PhrasingSuggestion,
    SectionType,
    build_information,
    suggest_phrasing,
)
from resume_schema import default_document
from services.llm_client import LLMError


@patch("agents.phrasing_agent.chat_json")
def test_success_returns_text_verbatim(mock_chat):
    mock_chat.return_value = {"suggestedPhrasing": "  Led a team of 5.\nShipped v2.  "}

    result = suggest_phrasing("Summary", "Current Text: hi")

    assert result.success
    assert result.suggestion == "  Led a team of 5.\nShipped v2.  "
    assert result.error is None


@patch("agents.phrasing_agent.chat_json")
def test_prompt_interpolates_inputs_verbatim(mock_chat):
    mock_chat.return_value = {"suggestedPhrasing": "ok"}
    information = "Current Text: {not a placeholder}\nUser's Summary: x"

    suggest_phrasing(SectionType.PROJECT_DESCRIPTION, information, {"provider": "openai"})

    kwargs = mock_chat.call_args.kwargs
    assert "for the Project Description section of a resume" in kwargs["user_prompt"]
    assert f"Information: {information}" in kwargs["user_prompt"]
    assert kwargs["schema"] is PhrasingSuggestion
    assert kwargs["llm_settings"] == {"provider": "openai"}


@patch("agents.phrasing_agent.chat_json")
def test_unknown_section_type_is_rejected_before_any_call(mock_chat):
    with pytest.raises(ValueError):
        suggest_phrasing("Experience", "anything")
    mock_chat.assert_not_called()


@pytest.mark.parametrize(
    "failure",
    [
        LLMError("openai request failed: 500 internal secret detail"),
        KeyError("suggestedPhrasing"),
    ],
)
def test_failures_become_a_generic_error(failure):
    with patch("agents.phrasing_agent.chat_json", side_effect=failure):
        result = suggest_phrasing("Leadership", "info")

    assert not result.success
    assert result.suggestion is None
    assert result.error == GENERIC_ERROR_MESSAGE
    assert "secret" not in result.error


@patch("agents.phrasing_agent.chat_json")
def test_empty_suggestion_is_a_failure(mock_chat):
    mock_chat.return_value = {"suggestedPhrasing": ""}
    result = suggest_phrasing("Achievement / Event", "info")
    assert not result.success


def test_build_information_includes_context():
    doc = default_document()
    info = build_information(doc, "Old text", {"projectName": "AI Resume Builder"})

    assert "Current Text: Old text" in info
    assert f"User's Summary: {doc.summary}" in info
    assert "technicalSkills" in info
    assert '"projectName": "AI Resume Builder"' in info


def test_section_types_match_the_fixed_set():
    assert [s.value for s in SectionType] == [
        "Summary",
        "Project Description",
        "Achievement / Event",
        "Leadership",
    ]
