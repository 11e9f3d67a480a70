import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from agents.phrasing_agent import GENERIC_ERROR_MESSAGE, PhrasingSuggestion, suggest_phrasing
from services.llm_client import (
    DEFAULT_MODEL,
    DEFAULT_PROVIDER,
    LLMError,
    chat_json,
    has_credentials,
    is_provider_available,
    resolve_llm_settings,
    settings_from_config,
)


def test_resolve_defaults():
    assert resolve_llm_settings(None) == {
        "provider": DEFAULT_PROVIDER,
        "model": DEFAULT_MODEL,
        "api_key": None,
    }
    assert resolve_llm_settings({"provider": "openai", "model": ""})["model"] == DEFAULT_MODEL


def test_settings_from_config_picks_provider_key():
    config = {
        "model_provider": "openai",
        "model_name": "gpt-4o-mini",
        "model_api_keys": {"openai": "sk-test", "ollama": ""},
    }
    assert settings_from_config(config) == {
        "provider": "openai",
        "model": "gpt-4o-mini",
        "api_key": "sk-test",
    }


def test_has_credentials(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert has_credentials("ollama", None)
    assert not has_credentials("openai", None)
    assert has_credentials("openai", "sk-test")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    assert has_credentials("openai", None)


@patch("services.llm_client.requests.post")
def test_ollama_chat_parses_schema(mock_post):
    response = MagicMock()
    response.json.return_value = {
        "message": {"content": json.dumps({"suggestedPhrasing": "Better words"})}
    }
    mock_post.return_value = response

    result = chat_json("sys", "user", {"provider": "ollama", "model": "llama3.1:8b"}, PhrasingSuggestion)

    assert result == {"suggestedPhrasing": "Better words"}
    payload = mock_post.call_args.kwargs["json"]
    assert payload["model"] == "llama3.1:8b"
    assert payload["messages"][1] == {"role": "user", "content": "user"}
    assert mock_post.call_args[0][0].endswith("/api/chat")


@pytest.mark.parametrize(
    "content",
    ["not json at all", json.dumps({"wrong": "shape"})],
)
@patch("services.llm_client.requests.post")
def test_ollama_bad_answers_raise_llm_error(mock_post, content):
    response = MagicMock()
    response.json.return_value = {"message": {"content": content}}
    mock_post.return_value = response

    with pytest.raises(LLMError):
        chat_json("sys", "user", {"provider": "ollama"}, PhrasingSuggestion)


@patch("services.llm_client.requests.post", side_effect=requests.ConnectionError("refused"))
def test_ollama_network_failure_raises_llm_error(mock_post):
    with pytest.raises(LLMError):
        chat_json("sys", "user", {"provider": "ollama"}, PhrasingSuggestion)


@patch("services.llm_client.OpenAI")
def test_openai_structured_parse(mock_openai):
    client = MagicMock()
    mock_openai.return_value = client
    parsed = PhrasingSuggestion(suggestedPhrasing="Crisp")
    client.beta.chat.completions.parse.return_value.choices = [MagicMock(message=MagicMock(parsed=parsed))]

    result = chat_json("sys", "user", {"provider": "openai", "api_key": "sk-test"}, PhrasingSuggestion)

    assert result == {"suggestedPhrasing": "Crisp"}
    mock_openai.assert_called_once_with(api_key="sk-test")
    assert client.beta.chat.completions.parse.call_args.kwargs["response_format"] is PhrasingSuggestion


@patch("services.llm_client.OpenAI")
def test_openai_without_key_never_builds_client(mock_openai, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(LLMError):
        chat_json("sys", "user", {"provider": "openai"}, PhrasingSuggestion)

    mock_openai.assert_not_called()


def test_unknown_provider():
    with pytest.raises(LLMError):
        chat_json("sys", "user", {"provider": "carrier-pigeon"})


@patch("services.llm_client.requests.get")
def test_provider_availability(mock_get, monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    mock_get.return_value = MagicMock(ok=True)

    assert is_provider_available("ollama", None)
    assert not is_provider_available("openai", None)
    assert not is_provider_available("unknown", "key")

    mock_get.side_effect = requests.ConnectionError("down")
    assert not is_provider_available("ollama", None)


@pytest.mark.parametrize(
    "body",
    [[{"message": "x"}], {"message": None}, {"message": "plain"}, {}],
)
@patch("services.llm_client.requests.post")
def test_ollama_malformed_envelope_raises_llm_error(mock_post, body):
    response = MagicMock()
    response.json.return_value = body
    mock_post.return_value = response

    with pytest.raises(LLMError):
        chat_json("sys", "user", {"provider": "ollama"}, PhrasingSuggestion)


@pytest.mark.parametrize(
    "body",
    [[{"message": "x"}], {"message": None}, {"message": "plain"}],
)
@patch("services.llm_client.requests.post")
def test_ollama_malformed_envelope_becomes_generic_error(mock_post, body):
    """
    Scenario: Ollama answers 200 but the JSON envelope has the wrong shape.
    Expected: the editor gets the generic error result, never an exception.
    """
    response = MagicMock()
    response.json.return_value = body
    mock_post.return_value = response

    result = suggest_phrasing("Summary", "info", {"provider": "ollama"})

    assert not result.success
    assert result.error == GENERIC_ERROR_MESSAGE


@patch("services.llm_client.OpenAI")
def test_openai_empty_choices_raise_llm_error(mock_openai):
    client = MagicMock()
    mock_openai.return_value = client
    client.beta.chat.completions.parse.return_value.choices = []

    with pytest.raises(LLMError):
        chat_json("sys", "user", {"provider": "openai", "api_key": "sk-test"}, PhrasingSuggestion)
