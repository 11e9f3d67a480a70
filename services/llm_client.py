import json
import os
from typing import Optional, Type

import requests
from openai import OpenAI, OpenAIError
from pydantic import BaseModel, ValidationError

from services.model_registry import get_provider_config, provider_requires_key


DEFAULT_PROVIDER = "ollama"
DEFAULT_MODEL = "llama3.1:8b"
OLLAMA_TIMEOUT = 120


class LLMError(Exception):
    """Any failure talking to a model provider or reading its answer."""


def resolve_llm_settings(llm_settings: Optional[dict]) -> dict:
    if not llm_settings:
        return {"provider": DEFAULT_PROVIDER, "model": DEFAULT_MODEL, "api_key": None}
    return {
        "provider": llm_settings.get("provider") or DEFAULT_PROVIDER,
        "model": llm_settings.get("model") or DEFAULT_MODEL,
        "api_key": llm_settings.get("api_key"),
    }


def settings_from_config(config: dict) -> dict:
    provider = config.get("model_provider", DEFAULT_PROVIDER)
    return {
        "provider": provider,
        "model": config.get("model_name", DEFAULT_MODEL),
        "api_key": config.get("model_api_keys", {}).get(provider),
    }


def has_credentials(provider: str, api_key: Optional[str]) -> bool:
    if not provider_requires_key(provider):
        return True
    if provider == "openai":
        return bool(api_key or os.environ.get("OPENAI_API_KEY"))
    return bool(api_key)


def is_provider_available(provider: str, api_key: Optional[str], timeout: float = 1.0) -> bool:
    config = get_provider_config(provider)
    if not config or not has_credentials(provider, api_key):
        return False

    base_url = config.get("base_url")
    health_path = config.get("health_path")
    if not base_url or not health_path:
        return True

    headers = {}
    if provider == "openai" and api_key:
        headers["Authorization"] = f"Bearer {api_key}"

    try:
        response = requests.get(f"{base_url}{health_path}", headers=headers, timeout=timeout)
        return response.ok
    except requests.RequestException:
        return False


def _chat_openai(messages, model, api_key, schema, temperature) -> dict:
    if not has_credentials("openai", api_key):
        raise LLMError("OpenAI API Key is missing.")

    client = OpenAI(api_key=api_key) if api_key else OpenAI()
    if schema is not None:
        completion = client.beta.chat.completions.parse(
            model=model,
            messages=messages,
            response_format=schema,
            temperature=temperature,
        )
        if not completion.choices:
            raise LLMError("Model returned no choices.")
        parsed = completion.choices[0].message.parsed
        if parsed is None:
            raise LLMError("Model returned no structured output.")
        return parsed.model_dump()

    completion = client.chat.completions.create(
        model=model,
        messages=messages,
        response_format={"type": "json_object"},
        temperature=temperature,
    )
    if not completion.choices:
        raise LLMError("Model returned no choices.")
    return json.loads(completion.choices[0].message.content)


def _chat_ollama(messages, model, schema, temperature) -> dict:
    payload = {
        "model": model,
        "messages": messages,
        "format": "json",
        "stream": False,
        "options": {"temperature": temperature},
    }
    base_url = (get_provider_config("ollama") or {}).get("base_url", "http://localhost:11434")
    response = requests.post(f"{base_url}/api/chat", json=payload, timeout=OLLAMA_TIMEOUT)
    response.raise_for_status()
    body = response.json()
    message = body.get("message") if isinstance(body, dict) else None
    if not isinstance(message, dict):
        raise LLMError(f"Unexpected Ollama response: {body!r:.200}")
    content = message.get("content") or ""
    parsed = json.loads(content)
    if schema is not None:
        return schema.model_validate(parsed).model_dump()
    return parsed


def chat_json(
    system_prompt: str,
    user_prompt: str,
    llm_settings: Optional[dict],
    schema: Optional[Type[BaseModel]] = None,
    temperature: float = 0.7,
) -> dict:
    """
    Sends one system/user exchange and returns the JSON answer as a dict.
    Every provider, transport or parsing failure surfaces as `LLMError`.
    """
    settings = resolve_llm_settings(llm_settings)
    provider = settings["provider"]

    messages = [
        {"role": "system", "content": system_prompt},
        {"role": "user", "content": user_prompt},
    ]

    try:
        if provider == "openai":
            return _chat_openai(messages, settings["model"], settings.get("api_key"), schema, temperature)
        if provider == "ollama":
            return _chat_ollama(messages, settings["model"], schema, temperature)
    except (OpenAIError, requests.RequestException, ValidationError, ValueError, TypeError) as e:
        # json.JSONDecodeError is a ValueError
        raise LLMError(f"{provider} request failed: {e}") from e

    raise LLMError(f"Unsupported model provider: {provider}")
