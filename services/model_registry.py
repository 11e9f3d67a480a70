import json
import os
from typing import Optional

REGISTRY_PATH = os.path.join(os.path.dirname(__file__), "model_providers.json")


def load_provider_registry() -> dict:
    with open(REGISTRY_PATH, "r", encoding="utf-8") as f:
        return json.load(f)


def get_provider_config(provider: str) -> Optional[dict]:
    registry = load_provider_registry()
    return registry.get(provider)


def get_provider_names() -> list[str]:
    return list(load_provider_registry())


def get_provider_label(provider: str) -> str:
    config = get_provider_config(provider) or {}
    return config.get("label", provider)


def get_provider_models(provider: str) -> list[str]:
    config = get_provider_config(provider) or {}
    return list(config.get("models", []))


def provider_requires_key(provider: str) -> bool:
    config = get_provider_config(provider) or {}
    return bool(config.get("requires_api_key", False))
