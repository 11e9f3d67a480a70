import copy
import json
import os

from services.model_registry import provider_requires_key

# 1. Define the Standard Path
DEFAULT_PROFILE_PATH = os.path.join("profiles", "default.json")

DEFAULT_CONFIG = {
    "model_provider": "ollama",
    "model_name": "llama3.1:8b",
    "model_api_keys": {},
    "storage_dir": "storage",
    "enable_suggestions": True,
}

def get_effective_config(profile_path=None):
    """
    Loads the profile JSON and overrides settings based on
    environmental constraints (like missing API keys).
    """
    config = load_config(profile_path)

    provider = config.get("model_provider", DEFAULT_CONFIG["model_provider"])
    api_key = config.get("model_api_keys", {}).get(provider)
    if provider == "openai" and not api_key:
        api_key = os.environ.get("OPENAI_API_KEY")

    # A provider that needs a key cannot serve suggestions without one,
    # regardless of what the user saved in the JSON file.
    if provider_requires_key(provider) and not api_key:
        config["enable_suggestions"] = False

    return config

def load_config(file_path=None):
    """
    Loads a configuration file.
    If no path is provided, defaults to 'profiles/default.json'.
    """
    if file_path is None:
        file_path = DEFAULT_PROFILE_PATH

    if not os.path.exists(file_path):
        save_config(DEFAULT_CONFIG, file_path)
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(file_path, "r") as f:
        data = json.load(f)
        for key, value in DEFAULT_CONFIG.items():
            if key not in data:
                data[key] = copy.deepcopy(value)
        return data

def save_config(new_config, file_path=None):
    """
    Saves a configuration file.
    If no path is provided, defaults to 'profiles/default.json'.
    """
    if file_path is None:
        file_path = DEFAULT_PROFILE_PATH

    folder = os.path.dirname(file_path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder)

    with open(file_path, "w") as f:
        json.dump(new_config, f, indent=4)

    openai_key = new_config.get("model_api_keys", {}).get("openai")
    if openai_key:
        os.environ["OPENAI_API_KEY"] = openai_key
