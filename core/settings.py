# core/settings.py
import json
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "meta-llama/Meta-Llama-3.2-8B-Instruct"

MODEL_CHOICES = {
    "meta-llama/Meta-Llama-3.2-1B-Instruct": "LLaMA 3.2 1B",
    "meta-llama/Meta-Llama-3.2-8B-Instruct": "LLaMA 3.2 8B",
    "mistralai/Mistral-7B-Instruct-v0.1": "Mistral 7B Instruct",
    "meta-llama/llama-3.2-90b-vision-instruct": "LLaMA 3.2 90B Vision",
    "deepseek/deepseek-chat": "DeepSeek Chat",
    "microsoft/DialoGPT-medium": "DialoGPT Medium",
    "gpt2": "GPT-2",
    "facebook/blenderbot-400M-distill": "BlenderBot",
}

SETTINGS_FILE = os.environ.get("CALC_TUTOR_SETTINGS") or os.path.join(os.getcwd(), "calc_tutor_settings.json")

KEY_API = "llm-api-key"
KEY_MODEL = "llm-model"
KEY_BASE_URL = "llm-base-url"


@dataclass(frozen=True)
class LLMConfig:
    api_key: str
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    provider: Optional[str] = None

    @property
    def backend(self) -> str:
        """`huggingface` for Hugging Face tokens, otherwise an OpenAI-compatible endpoint."""
        if self.provider:
            return self.provider
        return "huggingface" if self.api_key.startswith("hf_") else "openai"


def readable_model(model: str) -> str:
    for model_id, label in MODEL_CHOICES.items():
        if model_id.lower() == model.lower():
            return label
    return model


class SettingsStore:
    """Two string settings (key, model) kept in a small JSON file."""

    def __init__(self, path: Optional[str] = None):
        self.path = path or SETTINGS_FILE

    def _read(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable settings file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def load(self) -> Optional[LLMConfig]:
        data = self._read()
        api_key, model = data.get(KEY_API), data.get(KEY_MODEL)
        if not api_key or not model:
            return None
        return LLMConfig(api_key=api_key, model=model, base_url=data.get(KEY_BASE_URL))

    def save(self, config: LLMConfig):
        data = {KEY_API: config.api_key, KEY_MODEL: config.model}
        if config.base_url:
            data[KEY_BASE_URL] = config.base_url
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def clear(self):
        if os.path.exists(self.path):
            os.remove(self.path)


def load_config(store: Optional[SettingsStore] = None) -> Optional[LLMConfig]:
    """Stored settings win; otherwise fall back to the environment."""
    store = store or SettingsStore()
    config = store.load()
    if config is not None:
        return config
    api_key = os.environ.get("LLM_API_KEY") or os.environ.get("OPENAI_API_KEY") or os.environ.get("HF_TOKEN") or ""
    if not api_key:
        return None
    return LLMConfig(
        api_key=api_key,
        model=os.environ.get("LLM_MODEL", DEFAULT_MODEL),
        base_url=os.environ.get("LLM_BASE_URL") or None,
    )
