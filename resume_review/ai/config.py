import os
from dataclasses import dataclass

DEFAULT_MODELS = {
    "gemini": "gemini-3-flash-preview",
    "openai": "gpt-4o-mini",
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str


def load_ai_config() -> AIConfig:
    provider = os.getenv("AI_PROVIDER", "gemini").strip().lower()
    model = (os.getenv("AI_MODEL") or DEFAULT_MODELS.get(provider, "")).strip()
    return AIConfig(provider=provider, model=model)
