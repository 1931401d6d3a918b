from resume_review.ai.config import load_ai_config
from resume_review.ai.types import AIClient

from resume_review.ai.providers.gemini_provider import GeminiProvider
from resume_review.ai.providers.openai_provider import OpenAIProvider


def get_ai_client() -> AIClient:
    cfg = load_ai_config()

    if cfg.provider == "gemini":
        return GeminiProvider(model=cfg.model)

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
