from functools import lru_cache

from skillsphere.ai.config import load_ai_config
from skillsphere.ai.types import CompletionClient

from skillsphere.ai.providers.groq_provider import GroqProvider
from skillsphere.ai.providers.openai_provider import OpenAIProvider


@lru_cache(maxsize=1)
def get_completion_client() -> CompletionClient:
    cfg = load_ai_config()

    if cfg.provider == "groq":
        return GroqProvider(model=cfg.model, api_key=cfg.api_key, base_url=cfg.base_url, timeout_s=cfg.timeout_s)

    if cfg.provider == "openai":
        return OpenAIProvider(model=cfg.model, api_key=cfg.api_key, base_url=cfg.base_url, timeout_s=cfg.timeout_s)

    raise ValueError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
