from dataclasses import dataclass

from skillsphere.core.config import settings

PROVIDER_DEFAULTS = {
    "groq": ("https://api.groq.com/openai/v1", "llama-3.1-8b-instant"),
    "openai": (None, "gpt-4o-mini"),
}


@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    base_url: str | None
    api_key: str | None
    timeout_s: float | None


def load_ai_config() -> AIConfig:
    provider = settings.ai_provider
    default_base_url, default_model = PROVIDER_DEFAULTS[provider]
    api_key = settings.groq_api_key if provider == "groq" else settings.openai_api_key
    return AIConfig(
        provider=provider,
        model=(settings.ai_model or default_model).strip(),
        base_url=settings.ai_base_url or default_base_url,
        api_key=(api_key or "").strip() or None,
        timeout_s=settings.ai_timeout_s,
    )
