from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

FALLBACK_DEGRADE = "degrade"
FALLBACK_FAIL = "fail"

# Model-backed endpoints and what happens when the completion call or its
# parse fails: "degrade" answers 200 with the canned payload, "fail" answers 500.
ENDPOINT_FALLBACK_POLICY: dict[str, str] = {
    "career-recommend": FALLBACK_DEGRADE,
    "learning-guide": FALLBACK_DEGRADE,
    "interview-feedback": FALLBACK_DEGRADE,
    "generate-persona": FALLBACK_DEGRADE,
    "job-trends": FALLBACK_DEGRADE,
    "resume-analysis": FALLBACK_DEGRADE,
    "resume-generate": FALLBACK_DEGRADE,
    "portfolio-site": FALLBACK_DEGRADE,
    "generate-quiz": FALLBACK_DEGRADE,
}


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_bool(name: str, default: bool) -> bool:
    raw = _get_env(name, None)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float | None) -> float | None:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    host: str
    port: int
    rate_limit_per_minute: int
    rate_limit_enabled: bool
    ai_provider: str
    ai_model: str | None
    ai_base_url: str | None
    ai_timeout_s: float | None
    groq_api_key: str | None
    openai_api_key: str | None
    default_temperature: float
    log_level: str
    sentry_dsn: str | None
    cors_allowed_origins: tuple[str, ...]
    max_upload_mb: int
    min_extracted_chars: int
    strict_endpoints: tuple[str, ...]

    @property
    def rate_limit(self) -> str:
        return f"{max(1, self.rate_limit_per_minute)}/minute"

    @property
    def max_upload_bytes(self) -> int:
        return max(1, self.max_upload_mb) * 1024 * 1024

    def fallback_policy(self, endpoint: str) -> str:
        if endpoint in self.strict_endpoints:
            return FALLBACK_FAIL
        return ENDPOINT_FALLBACK_POLICY.get(endpoint, FALLBACK_FAIL)


def load_settings() -> Settings:
    temperature = _get_env_float("DEFAULT_TEMPERATURE", 0.7)
    return Settings(
        host=_get_env("HOST", "127.0.0.1") or "127.0.0.1",
        port=_get_env_int("PORT", 5000),
        rate_limit_per_minute=_get_env_int("RATE_LIMIT", 50),
        rate_limit_enabled=_get_env_bool("RATE_LIMIT_ENABLED", True),
        ai_provider=(_get_env("AI_PROVIDER", "groq") or "groq").strip().lower(),
        ai_model=_get_env("AI_MODEL"),
        ai_base_url=_get_env("AI_BASE_URL"),
        ai_timeout_s=_get_env_float("AI_TIMEOUT_S", None),
        groq_api_key=_get_env("GROQ_API_KEY"),
        openai_api_key=_get_env("OPENAI_API_KEY"),
        default_temperature=min(1.0, max(0.0, temperature if temperature is not None else 0.7)),
        log_level=_get_env("LOG_LEVEL", "INFO") or "INFO",
        sentry_dsn=_get_env("SENTRY_DSN"),
        cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", ["*"]),
        max_upload_mb=_get_env_int("MAX_UPLOAD_MB", 5),
        min_extracted_chars=_get_env_int("MIN_EXTRACTED_CHARS", 50),
        strict_endpoints=_get_env_list("STRICT_ENDPOINTS", []),
    )


settings = load_settings()

if settings.ai_provider not in {"groq", "openai"}:
    raise RuntimeError("AI_PROVIDER must be either 'groq' or 'openai'.")

unknown_strict = set(settings.strict_endpoints) - set(ENDPOINT_FALLBACK_POLICY)
if unknown_strict:
    raise RuntimeError(f"STRICT_ENDPOINTS names unknown endpoints: {', '.join(sorted(unknown_strict))}")
