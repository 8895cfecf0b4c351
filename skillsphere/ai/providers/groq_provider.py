from skillsphere.ai.providers.openai_provider import OpenAIProvider


class GroqProvider(OpenAIProvider):
    """Groq serves an OpenAI-compatible chat-completions API."""

    name = "groq"
    credential_env = "GROQ_API_KEY"
