"""LLM provider factory with auto-detection."""

import os

from .base import LLMError, LLMProvider

_PROVIDER_ENV_KEYS = {
    "claude": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "groq": "GROQ_API_KEY",
    "together": "TOGETHER_API_KEY",
    "huggingface": "HUGGINGFACE_API_KEY",
    "cohere": "COHERE_API_KEY",
}

_AUTO_DETECT_ORDER = ["groq", "claude", "openai", "together", "huggingface", "cohere"]

# OpenAI-compatible chat-completions endpoints
_OPENAI_COMPATIBLE = {
    "groq": "https://api.groq.com/openai/v1",
    "together": "https://api.together.xyz/v1",
    "huggingface": "https://router.huggingface.co/v1",
    "cohere": "https://api.cohere.ai/compatibility/v1",
}

_DEFAULT_MODELS = {
    "claude": "claude-3-5-haiku-latest",
    "openai": "gpt-4o-mini",
    "groq": "llama-3.1-8b-instant",
    "together": "meta-llama/Llama-3-8b-chat-hf",
    "huggingface": "meta-llama/Llama-3.1-8B-Instruct",
    "cohere": "command-r",
}

REMOTE_PROVIDERS = tuple(_PROVIDER_ENV_KEYS)


def create_llm_provider(
    provider: str | None = None,
    api_key: str | None = None,
    model: str | None = None,
    client=None,
    timeout: float | None = None,
) -> LLMProvider:
    """Create an LLM provider instance.

    Args:
        provider: "claude", "openai", "groq", "together", "huggingface", "cohere", "auto", or None (auto-detect)
        api_key: Explicit API key (overrides env var)
        model: Model name (None = provider default)
        client: Pre-built SDK client for testing/DI
        timeout: Request timeout in seconds

    Returns:
        LLMProvider instance

    Raises:
        LLMError: Unknown provider or no key found for auto-detection
    """
    resolved = provider or "auto"

    if resolved == "auto":
        resolved = _auto_detect_provider(api_key)

    if not api_key and not client:
        env_var = _PROVIDER_ENV_KEYS.get(resolved)
        if env_var:
            api_key = os.getenv(env_var)

    model = model or _DEFAULT_MODELS.get(resolved)

    if resolved == "claude":
        from .providers.claude import ClaudeProvider

        return ClaudeProvider(api_key=api_key, model=model, client=client, timeout=timeout)
    elif resolved in ("openai", *_OPENAI_COMPATIBLE):
        from .providers.openai import OpenAIProvider

        return OpenAIProvider(
            api_key=api_key,
            model=model,
            client=client,
            base_url=_OPENAI_COMPATIBLE.get(resolved),
            provider_name=resolved,
            timeout=timeout,
        )
    else:
        raise LLMError(f"Unknown provider: {resolved}. Use: {', '.join(REMOTE_PROVIDERS)}")


def _detect_provider_from_key(api_key: str) -> str | None:
    """Infer provider from API key prefix."""
    if api_key.startswith("sk-ant-"):
        return "claude"
    if api_key.startswith("gsk_"):
        return "groq"
    if api_key.startswith("hf_"):
        return "huggingface"
    if api_key.startswith("sk-"):
        return "openai"
    return None


def _auto_detect_provider(api_key: str | None = None) -> str:
    """Detect provider from explicit key prefix, then env vars."""
    if api_key:
        inferred = _detect_provider_from_key(api_key)
        if inferred:
            return inferred

    for name in _AUTO_DETECT_ORDER:
        env_var = _PROVIDER_ENV_KEYS[name]
        if os.getenv(env_var):
            return name
    raise LLMError(
        "No LLM API key found. Set one of: " + ", ".join(_PROVIDER_ENV_KEYS.values())
    )
