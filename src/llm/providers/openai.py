"""OpenAI LLM provider (also serves OpenAI-compatible endpoints: Groq, Together, HuggingFace, Cohere)."""

from ..base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError

# Resolved lazily; empty tuple when openai is not installed
_openai_exceptions = None


def _get_openai_exceptions():
    global _openai_exceptions
    if _openai_exceptions is None:
        try:
            from openai import APIError, AuthenticationError, RateLimitError

            _openai_exceptions = (AuthenticationError, RateLimitError, APIError)
        except ImportError:
            _openai_exceptions = ()
    return _openai_exceptions


def _handle_openai_error(e: Exception, name: str):
    exc = _get_openai_exceptions()
    if exc and len(exc) == 3:
        AuthErr, RateErr, ApiErr = exc
        if isinstance(e, AuthErr):
            raise LLMAuthError(f"{name} auth failed: {e}") from e
        if isinstance(e, RateErr):
            raise LLMRateLimitError(f"{name} rate limit: {e}") from e
        if isinstance(e, ApiErr):
            raise LLMError(f"{name} API error: {e}") from e
    raise LLMError(f"{name} error: {e}") from e


class OpenAIProvider(LLMProvider):
    """OpenAI chat-completions provider.

    Pass base_url to talk to an OpenAI-compatible service; provider_name is
    then reported as that service's name.
    """

    provider_name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client=None,
        base_url: str | None = None,
        provider_name: str | None = None,
        timeout: float | None = None,
    ):
        self.model = model or "gpt-4o-mini"
        if provider_name:
            self.provider_name = provider_name

        if client:
            self.client = client
            return

        try:
            from openai import OpenAI
        except ImportError:
            raise LLMError("openai package not installed. Run: pip install openai")

        kwargs = {"api_key": api_key}
        if base_url:
            kwargs["base_url"] = base_url
        if timeout:
            kwargs["timeout"] = timeout
        self.client = OpenAI(**kwargs)

    def generate(
        self,
        messages: list[dict],
        system: str | None = None,
        max_tokens: int = 200,
        temperature: float | None = None,
    ) -> str:
        full_messages = []
        if system:
            full_messages.append({"role": "system", "content": system})
        full_messages.extend(messages)

        kwargs = {
            "model": self.model,
            "max_tokens": max_tokens,
            "messages": full_messages,
        }
        if temperature is not None:
            kwargs["temperature"] = temperature

        try:
            response = self.client.chat.completions.create(**kwargs)
            return response.choices[0].message.content or ""
        except Exception as e:
            _handle_openai_error(e, self.provider_name)
