"""Multi-provider LLM abstraction layer."""

from .base import LLMAuthError, LLMError, LLMProvider, LLMRateLimitError
from .factory import REMOTE_PROVIDERS, create_llm_provider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "REMOTE_PROVIDERS",
    "LLMError",
    "LLMRateLimitError",
    "LLMAuthError",
]
