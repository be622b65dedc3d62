"""Tests for LLM factory and auto-detection."""

from unittest.mock import MagicMock, patch

import pytest

from llm import LLMError, create_llm_provider
from llm.factory import _auto_detect_provider, _detect_provider_from_key

_ENV_KEYS = [
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GROQ_API_KEY",
    "TOGETHER_API_KEY",
    "HUGGINGFACE_API_KEY",
    "COHERE_API_KEY",
]


@pytest.fixture
def clean_env(monkeypatch):
    for var in _ENV_KEYS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


class TestAutoDetection:
    def test_detects_anthropic_key(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        assert _auto_detect_provider() == "claude"

    def test_detects_openai_key(self, clean_env):
        clean_env.setenv("OPENAI_API_KEY", "sk-test")
        assert _auto_detect_provider() == "openai"

    def test_detects_together_key(self, clean_env):
        clean_env.setenv("TOGETHER_API_KEY", "tg-test")
        assert _auto_detect_provider() == "together"

    def test_prefers_groq_when_multiple(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        clean_env.setenv("GROQ_API_KEY", "gsk_test")
        assert _auto_detect_provider() == "groq"

    def test_explicit_key_prefix_wins(self, clean_env):
        clean_env.setenv("GROQ_API_KEY", "gsk_test")
        assert _auto_detect_provider("sk-ant-abc") == "claude"

    def test_no_keys_raises(self, clean_env):
        with pytest.raises(LLMError, match="No LLM API key found"):
            _auto_detect_provider()

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("sk-ant-x", "claude"),
            ("gsk_x", "groq"),
            ("hf_x", "huggingface"),
            ("sk-proj-x", "openai"),
            ("random", None),
        ],
    )
    def test_key_prefixes(self, key, expected):
        assert _detect_provider_from_key(key) == expected


class TestCreateProvider:
    def test_explicit_claude_with_client(self):
        mock_client = MagicMock()
        provider = create_llm_provider(provider="claude", client=mock_client)
        assert provider.provider_name == "claude"
        assert provider.client is mock_client

    def test_explicit_openai_with_client(self):
        mock_client = MagicMock()
        provider = create_llm_provider(provider="openai", client=mock_client)
        assert provider.provider_name == "openai"
        assert provider.client is mock_client

    @pytest.mark.parametrize("name", ["groq", "together", "huggingface", "cohere"])
    def test_openai_compatible_with_client(self, name):
        provider = create_llm_provider(provider=name, client=MagicMock())
        assert provider.provider_name == name

    def test_groq_uses_compatible_base_url(self, clean_env):
        with patch("openai.OpenAI") as mock_openai:
            create_llm_provider(provider="groq", api_key="gsk_abc", timeout=5)
        kwargs = mock_openai.call_args.kwargs
        assert kwargs["base_url"] == "https://api.groq.com/openai/v1"
        assert kwargs["api_key"] == "gsk_abc"
        assert kwargs["timeout"] == 5

    @pytest.mark.parametrize(
        "name,url",
        [
            ("huggingface", "https://router.huggingface.co/v1"),
            ("cohere", "https://api.cohere.ai/compatibility/v1"),
        ],
    )
    def test_huggingface_and_cohere_base_urls(self, clean_env, name, url):
        with patch("openai.OpenAI") as mock_openai:
            provider = create_llm_provider(provider=name, api_key="k")
        assert mock_openai.call_args.kwargs["base_url"] == url
        assert provider.provider_name == name

    def test_detects_cohere_env_key(self, clean_env):
        clean_env.setenv("COHERE_API_KEY", "co-test")
        assert _auto_detect_provider() == "cohere"

    def test_env_key_used_when_not_explicit(self, clean_env):
        clean_env.setenv("TOGETHER_API_KEY", "tg-env")
        with patch("openai.OpenAI") as mock_openai:
            create_llm_provider(provider="together")
        assert mock_openai.call_args.kwargs["api_key"] == "tg-env"

    def test_unknown_provider_raises(self):
        with pytest.raises(LLMError, match="Unknown provider"):
            create_llm_provider(provider="llama", client=MagicMock())

    def test_auto_with_anthropic_key(self, clean_env):
        clean_env.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
        # Mock Anthropic client to avoid real init
        with patch("anthropic.Anthropic"):
            provider = create_llm_provider()
            assert provider.provider_name == "claude"

    def test_custom_model(self):
        mock_client = MagicMock()
        provider = create_llm_provider(provider="claude", client=mock_client, model="claude-x")
        assert provider.model == "claude-x"

    def test_default_models(self):
        mock_client = MagicMock()
        assert create_llm_provider(provider="claude", client=mock_client).model == "claude-3-5-haiku-latest"
        assert create_llm_provider(provider="openai", client=mock_client).model == "gpt-4o-mini"
        assert create_llm_provider(provider="groq", client=mock_client).model == "llama-3.1-8b-instant"
