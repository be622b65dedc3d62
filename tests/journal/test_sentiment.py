"""Tests for mood scoring: keyword heuristic, score extraction, remote fallback."""

from datetime import datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest

from journal.models import Entry
from journal.sentiment import (
    MoodScorer,
    analyze_keywords,
    create_mood_scorer,
    extract_mood_score,
)
from llm import LLMAuthError, LLMError, LLMRateLimitError

FAST_RETRY = {"max_attempts": 2, "min_wait": 0, "max_wait": 0}


class TestKeywordHeuristic:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("I feel amazing today", 5),
            ("Had a good time with friends", 4),
            ("I am so sad and lonely", 1),
            ("This was difficult and I got annoyed", 2),
            ("Just a normal day", 3),
            ("", 3),
        ],
    )
    def test_scores(self, text, expected):
        assert analyze_keywords(text).mood_score == expected

    def test_excellent_beats_sad(self):
        assert analyze_keywords("awful start but an amazing evening").mood_score == 5

    def test_happy_beats_sad_when_more_happy_than_unhappy(self):
        assert analyze_keywords("sad movie but a nice dinner").mood_score == 4

    def test_tie_is_neutral(self):
        assert analyze_keywords("good food, bad service").mood_score == 3

    def test_case_insensitive(self):
        assert analyze_keywords("FANTASTIC").mood_score == 5

    def test_result_shape(self):
        result = analyze_keywords("happy but frustrated")
        assert result.source == "local"
        assert "Joy" in result.emotions
        assert "Frustration" in result.emotions
        assert "Mood Analysis" in result.analysis

    def test_deterministic(self):
        assert analyze_keywords("nice walk").to_dict() == analyze_keywords("nice walk").to_dict()


class TestExtractScore:
    @pytest.mark.parametrize(
        "reply,expected",
        [
            ("I'd rate this 2/5.", 2),
            ("Score: 5 - very positive", 5),
            ("mood 1, please reach out", 1),
            ("Mood score: 4", 4),
            ("No number here", 3),
            ("Rating 9/5", 5),
            ("0/5 overall", 1),
            ("", 3),
        ],
    )
    def test_extract(self, reply, expected):
        assert extract_mood_score(reply) == expected


class TestMoodScorer:
    def test_local_only(self):
        scorer = MoodScorer()
        assert scorer.source == "local"
        assert not scorer.is_remote
        assert scorer.score("wonderful").mood_score == 5

    def test_empty_text_raises(self):
        with pytest.raises(ValueError):
            MoodScorer().score("   ")

    def test_remote_success(self, mock_llm):
        scorer = MoodScorer(provider=mock_llm)
        result = scorer.score("Shipped the feature")
        assert result.mood_score == 4
        assert result.source == "claude"
        assert "upbeat" in result.analysis
        kwargs = mock_llm.generate.call_args.kwargs
        assert "Shipped the feature" in kwargs["messages"][0]["content"]
        assert kwargs["max_tokens"] == 200

    def test_remote_error_falls_back(self, mock_llm):
        mock_llm.generate.side_effect = LLMAuthError("bad key")
        result = MoodScorer(provider=mock_llm).score("I feel amazing")
        assert result.source == "local"
        assert result.mood_score == 5

    def test_unexpected_error_falls_back(self, mock_llm):
        mock_llm.generate.side_effect = RuntimeError("socket closed")
        result = MoodScorer(provider=mock_llm).score("so sad")
        assert result.source == "local"
        assert result.mood_score == 1

    def test_empty_reply_falls_back(self, mock_llm):
        mock_llm.generate.return_value = "  "
        assert MoodScorer(provider=mock_llm).score("fine").source == "local"

    def test_rate_limit_retried(self, mock_llm):
        mock_llm.generate.side_effect = [LLMRateLimitError("slow down"), "Mood: 2/5"]
        result = MoodScorer(provider=mock_llm, retry_config=FAST_RETRY).score("meh")
        assert result.mood_score == 2
        assert mock_llm.generate.call_count == 2

    def test_rate_limit_exhausted_falls_back(self, mock_llm):
        mock_llm.generate.side_effect = LLMRateLimitError("slow down")
        result = MoodScorer(provider=mock_llm, retry_config=FAST_RETRY).score("great")
        assert result.source == "local"
        assert mock_llm.generate.call_count == 2

    def test_auth_error_not_retried(self, mock_llm):
        mock_llm.generate.side_effect = LLMAuthError("nope")
        MoodScorer(provider=mock_llm, retry_config=FAST_RETRY).score("great")
        assert mock_llm.generate.call_count == 1

    def test_analyze_today_combines_text(self, mock_llm):
        now = datetime.now()
        entries = [
            Entry(id="1", user_id="u", mood=3, text="morning coffee", created_at=now),
            Entry(id="2", user_id="u", mood=4, text="evening walk", created_at=now),
            Entry(id="3", user_id="u", mood=1, text="yesterday", created_at=now - timedelta(days=1)),
        ]
        MoodScorer(provider=mock_llm).analyze_today(entries, today=now)
        prompt = mock_llm.generate.call_args.kwargs["messages"][0]["content"]
        assert "morning coffee" in prompt
        assert "evening walk" in prompt
        assert "yesterday" not in prompt

    def test_analyze_today_none_when_empty(self):
        assert MoodScorer().analyze_today([]) is None

    def test_analyze_today_skips_blank_text(self, mock_llm):
        now = datetime.now()
        entries = [
            Entry(id="1", user_id="u", mood=3, text="   ", created_at=now),
            Entry(id="2", user_id="u", mood=3, text="\t", created_at=now),
        ]
        assert MoodScorer(provider=mock_llm).analyze_today(entries, today=now) is None
        mock_llm.generate.assert_not_called()


class TestCreateMoodScorer:
    def test_local_provider(self):
        scorer = create_mood_scorer({"provider": "local"})
        assert not scorer.is_remote

    def test_remote_provider(self):
        provider = MagicMock(provider_name="groq")
        with patch("llm.create_llm_provider", return_value=provider) as factory:
            scorer = create_mood_scorer(
                {"provider": "groq", "model": "llama-x", "max_tokens": 120},
                retry_config=FAST_RETRY,
            )
        assert scorer.source == "groq"
        assert scorer.max_tokens == 120
        assert factory.call_args.kwargs["model"] == "llama-x"

    def test_override_provider_ignores_config_model(self):
        with patch("llm.create_llm_provider", return_value=MagicMock(provider_name="openai")) as factory:
            create_mood_scorer({"provider": "claude", "model": "claude-x"}, provider="openai", api_key="sk-user")
        kwargs = factory.call_args.kwargs
        assert kwargs["provider"] == "openai"
        assert kwargs["api_key"] == "sk-user"
        assert kwargs["model"] is None

    def test_unavailable_provider_falls_back_to_local(self):
        with patch("llm.create_llm_provider", side_effect=LLMError("No LLM API key found")):
            scorer = create_mood_scorer({"provider": "auto"})
        assert scorer.source == "local"
