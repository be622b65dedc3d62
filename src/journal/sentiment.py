"""Mood scoring: remote LLM analysis with a local keyword fallback."""

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Union

import structlog

from journal.advice import get_mood_advice, mood_emoji
from journal.models import Entry
from llm.base import LLMError, LLMProvider, LLMRateLimitError
from shared_types import MOOD_MAX, MOOD_MIN, MoodSource

logger = structlog.get_logger()

# Keyword lists; matched as substrings of the lowercased text
_SAD = ("sad", "depressed", "lonely", "upset", "miserable", "terrible", "awful", "hate", "worst")
_UNHAPPY = ("bad", "wrong", "difficult", "hard", "frustrated", "annoyed", "disappointed")
_NEUTRAL = ("okay", "fine", "alright", "neutral", "normal", "average")
_HAPPY = ("good", "happy", "great", "nice", "fun", "enjoyed", "pleased")
_EXCELLENT = ("excellent", "amazing", "fantastic", "wonderful", "love", "best", "awesome")

_SCORE_RE = re.compile(r"(\d)/5|score[:\s]*(\d)|mood[:\s]*(\d)", re.IGNORECASE)

_SYSTEM = (
    "You are a compassionate mood analysis assistant. Analyze the user's text and provide: "
    "1) A mood score (1-5), 2) Key emotions detected, 3) Brief supportive advice. "
    "Keep response concise and helpful."
)
_PROMPT = 'Analyze my mood from this text: "{text}"'
MAX_PROMPT_CHARS = 4000


@dataclass
class MoodAnalysis:
    mood_score: int
    analysis: str
    source: str
    emotions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "mood_score": self.mood_score,
            "analysis": self.analysis,
            "source": self.source,
            "emotions": list(self.emotions),
        }


def _count_matches(text_lower: str, keywords: tuple[str, ...]) -> int:
    return sum(1 for kw in keywords if kw in text_lower)


def analyze_keywords(text: str) -> MoodAnalysis:
    """Deterministic keyword heuristic.

    Rules, first match wins: any excellent word -> 5; more happy than unhappy
    -> 4; any sad word -> 1; more unhappy than happy -> 2; otherwise 3.
    """
    text_lower = text.lower()
    sad = _count_matches(text_lower, _SAD)
    unhappy = _count_matches(text_lower, _UNHAPPY)
    happy = _count_matches(text_lower, _HAPPY)
    excellent = _count_matches(text_lower, _EXCELLENT)

    score = 3
    if excellent > 0:
        score = 5
    elif happy > unhappy:
        score = 4
    elif sad > 0:
        score = 1
    elif unhappy > happy:
        score = 2

    emotions = []
    if sad:
        emotions.append("Sadness")
    if unhappy:
        emotions.append("Frustration")
    if happy:
        emotions.append("Joy")
    if excellent:
        emotions.append("Elation")

    advice = get_mood_advice(score)
    analysis = "\n".join(
        [
            "📊 Mood Analysis",
            f"Detected Mood: {mood_emoji(score)} ({score}/5)",
            f"Emotions: {', '.join(emotions) if emotions else 'Neutral'}",
            "",
            "💭 Insights:",
            advice.as_text(),
            "",
            "Remember: Your feelings are valid. Consider journaling more details to track patterns.",
        ]
    )
    return MoodAnalysis(
        mood_score=score,
        analysis=analysis,
        source=MoodSource.LOCAL.value,
        emotions=emotions,
    )


def extract_mood_score(text: str) -> int:
    """Pull a 1-5 score out of free text ("4/5", "score: 4", "mood 4"); default 3."""
    match = _SCORE_RE.search(text or "")
    if match:
        digit = next(g for g in match.groups() if g is not None)
        return min(max(int(digit), MOOD_MIN), MOOD_MAX)
    return 3


class MoodScorer:
    """Score journal text 1-5.

    With an LLM provider the text goes to the remote model first; any failure
    there (auth, rate limit after retries, transport, empty reply) downgrades
    to the local keyword heuristic instead of propagating.
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        max_tokens: int = 200,
        temperature: float = 0.7,
        retry_config: Optional[dict] = None,
    ):
        self.provider = provider
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.retry_config = retry_config or {}

    @property
    def source(self) -> str:
        return self.provider.provider_name if self.provider else MoodSource.LOCAL.value

    @property
    def is_remote(self) -> bool:
        return self.provider is not None

    def _call_remote(self, text: str) -> str:
        from cli.retry import retry_from_config

        @retry_from_config({"retry": self.retry_config}, exceptions=(LLMRateLimitError,))
        def _call() -> str:
            return self.provider.generate(
                messages=[{"role": "user", "content": _PROMPT.format(text=text[:MAX_PROMPT_CHARS])}],
                system=_SYSTEM,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )

        return _call()

    def score(self, text: str) -> MoodAnalysis:
        """Analyze text.

        Raises:
            ValueError: If text is empty
        """
        if not text or not text.strip():
            raise ValueError("Text to analyze is empty")

        if not self.provider:
            return analyze_keywords(text)

        try:
            reply = self._call_remote(text)
        except LLMError as e:
            logger.warning("scorer.remote_failed", provider=self.source, error=str(e))
            return analyze_keywords(text)
        except Exception as e:
            logger.error("scorer.remote_unexpected_error", provider=self.source, error=str(e))
            return analyze_keywords(text)

        if not reply or not reply.strip():
            logger.warning("scorer.remote_empty_reply", provider=self.source)
            return analyze_keywords(text)

        return MoodAnalysis(
            mood_score=extract_mood_score(reply),
            analysis=reply.strip(),
            source=self.source,
        )

    def analyze_today(
        self,
        entries: list[Entry],
        today: Optional[Union[date, datetime]] = None,
    ) -> Optional[MoodAnalysis]:
        """Score today's entries combined. None when there is no text to score."""
        from journal.stats import today_entries

        texts = [e.text.strip() for e in today_entries(entries, today=today)]
        combined = " ".join(t for t in texts if t)
        if not combined:
            return None
        return self.score(combined)


def create_mood_scorer(
    llm_config: dict,
    retry_config: Optional[dict] = None,
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
) -> MoodScorer:
    """Build a scorer from the llm config section.

    provider/api_key override the config (per-user settings). Provider
    "local", or a remote provider that cannot be built, yields the keyword scorer.
    """
    from llm import create_llm_provider

    name = provider or llm_config.get("provider", "local")
    if name == MoodSource.LOCAL:
        return MoodScorer(retry_config=retry_config)

    try:
        llm = create_llm_provider(
            provider=name,
            api_key=api_key or llm_config.get("api_key"),
            model=llm_config.get("model") if name == llm_config.get("provider") else None,
            timeout=llm_config.get("timeout"),
        )
    except Exception as e:
        logger.warning("scorer.provider_unavailable", provider=name, error=str(e))
        return MoodScorer(retry_config=retry_config)

    return MoodScorer(
        provider=llm,
        max_tokens=llm_config.get("max_tokens", 200),
        retry_config=retry_config,
    )
