"""Mood emoji, band, and supportive advice per mood score."""

from dataclasses import dataclass

_EMOJI = {
    1: "😢",
    2: "😟",
    3: "😐",
    4: "🙂",
    5: "😄",
}


@dataclass(frozen=True)
class MoodAdvice:
    title: str
    messages: tuple[str, ...]

    def as_text(self) -> str:
        return "\n".join([self.title, *self.messages])


_ADVICE = {
    1: MoodAdvice(
        title="Your mood seems quite low right now 💙",
        messages=(
            "It's okay to feel sad sometimes. Your emotions are valid and important.",
            "Consider these supportive steps:",
            "• Take a short walk or get some fresh air",
            "• Reach out to someone you trust or care about",
            "• Practice deep breathing: 4 seconds in, 6 seconds out",
            "• Engage in a small activity you enjoy",
            "• Be kind to yourself - this feeling will pass",
            "",
            "If you're experiencing persistent sadness, please reach out to a mental health "
            "professional or crisis helpline. You're not alone. 💚",
        ),
    ),
    2: MoodAdvice(
        title="You seem to be experiencing some challenges 💙",
        messages=(
            "It's natural to have difficult moments. Acknowledge your feelings.",
            "Here are some helpful suggestions:",
            "• Talk to someone about what's bothering you",
            "• Identify one small positive thing to focus on",
            "• Try a relaxing activity (music, reading, art)",
            "• Practice self-compassion - treat yourself like a good friend",
            "• Movement can help - stretch, dance, or exercise",
            "",
            "Remember, seeking help is a sign of strength, not weakness.",
        ),
    ),
    3: MoodAdvice(
        title="You're feeling neutral or balanced 😐",
        messages=(
            "Neutral moods are normal and can be a good time for reflection.",
            "Consider these mindful actions:",
            "• Reflect on what contributes to your emotional balance",
            "• Set a small goal or intention for today",
            "• Connect with someone important to you",
            "• Engage in something that brings you joy or purpose",
            "• Practice gratitude for the stability you're feeling",
            "",
            "Use this calm moment to build positive habits for your well-being.",
        ),
    ),
    4: MoodAdvice(
        title="You're feeling good! 🙂",
        messages=(
            "Great! You're in a positive frame of mind.",
            "Make the most of this good mood:",
            "• Channel this energy into something productive or creative",
            "• Share your positivity with others around you",
            "• Tackle something you've been putting off",
            "• Strengthen relationships with people you care about",
            "• Notice what's contributing to your good mood",
            "",
            "Appreciate these good moments and let them fuel your motivation!",
        ),
    ),
    5: MoodAdvice(
        title="You're feeling amazing! 😄",
        messages=(
            "Wonderful! You're experiencing a high level of happiness and well-being.",
            "Celebrate and expand this positive state:",
            "• Express your gratitude and appreciation to others",
            "• Use this energy to help or inspire someone else",
            "• Start that project or goal you've been dreaming about",
            "• Share your joy - it's contagious!",
            "• Document this feeling to revisit on difficult days",
            "",
            "Keep nurturing what makes you feel this way. You deserve it! 🌟",
        ),
    ),
}


def mood_emoji(score) -> str:
    return _EMOJI.get(score, _EMOJI[3])


def get_mood_advice(score) -> MoodAdvice:
    """Advice for a 1-5 score; anything else gets the neutral advice."""
    return _ADVICE.get(score, _ADVICE[3])


def mood_band(score: int) -> str:
    """Display band: bad (<=2), neutral (3) or good (>=4)."""
    if score <= 2:
        return "bad"
    if score == 3:
        return "neutral"
    return "good"
