"""Data models for mood journal entries."""

from dataclasses import dataclass, field
from datetime import datetime

from shared_types import MOOD_MAX, MOOD_MIN


def validate_mood(mood: int) -> int:
    """Ensure mood is an integer in [1, 5]."""
    if isinstance(mood, bool) or not isinstance(mood, int):
        raise ValueError(f"Mood must be an integer, got {mood!r}")
    if not MOOD_MIN <= mood <= MOOD_MAX:
        raise ValueError(f"Mood must be between {MOOD_MIN} and {MOOD_MAX}, got {mood}")
    return mood


def to_local_naive(dt: datetime) -> datetime:
    """Convert aware datetimes to naive local time; naive ones pass through."""
    if dt.tzinfo is not None:
        return dt.astimezone().replace(tzinfo=None)
    return dt


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO timestamp (``Z`` suffix allowed) into naive local time."""
    if isinstance(value, datetime):
        return to_local_naive(value)
    return to_local_naive(datetime.fromisoformat(str(value).replace("Z", "+00:00")))


@dataclass(frozen=True)
class Entry:
    """One journal submission. Immutable once created."""

    id: str
    user_id: str
    mood: int
    text: str
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "mood": self.mood,
            "text": self.text,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        return cls(
            id=str(data["id"]),
            user_id=str(data["user_id"]),
            mood=int(data["mood"]),
            text=data.get("text", ""),
            created_at=parse_timestamp(data["created_at"]),
        )
