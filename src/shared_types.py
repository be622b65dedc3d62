"""Shared enums and types for moodlog."""

from enum import StrEnum


class StoreBackend(StrEnum):
    SQLITE = "sqlite"
    MARKDOWN = "markdown"


class SortOrder(StrEnum):
    DESC = "desc"
    ASC = "asc"


class MoodSource(StrEnum):
    LOCAL = "local"
    CLAUDE = "claude"
    OPENAI = "openai"
    GROQ = "groq"
    TOGETHER = "together"


MOOD_MIN = 1
MOOD_MAX = 5
