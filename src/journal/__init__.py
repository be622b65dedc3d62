from .models import Entry
from .sentiment import MoodAnalysis, MoodScorer, create_mood_scorer
from .storage import EntryStore, MarkdownEntryStore, SQLiteEntryStore, create_entry_store

__all__ = [
    "Entry",
    "EntryStore",
    "SQLiteEntryStore",
    "MarkdownEntryStore",
    "create_entry_store",
    "MoodAnalysis",
    "MoodScorer",
    "create_mood_scorer",
]
