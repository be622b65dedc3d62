"""Shared test fixtures for moodlog."""

import sys
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from journal.models import Entry  # noqa: E402


def make_entry(mood=3, when=None, text="entry", user_id="user-1", entry_id=None):
    """Entry factory; `when` defaults to now."""
    when = when or datetime.now()
    return Entry(
        id=entry_id or f"e-{when.isoformat()}-{mood}",
        user_id=user_id,
        mood=mood,
        text=text,
        created_at=when,
    )


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def sample_entries():
    """Three consecutive days ending today, two entries today."""
    now = datetime.now().replace(hour=12, minute=0, second=0, microsecond=0)
    return [
        make_entry(4, now, "Great day at work"),
        make_entry(2, now - timedelta(hours=2), "Tired this morning"),
        make_entry(3, now - timedelta(days=1), "Okay day"),
        make_entry(5, now - timedelta(days=2), "Amazing hike"),
    ]


@pytest.fixture
def temp_paths(tmp_path):
    """Paths dict as returned by cli.config.get_paths, rooted in tmp_path."""
    return {
        "data_dir": tmp_path,
        "entries_db": tmp_path / "entries.db",
        "users_db": tmp_path / "users.db",
        "markdown_dir": tmp_path / "journal",
        "session_file": tmp_path / "session.json",
        "log_file": None,
    }


@pytest.fixture
def mock_llm():
    """LLMProvider stand-in returning a fixed reply."""
    provider = MagicMock()
    provider.provider_name = "claude"
    provider.generate.return_value = "Mood: 4/5. You sound upbeat and productive."
    return provider
