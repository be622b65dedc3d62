"""Entry store interface with SQLite and markdown backends."""

import re
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Optional

import frontmatter
import structlog

from db import wal_connect
from journal.models import Entry, parse_timestamp, to_local_naive, validate_mood
from shared_types import StoreBackend

logger = structlog.get_logger()

MAX_TEXT_LENGTH = 100_000  # 100KB


class EntryStoreError(Exception):
    """Base entry store error."""


class StoreNotReadyError(EntryStoreError):
    """Backing store did not become available in time."""


def _new_id() -> str:
    return uuid.uuid4().hex


def _check_entry(mood: int, text: str) -> None:
    validate_mood(mood)
    if len(text) > MAX_TEXT_LENGTH:
        raise ValueError(f"Text exceeds max length ({MAX_TEXT_LENGTH} chars)")


class EntryStore(ABC):
    """Create/read/bulk-delete journal entries keyed by user.

    Entries come back in no guaranteed order; callers sort.
    """

    backend: str = "base"

    @abstractmethod
    def add_entry(
        self,
        user_id: str,
        mood: int,
        text: str,
        created_at: Optional[datetime] = None,
    ) -> str:
        """Persist a new entry and return its id.

        Raises:
            ValueError: If mood is outside [1, 5] or text too long
        """
        ...

    @abstractmethod
    def get_user_entries(self, user_id: str) -> list[Entry]:
        """All entries owned by user_id."""
        ...

    @abstractmethod
    def delete_all_entries(self, user_id: str) -> int:
        """Irreversibly delete every entry owned by user_id. Returns count."""
        ...

    @abstractmethod
    def get_all_entries(self) -> list[Entry]:
        """All entries across users (admin listing)."""
        ...

    def ping(self) -> bool:
        """Cheap availability check."""
        return True

    def wait_until_ready(self, timeout: float = 10.0) -> None:
        """Wait (bounded) for the backing store to answer ping().

        Raises:
            StoreNotReadyError: If not ready within timeout
        """
        from cli.retry import wait_until_ready

        if not wait_until_ready(self.ping, timeout=timeout):
            raise StoreNotReadyError(f"{self.backend} entry store not ready after {timeout}s")
        logger.debug("entry_store.ready", backend=self.backend)


class SQLiteEntryStore(EntryStore):
    """Entries as rows in a single WAL-mode SQLite table."""

    backend = StoreBackend.SQLITE.value

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path).expanduser()
        self._init_db()

    def _conn(self):
        return wal_connect(self.db_path, row_factory=True)

    def _init_db(self) -> None:
        conn = self._conn()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS entries (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    mood INTEGER NOT NULL CHECK(mood BETWEEN 1 AND 5),
                    text TEXT NOT NULL,
                    created_at TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_entries_user ON entries(user_id, created_at DESC);
            """)
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_entry(row) -> Entry:
        return Entry(
            id=row["id"],
            user_id=row["user_id"],
            mood=int(row["mood"]),
            text=row["text"],
            created_at=parse_timestamp(row["created_at"]),
        )

    def add_entry(self, user_id, mood, text, created_at=None) -> str:
        _check_entry(mood, text)
        entry_id = _new_id()
        created = to_local_naive(created_at) if created_at else datetime.now()
        conn = self._conn()
        try:
            conn.execute(
                "INSERT INTO entries (id, user_id, mood, text, created_at) VALUES (?, ?, ?, ?, ?)",
                (entry_id, user_id, mood, text, created.isoformat()),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("entry_store.entry_added", backend=self.backend, user_id=user_id, mood=mood)
        return entry_id

    def get_user_entries(self, user_id: str) -> list[Entry]:
        conn = self._conn()
        try:
            rows = conn.execute(
                "SELECT * FROM entries WHERE user_id = ? ORDER BY created_at DESC",
                (user_id,),
            ).fetchall()
            return [self._row_to_entry(r) for r in rows]
        finally:
            conn.close()

    def delete_all_entries(self, user_id: str) -> int:
        conn = self._conn()
        try:
            cur = conn.execute("DELETE FROM entries WHERE user_id = ?", (user_id,))
            conn.commit()
            deleted = cur.rowcount
        finally:
            conn.close()
        logger.info("entry_store.entries_cleared", backend=self.backend, user_id=user_id, deleted=deleted)
        return deleted

    def get_all_entries(self) -> list[Entry]:
        conn = self._conn()
        try:
            rows = conn.execute("SELECT * FROM entries ORDER BY created_at DESC").fetchall()
            return [self._row_to_entry(r) for r in rows]
        finally:
            conn.close()

    def ping(self) -> bool:
        conn = self._conn()
        try:
            conn.execute("SELECT 1").fetchone()
            return True
        finally:
            conn.close()


def _sanitize_user_dir(user_id: str) -> str:
    """Directory name for a user id. Only [A-Za-z0-9_-] allowed."""
    safe = re.sub(r"[^A-Za-z0-9_-]", "_", user_id)[:100]
    if not safe.strip("_"):
        raise ValueError(f"Invalid user id: {user_id!r}")
    return safe


class MarkdownEntryStore(EntryStore):
    """One markdown file per entry with YAML frontmatter, grouped by user."""

    backend = StoreBackend.MARKDOWN.value

    def __init__(self, root_dir: str | Path):
        self.root_dir = Path(root_dir).expanduser().resolve()
        self.root_dir.mkdir(parents=True, exist_ok=True)

    def _validate_path(self, filepath: Path) -> Path:
        """Ensure resolved path is inside root_dir."""
        resolved = filepath.resolve()
        if not resolved.is_relative_to(self.root_dir):
            raise ValueError(f"Path escapes journal directory: {filepath}")
        return resolved

    def _user_dir(self, user_id: str) -> Path:
        return self._validate_path(self.root_dir / _sanitize_user_dir(user_id))

    @staticmethod
    def _load(filepath: Path) -> Entry:
        post = frontmatter.load(filepath)
        return Entry(
            id=str(post["id"]),
            user_id=str(post["user_id"]),
            mood=int(post["mood"]),
            text=post.content,
            created_at=parse_timestamp(post["created_at"]),
        )

    def _load_dir(self, pattern: str) -> list[Entry]:
        entries = []
        for f in sorted(self.root_dir.glob(pattern), reverse=True):
            try:
                entries.append(self._load(f))
            except (OSError, ValueError, KeyError) as e:
                logger.warning("entry_store.unreadable_file", path=str(f), error=str(e))
                continue
        return entries

    def add_entry(self, user_id, mood, text, created_at=None) -> str:
        _check_entry(mood, text)
        entry_id = _new_id()
        created = to_local_naive(created_at) if created_at else datetime.now()

        post = frontmatter.Post(text)
        post["id"] = entry_id
        post["user_id"] = user_id
        post["mood"] = mood
        post["created_at"] = created.isoformat()

        user_dir = self._user_dir(user_id)
        user_dir.mkdir(parents=True, exist_ok=True)
        filename = f"{created.strftime('%Y-%m-%d_%H%M%S')}_{entry_id[:8]}.md"
        filepath = self._validate_path(user_dir / filename)

        with open(filepath, "w") as f:
            f.write(frontmatter.dumps(post))

        logger.info("entry_store.entry_added", backend=self.backend, user_id=user_id, mood=mood)
        return entry_id

    def get_user_entries(self, user_id: str) -> list[Entry]:
        user_dir = self._user_dir(user_id)
        if not user_dir.exists():
            return []
        return self._load_dir(f"{user_dir.name}/*.md")

    def delete_all_entries(self, user_id: str) -> int:
        user_dir = self._user_dir(user_id)
        if not user_dir.exists():
            return 0
        deleted = 0
        for f in user_dir.glob("*.md"):
            f.unlink()
            deleted += 1
        logger.info("entry_store.entries_cleared", backend=self.backend, user_id=user_id, deleted=deleted)
        return deleted

    def get_all_entries(self) -> list[Entry]:
        return self._load_dir("*/*.md")

    def ping(self) -> bool:
        return self.root_dir.is_dir()


def create_entry_store(backend: str, paths: dict) -> EntryStore:
    """Build the configured entry store.

    Args:
        backend: "sqlite" or "markdown"
        paths: Expanded paths dict (needs entries_db or markdown_dir)
    """
    if backend == StoreBackend.SQLITE:
        return SQLiteEntryStore(paths["entries_db"])
    if backend == StoreBackend.MARKDOWN:
        return MarkdownEntryStore(paths["markdown_dir"])
    raise ValueError(f"Unknown storage backend: {backend}. Use: sqlite, markdown")
