"""Progress persistence: completed sessions, daily counts and weak words."""

import json
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Optional

import structlog

from ..state.models import SentenceResult
from ..text.normalizer import normalize
from ..utils.time import day_key, reading_streak, utc_now


@dataclass
class StoredSession:
    """Stored reading session."""
    id: int
    sentence: str
    words_total: int
    words_correct: int
    words_helped: int
    helped_words: list[str]
    first_attempt_mastery: float
    day: str
    created_at: str


class ProgressStore:
    """SQLite-based progress store."""

    def __init__(self, db_path: str = "progress.db", max_sessions: int = 200):
        self.db_path = Path(db_path)
        self.max_sessions = max_sessions
        self.logger = structlog.get_logger("progress.store")
        self._lock = threading.Lock()

        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS sessions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    sentence TEXT NOT NULL,
                    words_total INTEGER NOT NULL,
                    words_correct INTEGER NOT NULL,
                    words_helped INTEGER NOT NULL,
                    helped_words TEXT NOT NULL,
                    first_attempt_mastery REAL NOT NULL,
                    day TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)

            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_sessions_day ON sessions(day)
            """)

            # Per-day counts are never trimmed with the session list
            conn.execute("""
                CREATE TABLE IF NOT EXISTS daily_progress (
                    day TEXT PRIMARY KEY,
                    count INTEGER NOT NULL DEFAULT 0
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS struggling_words (
                    word TEXT PRIMARY KEY,
                    count INTEGER NOT NULL DEFAULT 0
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS focus_words (
                    word TEXT PRIMARY KEY
                )
            """)

            conn.commit()

    @contextmanager
    def _get_connection(self):
        """Get database connection with proper error handling."""
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, timeout=30.0)
            conn.row_factory = sqlite3.Row
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            self.logger.error("Database error", error=str(e))
            raise
        finally:
            if conn:
                conn.close()

    def record_session(self, result: SentenceResult) -> Optional[int]:
        """
        Store a completed challenge and trim old sessions.

        Args:
            result: Sentence-complete payload

        Returns:
            Session ID if stored successfully, None otherwise
        """
        completed_at = result.completed_at or utc_now()
        with self._lock:
            try:
                with self._get_connection() as conn:
                    cursor = conn.execute("""
                        INSERT INTO sessions (
                            sentence, words_total, words_correct, words_helped,
                            helped_words, first_attempt_mastery, day, created_at
                        ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    """, (
                        result.sentence,
                        result.total_words,
                        result.words_correct,
                        len(result.helped_words),
                        json.dumps(list(result.helped_words)),
                        result.first_attempt_mastery,
                        day_key(completed_at),
                        completed_at.isoformat()
                    ))
                    session_id = cursor.lastrowid

                    conn.execute("""
                        INSERT INTO daily_progress (day, count) VALUES (?, 1)
                        ON CONFLICT(day) DO UPDATE SET count = count + 1
                    """, (day_key(completed_at),))

                    conn.execute("""
                        DELETE FROM sessions WHERE id NOT IN (
                            SELECT id FROM sessions ORDER BY id DESC LIMIT ?
                        )
                    """, (self.max_sessions,))

                    conn.commit()

                    self.logger.info(
                        "Session recorded",
                        session_id=session_id,
                        words_total=result.total_words,
                        words_helped=len(result.helped_words)
                    )
                    return session_id

            except sqlite3.Error as e:
                self.logger.error("Failed to record session", error=str(e))
                return None

    def get_recent_sessions(self, limit: int = 20) -> list[StoredSession]:
        """Most recent sessions, newest first."""
        with self._get_connection() as conn:
            rows = conn.execute("""
                SELECT * FROM sessions ORDER BY id DESC LIMIT ?
            """, (limit,)).fetchall()

        return [self._row_to_stored_session(row) for row in rows]

    def count_sessions(self) -> int:
        with self._get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM sessions").fetchone()[0]

    def get_today_stats(self, today: Optional[date] = None) -> dict[str, Any]:
        """Sentences read today and the current daily streak."""
        today = today or utc_now().date()
        with self._get_connection() as conn:
            today_row = conn.execute("""
                SELECT count FROM daily_progress WHERE day = ?
            """, (today.isoformat(),)).fetchone()
            days = {row["day"] for row in conn.execute("SELECT day FROM daily_progress")}

        count = today_row["count"] if today_row else 0

        return {"count": count, "streak": reading_streak(days, today)}

    def load_struggling_words(self) -> dict[str, int]:
        """Cumulative help counts per token."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT word, count FROM struggling_words").fetchall()
        return {row["word"]: row["count"] for row in rows}

    def save_struggling_words(self, counts: dict[str, int]) -> None:
        """Persist the help counts, replacing stored values for these tokens."""
        with self._lock:
            with self._get_connection() as conn:
                conn.executemany("""
                    INSERT INTO struggling_words (word, count) VALUES (?, ?)
                    ON CONFLICT(word) DO UPDATE SET count = excluded.count
                """, list(counts.items()))
                conn.commit()

        self.logger.debug("Struggling words saved", words=len(counts))

    def load_focus_words(self) -> list[str]:
        """Tokens a parent chose to practice."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT word FROM focus_words ORDER BY word").fetchall()
        return [row["word"] for row in rows]

    def set_focus_words(self, words: list[str]) -> None:
        """Replace the focus word list; words are stored normalized."""
        tokens = [normalize(word) for word in words]
        with self._lock:
            with self._get_connection() as conn:
                conn.execute("DELETE FROM focus_words")
                conn.executemany("INSERT OR IGNORE INTO focus_words (word) VALUES (?)",
                                 [(token,) for token in tokens if token])
                conn.commit()

    def _row_to_stored_session(self, row: sqlite3.Row) -> StoredSession:
        """Convert database row to StoredSession object."""
        return StoredSession(
            id=row["id"],
            sentence=row["sentence"],
            words_total=row["words_total"],
            words_correct=row["words_correct"],
            words_helped=row["words_helped"],
            helped_words=json.loads(row["helped_words"]),
            first_attempt_mastery=row["first_attempt_mastery"],
            day=row["day"],
            created_at=row["created_at"]
        )
