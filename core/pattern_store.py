"""
Pattern Store

Durable, deduplicated set of domain patterns backed by SQLite.

- Seeds a fixed default list the first time the table is created
- Serializes writes so concurrent adds never break uniqueness
- Notifies subscribers with a fresh snapshot after every write
"""

import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from core.errors import AlreadyExists, InvalidPattern
from infra.logger import logger_store, log_store_write
from tools.schemas import UrlPattern


Listener = Callable[[List[UrlPattern]], None]


class PatternStore:
    """
    Pattern list persisted in the `url_patterns` table.

    Rows are (id, pattern) with a unique index on pattern.
    list() always returns patterns in lexicographic order.
    """

    def __init__(
        self,
        db_path: Union[str, Path] = "runtime/data/patterns.db",
        defaults: Optional[Iterable[str]] = None,
        max_length: int = 253,
    ):
        """
        Initialize the store and create the schema if needed.

        Args:
            db_path: Path to the SQLite database file
            defaults: Patterns seeded when the table is first created
            max_length: Longest pattern accepted by add()
        """
        self.db_path = Path(db_path)
        self.max_length = max_length
        self._write_lock = threading.Lock()
        self._listeners: List[Listener] = []

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_database(list(defaults or []))

    @contextmanager
    def _get_connection(self):
        """Get a database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self, defaults: List[str]):
        """Create the table; seed defaults on first creation."""
        with self._write_lock, self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'url_patterns'"
            )
            first_use = cursor.fetchone() is None

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS url_patterns (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    pattern TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE UNIQUE INDEX IF NOT EXISTS idx_url_patterns_pattern ON url_patterns(pattern)"
            )

            if first_use and defaults:
                cursor.executemany(
                    "INSERT OR IGNORE INTO url_patterns (pattern) VALUES (?)",
                    [(p,) for p in defaults],
                )
                logger_store.info(f"STORE_SEEDED | count={len(defaults)} | db={self.db_path}")

    # =========================================================================
    # Reads
    # =========================================================================

    def list(self) -> List[UrlPattern]:
        """Point-in-time snapshot ordered by pattern text."""
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT id, pattern FROM url_patterns ORDER BY pattern ASC"
            ).fetchall()
        return [UrlPattern(id=row["id"], pattern=row["pattern"]) for row in rows]

    def patterns(self) -> List[str]:
        """Same snapshot as list(), as plain strings."""
        return [item.pattern for item in self.list()]

    def get(self, pattern: str) -> Optional[UrlPattern]:
        """Look up a single row by its pattern text."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT id, pattern FROM url_patterns WHERE pattern = ?",
                (self.normalize(pattern),),
            ).fetchone()
        return UrlPattern(id=row["id"], pattern=row["pattern"]) if row else None

    # =========================================================================
    # Writes
    # =========================================================================

    def normalize(self, pattern: str) -> str:
        """Trim surrounding whitespace and lower-case."""
        return (pattern or "").strip().lower()

    def validate(self, pattern: str) -> str:
        """
        Normalize and check a candidate pattern.

        Raises:
            InvalidPattern: blank, a bare ".", an empty label, inner whitespace, or too long
        """
        normalized = self.normalize(pattern)

        if not normalized:
            raise InvalidPattern(pattern, "pattern is empty")
        if normalized == ".":
            raise InvalidPattern(pattern, "suffix pattern has no domain")
        domain = normalized[1:] if normalized.startswith(".") else normalized
        if "" in domain.split("."):
            raise InvalidPattern(pattern, "pattern has an empty label")
        if any(ch.isspace() for ch in normalized):
            raise InvalidPattern(pattern, "pattern contains whitespace")
        if len(normalized) > self.max_length:
            raise InvalidPattern(pattern, f"pattern longer than {self.max_length} characters")

        return normalized

    def add(self, pattern: str) -> UrlPattern:
        """
        Insert a pattern.

        Returns:
            The stored row

        Raises:
            InvalidPattern: input rejected by validate()
            AlreadyExists: pattern is already stored
        """
        normalized = self.validate(pattern)

        with self._write_lock:
            try:
                with self._get_connection() as conn:
                    cursor = conn.execute(
                        "INSERT INTO url_patterns (pattern) VALUES (?)", (normalized,)
                    )
                    row_id = cursor.lastrowid
            except sqlite3.IntegrityError:
                log_store_write("add", normalized, success=False)
                raise AlreadyExists(normalized) from None

        log_store_write("add", normalized, success=True)
        self._notify()
        return UrlPattern(id=row_id, pattern=normalized)

    def remove(self, pattern: Union[UrlPattern, str]) -> bool:
        """
        Delete a pattern by row or by text.

        Returns:
            True if a row was deleted
        """
        with self._write_lock, self._get_connection() as conn:
            if isinstance(pattern, UrlPattern):
                cursor = conn.execute("DELETE FROM url_patterns WHERE id = ?", (pattern.id,))
                text = pattern.pattern
            else:
                text = self.normalize(pattern)
                cursor = conn.execute("DELETE FROM url_patterns WHERE pattern = ?", (text,))
            deleted = cursor.rowcount > 0

        log_store_write("remove", text, success=deleted)
        if deleted:
            self._notify()
        return deleted

    # =========================================================================
    # Subscriptions
    # =========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for list changes.

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        if not self._listeners:
            return

        snapshot = self.list()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger_store.error(f"LISTENER_FAILED | error={str(e)}")
