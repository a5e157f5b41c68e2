"""
Pattern Manager

UI-facing facade over the PatternStore. Turns store errors into
one-shot ShowMessage events the UI drains once.
"""

import queue
from typing import List, Optional

from core.errors import AlreadyExists, InvalidPattern, MSG_PATTERN_EXISTS
from core.pattern_store import PatternStore
from infra.logger import logger_store
from tools.schemas import ShowMessage, UrlPattern


class PatternManager:
    """
    Add/delete patterns on behalf of the UI.

    Events are queued, not stored as flags: each message is delivered
    to exactly one drain() call and never replayed.
    """

    def __init__(self, store: PatternStore):
        self.store = store
        self._events: "queue.Queue[ShowMessage]" = queue.Queue()

    @property
    def patterns(self) -> List[UrlPattern]:
        return self.store.list()

    def add_pattern(self, pattern_text: str) -> Optional[UrlPattern]:
        """
        Add user input to the store.

        Blank input is ignored silently. Duplicates and rejected input
        produce a ShowMessage event.
        """
        if not (pattern_text or "").strip():
            return None

        try:
            return self.store.add(pattern_text)
        except AlreadyExists:
            self._emit(MSG_PATTERN_EXISTS)
        except InvalidPattern as e:
            logger_store.warning(f"PATTERN_REJECTED | pattern={e.pattern!r} | reason={e.reason}")
            self._emit(f"Invalid pattern: {e.reason}")

        return None

    def delete_pattern(self, item: UrlPattern) -> bool:
        return self.store.remove(item)

    def drain_events(self) -> List[ShowMessage]:
        """Take every pending event. A second call returns only newer ones."""
        events = []
        while True:
            try:
                events.append(self._events.get_nowait())
            except queue.Empty:
                return events

    def _emit(self, message: str):
        self._events.put(ShowMessage(message=message))
