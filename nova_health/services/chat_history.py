"""
In-memory log of assistant replies.

Kept for diagnostics only: nothing reads it back to clients and it is lost
on restart. The oldest entries are dropped once the limit is reached.
"""
from collections import deque
from typing import Deque, List

from nova_health.api.models.chat import ChatHistoryEntry


class ChatHistoryLog:
    """Bounded append-only log of ``ChatHistoryEntry`` items."""

    def __init__(self, limit: int = 200):
        if limit < 1:
            raise ValueError(f"History limit must be positive, got {limit}")
        self._entries: Deque[ChatHistoryEntry] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._entries.maxlen

    def append_reply(self, reply: str) -> ChatHistoryEntry:
        entry = ChatHistoryEntry(content=reply)
        self._entries.append(entry)
        return entry

    def entries(self) -> List[ChatHistoryEntry]:
        """Snapshot of the log, oldest first."""
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
