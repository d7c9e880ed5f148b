"""
Room state table: in-memory bidding sessions keyed by auction id.

Flask-SocketIO may dispatch events for the same room on different threads,
so the table guards its membership with one lock and each session carries
its own lock for mutations. Nothing here touches the database; sessions do
not survive a restart.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Generator, Optional, Union

from bidroom.dataclasses import RoomSession
from bidroom.logger import get_logger

logger = get_logger(__name__)

RoomKey = Union[int, str]


def room_key(auction_id: RoomKey) -> str:
    """Normalize an auction id to the key used for rooms and socket topics."""
    return str(auction_id).strip()


class RoomStateTable:
    """Process-wide map from auction id to its RoomSession."""

    def __init__(self):
        self._sessions: Dict[str, RoomSession] = {}
        self._table_lock = threading.Lock()

    def get_or_create(self, auction_id: RoomKey) -> RoomSession:
        """Return the session for an auction, installing a fresh one if absent."""
        key = room_key(auction_id)
        with self._table_lock:
            session = self._sessions.get(key)
            if session is None:
                session = RoomSession()
                self._sessions[key] = session
                logger.info(f"Created room session for auction {key}")
            return session

    def get(self, auction_id: RoomKey) -> Optional[RoomSession]:
        with self._table_lock:
            return self._sessions.get(room_key(auction_id))

    def remove(self, auction_id: RoomKey) -> bool:
        """Evict a room. The next get_or_create starts from a fresh session.

        Returns:
            True if a session was evicted.
        """
        key = room_key(auction_id)
        with self._table_lock:
            removed = self._sessions.pop(key, None) is not None
        if removed:
            logger.info(f"Evicted room session for auction {key}")
        return removed

    @contextmanager
    def locked(self, auction_id: RoomKey) -> Generator[RoomSession, None, None]:
        """Yield the room's session with its lock held."""
        session = self.get_or_create(auction_id)
        with session.lock:
            yield session

    def clear(self) -> None:
        with self._table_lock:
            self._sessions.clear()

    def __contains__(self, auction_id: RoomKey) -> bool:
        with self._table_lock:
            return room_key(auction_id) in self._sessions

    def __len__(self) -> int:
        with self._table_lock:
            return len(self._sessions)


# Singleton table shared by socket handlers and HTTP routes
room_table = RoomStateTable()
