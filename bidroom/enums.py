"""
Enums for the auction room server.
"""

from enum import Enum


class RoomStatus(str, Enum):
    """Live status of a room's bidding round."""
    IDLE = "IDLE"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    SOLD = "SOLD"
    UNSOLD = "UNSOLD"

    @property
    def is_live(self) -> bool:
        """True while a round is open (running or paused)."""
        return self in (RoomStatus.ACTIVE, RoomStatus.PAUSED)


class PlayerState(str, Enum):
    """Durable sale state derived from a player's is_sold/is_unsold flags."""
    PENDING = "pending"
    SOLD = "sold"
    UNSOLD = "unsold"
