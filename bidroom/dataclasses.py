"""
Data classes for live room state.

A RoomSession is the in-memory record of one auction's bidding round. It is
never persisted; only its settled outcome reaches the database.
"""

import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from bidroom.enums import RoomStatus

Amount = Union[int, float]


@dataclass(frozen=True)
class BidSnapshot:
    """Bid and leader as they were before an accepted bid."""
    bid: Amount
    leader: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {'bid': self.bid, 'leader': self.leader}


@dataclass(frozen=True)
class SaleTerms:
    """Outcome of a sell transition, captured under the session lock."""
    player_id: int
    team_id: int
    amount: Amount


@dataclass
class RoomSession:
    """Mutable bidding state for one auction room."""
    current_bid: Amount = 0
    leading_team_id: Optional[int] = None
    current_player_id: Optional[int] = None
    status: RoomStatus = RoomStatus.IDLE
    bid_history: List[BidSnapshot] = field(default_factory=list)

    # Held only across a synchronous mutation and its snapshot
    lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def reset(self) -> None:
        """Restore the values of a freshly created session."""
        self.current_bid = 0
        self.leading_team_id = None
        self.current_player_id = None
        self.status = RoomStatus.IDLE
        self.bid_history = []

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation broadcast as ``auction_state``."""
        return {
            'currentBid': self.current_bid,
            'leadingTeamId': self.leading_team_id,
            'currentPlayerId': self.current_player_id,
            'status': self.status.value,
            'bidHistory': [entry.to_dict() for entry in self.bid_history],
        }
