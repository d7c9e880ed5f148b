"""
Bidding engine for live auction rooms.

Encapsulates the state transitions of a room's bidding round:
- Starting a round for a player
- Placing and undoing bids
- Pausing, selling, passing and resetting

Every transition runs under the room's lock and returns a snapshot of the
resulting state, or None when the event had no effect. Malformed or
out-of-order events raise BidRejected and leave the room untouched.

Snapshots are published to the room before the lock is released, so
viewers receive them in the order the transitions were applied. The
engine never touches the database; settlement starts after the lock is
released.
"""

from typing import Any, Callable, Dict, Optional, Tuple

from bidroom.dataclasses import BidSnapshot, RoomSession, SaleTerms
from bidroom.enums import RoomStatus
from bidroom.gateway import broadcast_state
from bidroom.logger import get_logger
from bidroom.rooms import RoomKey, RoomStateTable, room_table
from bidroom.services.base import BidRejected
from bidroom.utils import parse_amount, parse_id

logger = get_logger(__name__)

Snapshot = Dict[str, Any]
Publisher = Callable[[RoomKey, Snapshot], None]


class BiddingEngine:
    """State machine over the sessions of a RoomStateTable.

    IDLE -> ACTIVE <-> PAUSED, ACTIVE -> SOLD | UNSOLD, and any status back
    to IDLE through reset_round. start_player opens a new round from any
    status.
    """

    def __init__(
        self,
        rooms: Optional[RoomStateTable] = None,
        publish: Optional[Publisher] = None
    ):
        """Initialize engine with optional room table injection.

        Args:
            rooms: RoomStateTable instance (defaults to the shared table).
            publish: Called with each new snapshot while the room lock is
                held. Must not block; Socket.IO emits only queue.
        """
        self.rooms = rooms if rooms is not None else room_table
        self.publish = publish

    def _publish(self, auction_id: RoomKey, session: RoomSession) -> Snapshot:
        # Caller holds session.lock
        state = session.to_dict()
        if self.publish is not None:
            self.publish(auction_id, state)
        return state

    def snapshot(self, auction_id: RoomKey) -> Snapshot:
        """Current state of a room, creating the room if needed."""
        with self.rooms.locked(auction_id) as session:
            return session.to_dict()

    def start_player(self, auction_id: RoomKey, player_id: Any, base_price: Any) -> Snapshot:
        """Open a round for a player at its base price with no leader.

        Args:
            auction_id: Room the round belongs to.
            player_id: ID of the player going under the hammer.
            base_price: Opening price; the first bid may equal it.

        Returns:
            Snapshot of the new round.

        Raises:
            BidRejected: If the player id or base price is malformed.
        """
        player_id, error = parse_id(player_id, 'playerId')
        if error:
            raise BidRejected(error)
        price, error = parse_amount(base_price, 'basePrice')
        if error:
            raise BidRejected(error)

        with self.rooms.locked(auction_id) as session:
            session.current_bid = price
            session.leading_team_id = None
            session.current_player_id = player_id
            session.status = RoomStatus.ACTIVE
            session.bid_history = []
            state = self._publish(auction_id, session)

        logger.info(f"Auction {auction_id}: round started for player {player_id} at {price}")
        return state

    def place_bid(self, auction_id: RoomKey, team_id: Any, amount: Any) -> Snapshot:
        """Accept a bid if it raises the price.

        The opening bid of a round may equal the current price; once a team
        leads, every bid must be strictly higher. Only ACTIVE rooms take
        bids: PAUSED, SOLD, UNSOLD and IDLE rooms refuse them.

        Returns:
            Snapshot after the bid.

        Raises:
            BidRejected: If the bid is malformed, the round is not running,
                or the amount does not raise the price.
        """
        team_id, error = parse_id(team_id, 'teamId')
        if error:
            raise BidRejected(error)
        amount, error = parse_amount(amount)
        if error:
            raise BidRejected(error)

        with self.rooms.locked(auction_id) as session:
            if session.status != RoomStatus.ACTIVE:
                raise BidRejected("Bidding is not open")

            if session.leading_team_id is None:
                if amount < session.current_bid:
                    raise BidRejected("Bid must be at least the base price")
            elif amount <= session.current_bid:
                raise BidRejected("Bid must be higher than current bid")

            session.bid_history.append(
                BidSnapshot(bid=session.current_bid, leader=session.leading_team_id)
            )
            session.current_bid = amount
            session.leading_team_id = team_id
            state = self._publish(auction_id, session)

        logger.info(f"Auction {auction_id}: team {team_id} bid {amount}")
        return state

    def undo_bid(self, auction_id: RoomKey) -> Optional[Snapshot]:
        """Restore the bid and leader in force before the latest bid.

        Returns:
            Snapshot after the undo, or None if there was nothing to undo.
        """
        with self.rooms.locked(auction_id) as session:
            if not session.bid_history:
                return None
            previous = session.bid_history.pop()
            session.current_bid = previous.bid
            session.leading_team_id = previous.leader
            state = self._publish(auction_id, session)

        logger.info(f"Auction {auction_id}: bid undone, back to {previous.bid}")
        return state

    def toggle_pause(self, auction_id: RoomKey) -> Optional[Snapshot]:
        """Flip a running round between ACTIVE and PAUSED.

        Returns:
            Snapshot after the flip, or None when no round is running.
        """
        with self.rooms.locked(auction_id) as session:
            if not session.status.is_live:
                return None
            if session.status == RoomStatus.PAUSED:
                session.status = RoomStatus.ACTIVE
            else:
                session.status = RoomStatus.PAUSED
            state = self._publish(auction_id, session)

        logger.info(f"Auction {auction_id}: status now {state['status']}")
        return state

    def sell_player(self, auction_id: RoomKey) -> Optional[Tuple[Snapshot, SaleTerms]]:
        """Close the round in favour of the leading team.

        Returns:
            Tuple of (snapshot, sale terms), or None when there is no
            player or no leader.
        """
        with self.rooms.locked(auction_id) as session:
            if session.current_player_id is None or session.leading_team_id is None:
                return None
            session.status = RoomStatus.SOLD
            session.bid_history = []
            terms = SaleTerms(
                player_id=session.current_player_id,
                team_id=session.leading_team_id,
                amount=session.current_bid,
            )
            state = self._publish(auction_id, session)

        logger.info(
            f"Auction {auction_id}: player {terms.player_id} sold to "
            f"team {terms.team_id} for {terms.amount}"
        )
        return state, terms

    def unsell_player(self, auction_id: RoomKey) -> Optional[Tuple[Snapshot, int]]:
        """Close the round with the player passed.

        The current player and leader stay in place until the next
        start_player or reset_round.

        Returns:
            Tuple of (snapshot, player id), or None when no player is up.
        """
        with self.rooms.locked(auction_id) as session:
            if session.current_player_id is None:
                return None
            session.status = RoomStatus.UNSOLD
            player_id = session.current_player_id
            state = self._publish(auction_id, session)

        logger.info(f"Auction {auction_id}: player {player_id} unsold")
        return state, player_id

    def reset_round(self, auction_id: RoomKey) -> Snapshot:
        """Return the room to the state of a freshly created session."""
        with self.rooms.locked(auction_id) as session:
            session.reset()
            state = self._publish(auction_id, session)

        logger.info(f"Auction {auction_id}: round reset")
        return state


# Singleton instance for use in socket handlers; broadcasts to the room
bidding_engine = BiddingEngine(publish=broadcast_state)
