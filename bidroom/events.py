"""
Socket.IO event handlers for live auction rooms.

Every inbound event carries an ``auctionId``; the auction id is also the
Socket.IO room. The bidding engine broadcasts each accepted transition to
the whole room as ``auction_state`` while it holds the room lock; sell and
unsell settlement starts only afterwards. Rejected events are
acknowledged to the sender alone with ``action_rejected``; no-ops emit
nothing.
"""

from functools import wraps
from typing import Any, Callable, Dict, Optional

from flask_socketio import emit, join_room

from bidroom import socketio
from bidroom.constants import EVENT_ACTION_REJECTED, EVENT_AUCTION_STATE
from bidroom.gateway import run_settlement
from bidroom.logger import get_logger
from bidroom.rooms import room_key
from bidroom.services.base import ServiceError
from bidroom.services.bidding_service import bidding_engine
from bidroom.services.settlement_service import settlement_service

logger = get_logger(__name__)

RoomHandler = Callable[[str, Dict[str, Any]], None]


def _reject(event: str, auction_id: Optional[str], error: str) -> None:
    """Tell the originating connection its event was dropped."""
    logger.warning(f"Rejected {event} for auction {auction_id}: {error}")
    emit(EVENT_ACTION_REJECTED, {
        'event': event,
        'auctionId': auction_id,
        'error': error,
    })


def room_event(event: str) -> Callable[[RoomHandler], RoomHandler]:
    """
    Register a handler for a room-scoped socket event.

    The handler receives the normalized room key and the payload dict.
    Payloads without an auctionId and ServiceErrors raised by the handler
    are answered with ``action_rejected``.
    """
    def decorator(f: RoomHandler) -> RoomHandler:
        @wraps(f)
        def handler(payload: Any = None) -> None:
            data = payload if isinstance(payload, dict) else {}
            auction_id = data.get('auctionId')
            if auction_id is None or str(auction_id).strip() == '':
                _reject(event, None, 'auctionId is required')
                return

            key = room_key(auction_id)
            try:
                f(key, data)
            except ServiceError as e:
                _reject(event, key, e.message)

        socketio.on(event)(handler)
        return handler
    return decorator


@socketio.on('join_auction')
def handle_join_auction(payload: Any = None) -> None:
    """Subscribe the sender to a room and send it the current state.

    Accepts either the bare auction id or ``{'auctionId': ...}``. The room
    lock is held across the join and the reply, so no broadcast can land
    between them out of order.
    """
    auction_id = payload.get('auctionId') if isinstance(payload, dict) else payload
    if auction_id is None or str(auction_id).strip() == '':
        _reject('join_auction', None, 'auctionId is required')
        return

    key = room_key(auction_id)
    with bidding_engine.rooms.locked(key) as session:
        join_room(key)
        emit(EVENT_AUCTION_STATE, session.to_dict())
    logger.info(f"Client joined auction {key}")


@room_event('start_player')
def handle_start_player(auction_id: str, data: Dict[str, Any]) -> None:
    bidding_engine.start_player(auction_id, data.get('playerId'), data.get('basePrice'))


@room_event('place_bid')
def handle_place_bid(auction_id: str, data: Dict[str, Any]) -> None:
    bidding_engine.place_bid(auction_id, data.get('teamId'), data.get('amount'))


@room_event('undo_bid')
def handle_undo_bid(auction_id: str, data: Dict[str, Any]) -> None:
    bidding_engine.undo_bid(auction_id)


@room_event('toggle_pause')
def handle_toggle_pause(auction_id: str, data: Dict[str, Any]) -> None:
    bidding_engine.toggle_pause(auction_id)


@room_event('sell_player')
def handle_sell_player(auction_id: str, data: Dict[str, Any]) -> None:
    result = bidding_engine.sell_player(auction_id)
    if result is None:
        return

    _, terms = result
    run_settlement(
        settlement_service.commit_sale,
        auction_id, terms.player_id, terms.team_id, terms.amount
    )


@room_event('unsell_player')
def handle_unsell_player(auction_id: str, data: Dict[str, Any]) -> None:
    result = bidding_engine.unsell_player(auction_id)
    if result is None:
        return

    _, player_id = result
    run_settlement(settlement_service.commit_unsell, auction_id, player_id)


@room_event('reset_round')
def handle_reset_round(auction_id: str, data: Dict[str, Any]) -> None:
    bidding_engine.reset_round(auction_id)
