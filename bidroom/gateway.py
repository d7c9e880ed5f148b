"""
Broadcast gateway: room-scoped emits over Flask-SocketIO.

Each auction id is a Socket.IO room. Live state goes out as
``auction_state``; ``data_update`` tells viewers to reload durable records.
"""

from typing import Any, Callable, Dict

from flask import current_app

from bidroom import socketio
from bidroom.constants import EVENT_AUCTION_STATE, EVENT_DATA_UPDATE
from bidroom.logger import get_logger
from bidroom.rooms import RoomKey, room_key

logger = get_logger(__name__)


def broadcast_state(auction_id: RoomKey, state: Dict[str, Any]) -> None:
    """Send a full session snapshot to everyone in the room."""
    socketio.emit(EVENT_AUCTION_STATE, state, to=room_key(auction_id))


def broadcast_data_update(auction_id: RoomKey) -> None:
    """Signal the room that durable records changed."""
    socketio.emit(EVENT_DATA_UPDATE, to=room_key(auction_id))


def run_settlement(task: Callable[..., Any], *args: Any) -> None:
    """Run a settlement write off the event handler.

    With SETTLEMENT_ASYNC disabled the task runs inline, which keeps tests
    deterministic. Either way the caller has already broadcast the state.
    """
    app = current_app._get_current_object()

    if not app.config.get('SETTLEMENT_ASYNC', True):
        task(*args)
        return

    def _run() -> None:
        with app.app_context():
            try:
                task(*args)
            except Exception as e:
                logger.error(f"Settlement task {task.__name__} crashed: {e}", exc_info=True)

    socketio.start_background_task(_run)
