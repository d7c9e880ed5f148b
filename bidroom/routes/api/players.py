"""
Player management API endpoints.

Player changes are announced to the auction's room with ``data_update``.
"""

from bidroom.gateway import broadcast_data_update
from bidroom.routes import api_bp
from bidroom.services.base import ValidationError
from bidroom.services.player_service import player_service
from bidroom.utils import get_json_body, parse_id, success_response


@api_bp.route('/players', methods=['POST'])
def create_player():
    """Add a player to the end of an auction's running order."""
    data = get_json_body()
    auction_id, error = parse_id(data.get('auctionId'), 'auctionId')
    if error:
        raise ValidationError(error)

    player = player_service.create_player(
        auction_id=auction_id,
        name=data.get('name'),
        role=data.get('role') or '',
        category=data.get('category') or '',
        base_price=data.get('basePrice', 0),
    )
    broadcast_data_update(auction_id)
    return success_response(player=player)


@api_bp.route('/players/<int:player_id>', methods=['DELETE'])
def delete_player(player_id: int):
    """Delete a player, refunding its team if it was sold."""
    auction_id = player_service.delete_player(player_id)
    if auction_id is not None:
        broadcast_data_update(auction_id)
    return success_response(message='Deleted')
