"""
Team management API endpoints.

Team changes are announced to the auction's room with ``data_update``.
"""

from bidroom.gateway import broadcast_data_update
from bidroom.routes import api_bp
from bidroom.services.base import ValidationError
from bidroom.services.team_service import team_service
from bidroom.utils import get_json_body, parse_id, success_response


@api_bp.route('/teams', methods=['POST'])
def create_team():
    """Create a team in an auction."""
    data = get_json_body()
    auction_id, error = parse_id(data.get('auctionId'), 'auctionId')
    if error:
        raise ValidationError(error)

    team = team_service.create_team(
        auction_id=auction_id,
        name=data.get('name'),
        budget=data.get('budget'),
        color=data.get('color'),
    )
    broadcast_data_update(auction_id)
    return success_response(team=team)


@api_bp.route('/teams/<int:team_id>', methods=['DELETE'])
def delete_team(team_id: int):
    """Delete a team; its players return to the pending pool."""
    auction_id = team_service.delete_team(team_id)
    if auction_id is not None:
        broadcast_data_update(auction_id)
    return success_response(message='Deleted')
