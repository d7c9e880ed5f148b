"""
Auction API endpoints.

Handles auction creation, listing, room bootstrap, access-code checks and
the super-admin update/delete operations.
"""

from flask import current_app, jsonify

from bidroom.auth import verify_super_admin
from bidroom.extensions import limiter
from bidroom.logger import get_logger
from bidroom.routes import api_bp
from bidroom.services.auction_service import auction_service
from bidroom.services.base import AuthorizationError, ValidationError
from bidroom.utils import get_json_body, parse_id, success_response, validate_required_fields

logger = get_logger(__name__)


def _login_limit() -> str:
    return current_app.config['LOGIN_RATE_LIMIT']


@api_bp.route('/create-auction', methods=['POST'])
def create_auction():
    """Create an auction room."""
    data = get_json_body()
    error = validate_required_fields(data, ['name', 'accessCode'])
    if error:
        raise ValidationError(error)

    auction = auction_service.create_auction(
        name=data['name'],
        access_code=data['accessCode'],
        categories=data.get('categories'),
        roles=data.get('roles'),
    )
    return success_response(auction=auction)


@api_bp.route('/auctions', methods=['GET'])
def list_auctions():
    """List all auctions, newest first."""
    return jsonify(auction_service.list_auctions())


@api_bp.route('/init/<int:auction_id>', methods=['GET'])
def init_auction(auction_id: int):
    """Load teams, players, live state and labels for a room."""
    return jsonify(auction_service.get_init_data(auction_id))


@api_bp.route('/verify-admin', methods=['POST'])
@limiter.limit(_login_limit)
def verify_admin():
    """Check a room's access code."""
    data = get_json_body()
    auction_id, error = parse_id(data.get('auctionId'), 'auctionId')
    if error:
        raise ValidationError(error)

    auction_service.verify_access_code(auction_id, data.get('password') or '')
    return success_response()


@api_bp.route('/super-admin/login', methods=['POST'])
@limiter.limit(_login_limit)
def super_admin_login():
    """Check the super-admin password."""
    data = get_json_body()
    if not verify_super_admin(data.get('password') or ''):
        logger.warning("Rejected super admin login")
        raise AuthorizationError("Invalid password")
    return success_response()


@api_bp.route('/auctions/<int:auction_id>', methods=['DELETE'])
def delete_auction(auction_id: int):
    """Delete an auction with its teams and players, and close its room."""
    return success_response(auction_service.delete_auction(auction_id))


@api_bp.route('/auctions/<int:auction_id>', methods=['PUT'])
def update_auction(auction_id: int):
    """Update an auction's settings."""
    auction = auction_service.update_auction(auction_id, get_json_body())
    return success_response(auction=auction)
