"""
Auction service for managing auction rooms.

Encapsulates all business logic related to:
- Auction CRUD and cascade deletion
- Access code verification
- Loading a room's teams, players and live state in one call
"""

from typing import Any, Dict, List, Optional

from bidroom.auth import hash_password, verify_password
from bidroom.constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_ROLES,
    MAX_ACCESS_CODE_LENGTH,
    MAX_NAME_LENGTH,
)
from bidroom.logger import get_logger, log_audit
from bidroom.repositories.auction_repository import AuctionRepository
from bidroom.repositories.player_repository import PlayerRepository
from bidroom.repositories.team_repository import TeamRepository
from bidroom.rooms import RoomStateTable, room_table
from bidroom.services.base import (
    AuthorizationError,
    BaseService,
    NotFoundError,
    ValidationError,
)

logger = get_logger(__name__)


class AuctionService(BaseService):
    """Service for auction-related operations."""

    def __init__(
        self,
        auction_repo: Optional[AuctionRepository] = None,
        team_repo: Optional[TeamRepository] = None,
        player_repo: Optional[PlayerRepository] = None,
        rooms: Optional[RoomStateTable] = None
    ):
        self.auction_repo = auction_repo or AuctionRepository()
        self.team_repo = team_repo or TeamRepository()
        self.player_repo = player_repo or PlayerRepository()
        self.rooms = rooms if rooms is not None else room_table

    def _validate_name(self, name: Any) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Auction name is required")
        name = name.strip()
        if len(name) > MAX_NAME_LENGTH:
            raise ValidationError(f"Auction name must be {MAX_NAME_LENGTH} characters or less")
        return name

    def _validate_access_code(self, access_code: Any) -> str:
        if not isinstance(access_code, str) or not access_code:
            raise ValidationError("Access code is required")
        if len(access_code) > MAX_ACCESS_CODE_LENGTH:
            raise ValidationError(
                f"Access code must be {MAX_ACCESS_CODE_LENGTH} characters or less"
            )
        return access_code

    def _validate_labels(self, values: Any, field_name: str) -> List[str]:
        if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
            raise ValidationError(f"{field_name} must be a list of strings")
        return [v.strip() for v in values if v.strip()]

    def create_auction(
        self,
        name: str,
        access_code: str,
        categories: Optional[List[str]] = None,
        roles: Optional[List[str]] = None
    ) -> dict:
        """Create a new auction room.

        Args:
            name: Display name.
            access_code: Code admins use to unlock the room.
            categories: Player categories (defaults to the standard sets).
            roles: Player roles (defaults to the standard cricket roles).

        Returns:
            The created auction as a dict.

        Raises:
            ValidationError: If validation fails.
        """
        name = self._validate_name(name)
        access_code = self._validate_access_code(access_code)
        categories = (
            self._validate_labels(categories, 'categories')
            if categories is not None else list(DEFAULT_CATEGORIES)
        )
        roles = (
            self._validate_labels(roles, 'roles')
            if roles is not None else list(DEFAULT_ROLES)
        )

        with self.transaction():
            auction = self.auction_repo.create(
                name=name,
                access_code_hash=hash_password(access_code),
                categories=categories,
                roles=roles,
            )
            self.flush()

            logger.info(f"Created auction: {auction.name} (ID: {auction.id})")

            return auction.to_dict()

    def list_auctions(self) -> List[dict]:
        """Get all auctions, newest first."""
        return [a.to_dict() for a in self.auction_repo.get_newest_first()]

    def get_init_data(self, auction_id: int) -> Dict[str, Any]:
        """Load everything a client needs to render a room.

        Returns:
            Dict with teams (players expanded), players in display order,
            the live session and the room's categories and roles.

        Raises:
            NotFoundError: If auction not found.
        """
        auction = self.auction_repo.get(auction_id)
        if not auction:
            raise NotFoundError("Auction not found")

        teams = self.team_repo.get_by_auction(auction_id)
        players = self.player_repo.get_by_auction(auction_id)
        with self.rooms.locked(auction_id) as session:
            live_state = session.to_dict()

        return {
            'teams': [t.to_dict(with_players=True) for t in teams],
            'players': [p.to_dict() for p in players],
            'liveState': live_state,
            'config': {
                'categories': list(auction.categories or []),
                'roles': list(auction.roles or []),
            },
        }

    def verify_access_code(self, auction_id: int, access_code: str) -> bool:
        """Check an admin's access code for a room.

        Raises:
            NotFoundError: If auction not found.
            AuthorizationError: If the code does not match.
        """
        auction = self.auction_repo.get(auction_id)
        if not auction:
            raise NotFoundError("Auction not found")

        if not verify_password(access_code or '', auction.access_code_hash):
            logger.warning(f"Rejected access code for auction {auction_id}")
            raise AuthorizationError("Invalid access code")

        return True

    def update_auction(self, auction_id: int, updates: Dict[str, Any]) -> dict:
        """Update an auction's name, labels, active flag or access code.

        Unknown keys are ignored.

        Returns:
            The updated auction as a dict.

        Raises:
            NotFoundError: If auction not found.
            ValidationError: If validation fails.
        """
        with self.transaction():
            auction = self.auction_repo.get_for_update(auction_id)
            if not auction:
                raise NotFoundError("Auction not found")

            if 'name' in updates:
                auction.name = self._validate_name(updates['name'])
            if 'categories' in updates:
                auction.categories = self._validate_labels(updates['categories'], 'categories')
            if 'roles' in updates:
                auction.roles = self._validate_labels(updates['roles'], 'roles')
            if 'isActive' in updates:
                if not isinstance(updates['isActive'], bool):
                    raise ValidationError("isActive must be a boolean")
                auction.is_active = updates['isActive']
            if 'accessCode' in updates:
                auction.access_code_hash = hash_password(
                    self._validate_access_code(updates['accessCode'])
                )

            logger.info(f"Updated auction: {auction.name}")

            return auction.to_dict()

    def delete_auction(self, auction_id: int) -> dict:
        """Delete an auction with all its teams and players.

        The room's live session is evicted as well.

        Returns:
            Dict with success status.
        """
        with self.transaction(f"delete auction {auction_id}"):
            deleted = self.auction_repo.delete_cascade(auction_id)

        self.rooms.remove(auction_id)

        log_audit('auction_deleted', 'auction', auction_id, {'existed': bool(deleted)})
        return {'success': True, 'message': 'Auction and all data deleted'}


# Singleton instance for use in routes
auction_service = AuctionService()
