"""
Player service for managing player operations.

Encapsulates all business logic related to:
- Player creation with a stable display order
- Player deletion, refunding the owning team of a sold player
"""

from typing import Any, Optional

from bidroom.constants import MAX_NAME_LENGTH
from bidroom.logger import get_logger
from bidroom.repositories.auction_repository import AuctionRepository
from bidroom.repositories.player_repository import PlayerRepository
from bidroom.services.base import BaseService, NotFoundError, ValidationError
from bidroom.services.settlement_service import SettlementService, settlement_service
from bidroom.utils import parse_amount

logger = get_logger(__name__)


class PlayerService(BaseService):
    """Service for player-related operations."""

    def __init__(
        self,
        player_repo: Optional[PlayerRepository] = None,
        auction_repo: Optional[AuctionRepository] = None,
        settlement: Optional[SettlementService] = None
    ):
        self.player_repo = player_repo or PlayerRepository()
        self.auction_repo = auction_repo or AuctionRepository()
        self.settlement = settlement or settlement_service

    def create_player(
        self,
        auction_id: int,
        name: str,
        role: str = '',
        category: str = '',
        base_price: Any = 0
    ) -> dict:
        """Create a new player at the end of the auction's running order.

        Args:
            auction_id: ID of the auction.
            name: Player's name.
            role: Playing role (e.g. 'Batsman').
            category: Auction set (e.g. 'Marquee').
            base_price: Opening price.

        Returns:
            The created player as a dict.

        Raises:
            ValidationError: If validation fails.
            NotFoundError: If auction not found.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Player name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(f"Player name must be {MAX_NAME_LENGTH} characters or less")

        base_price, error = parse_amount(base_price, 'basePrice')
        if error:
            raise ValidationError(error)

        with self.transaction():
            if not self.auction_repo.get(auction_id):
                raise NotFoundError("Auction not found")

            order = self.player_repo.count_for_auction(auction_id)
            player = self.player_repo.create(
                auction_id=auction_id,
                name=name.strip(),
                role=role or '',
                category=category or '',
                base_price=base_price,
                order=order,
            )
            self.flush()

            logger.info(f"Created player: {player.name} (ID: {player.id}, order {order})")

            return player.to_dict()

    def delete_player(self, player_id: int) -> Optional[int]:
        """Delete a player, refunding its team first if it was sold.

        Returns:
            The auction id the player belonged to, or None if the player
            did not exist.
        """
        with self.transaction(f"delete player {player_id}"):
            player = self.player_repo.get(player_id)
            if not player:
                return None

            auction_id = player.auction_id
            player_name = player.name
            self.settlement.reverse_sale(player_id)
            self.player_repo.delete(player)

            logger.info(f"Deleted player: {player_name}")

        return auction_id


# Singleton instance for use in routes
player_service = PlayerService()
