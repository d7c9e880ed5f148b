"""
Team service for managing team operations.

Encapsulates all business logic related to:
- Team creation within an auction
- Team deletion, returning its players to the pending pool
"""

from typing import Any, Optional

from bidroom.constants import DEFAULT_TEAM_COLOR, MAX_NAME_LENGTH
from bidroom.logger import get_logger
from bidroom.repositories.auction_repository import AuctionRepository
from bidroom.repositories.team_repository import TeamRepository
from bidroom.services.base import BaseService, NotFoundError, ValidationError
from bidroom.services.settlement_service import SettlementService, settlement_service
from bidroom.utils import parse_amount

logger = get_logger(__name__)


class TeamService(BaseService):
    """Service for team-related operations."""

    def __init__(
        self,
        team_repo: Optional[TeamRepository] = None,
        auction_repo: Optional[AuctionRepository] = None,
        settlement: Optional[SettlementService] = None
    ):
        self.team_repo = team_repo or TeamRepository()
        self.auction_repo = auction_repo or AuctionRepository()
        self.settlement = settlement or settlement_service

    def create_team(
        self,
        auction_id: int,
        name: str,
        budget: Any,
        color: Optional[str] = None
    ) -> dict:
        """Create a new team in an auction.

        Args:
            auction_id: ID of the auction.
            name: Team name.
            budget: Budget ceiling.
            color: Display colour (defaults to black).

        Returns:
            The created team as a dict.

        Raises:
            ValidationError: If validation fails.
            NotFoundError: If auction not found.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Team name is required")
        if len(name.strip()) > MAX_NAME_LENGTH:
            raise ValidationError(f"Team name must be {MAX_NAME_LENGTH} characters or less")

        budget, error = parse_amount(budget, 'budget')
        if error:
            raise ValidationError(error)

        with self.transaction():
            if not self.auction_repo.get(auction_id):
                raise NotFoundError("Auction not found")

            team = self.team_repo.create(
                auction_id=auction_id,
                name=name.strip(),
                budget=budget,
                color=color or DEFAULT_TEAM_COLOR,
            )
            self.flush()

            logger.info(f"Created team: {team.name} (ID: {team.id})")

            return team.to_dict()

    def delete_team(self, team_id: int) -> Optional[int]:
        """Delete a team and release every player sold to it.

        Released players return to the pending pool; no player record is
        deleted.

        Returns:
            The auction id the team belonged to, or None if the team did
            not exist.
        """
        with self.transaction(f"delete team {team_id}"):
            team = self.team_repo.get(team_id)
            if not team:
                return None

            auction_id = team.auction_id
            team_name = team.name
            released = self.settlement.reverse_team(team_id)
            self.team_repo.delete(team)

            logger.info(f"Deleted team: {team_name} ({released} players released)")

        return auction_id


# Singleton instance for use in routes
team_service = TeamService()
