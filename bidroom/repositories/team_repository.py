"""
Team repository for team data access.

Besides queries, exposes the atomic counter and owned-set updates that
settlement relies on.
"""

from typing import List, Union

from sqlalchemy import delete, insert, select, update

from bidroom import db
from bidroom.models import Team, team_players
from bidroom.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Repository for team data access operations."""

    def __init__(self):
        super().__init__(Team)

    def get_by_auction(self, auction_id: int) -> List[Team]:
        """Get all teams for an auction with their players loaded.

        Args:
            auction_id: ID of the auction.

        Returns:
            List of Team instances ordered by creation.
        """
        return db.session.execute(
            select(Team)
            .where(Team.auction_id == auction_id)
            .order_by(Team.id)
        ).scalars().all()

    def increment_spent(self, team_id: int, amount: Union[int, float]) -> int:
        """Atomically add to a team's spent total (negative to refund).

        Returns:
            Number of rows updated.
        """
        result = db.session.execute(
            update(Team)
            .where(Team.id == team_id)
            .values(spent=Team.spent + amount)
        )
        return result.rowcount

    def has_player(self, team_id: int, player_id: int) -> bool:
        return db.session.execute(
            select(team_players.c.player_id).where(
                team_players.c.team_id == team_id,
                team_players.c.player_id == player_id
            )
        ).first() is not None

    def add_player(self, team_id: int, player_id: int) -> None:
        """Add a player to a team's owned set. Adding twice is a no-op."""
        if self.has_player(team_id, player_id):
            return
        db.session.execute(
            insert(team_players).values(team_id=team_id, player_id=player_id)
        )

    def remove_player(self, team_id: int, player_id: int) -> int:
        """Remove a player from a team's owned set.

        Returns:
            Number of rows removed.
        """
        result = db.session.execute(
            delete(team_players).where(
                team_players.c.team_id == team_id,
                team_players.c.player_id == player_id
            )
        )
        return result.rowcount

