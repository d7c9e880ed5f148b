"""
Player repository for player data access.

Sale fields are only written through the mark_* and release methods here,
which settlement calls.
"""

from typing import List, Union

from sqlalchemy import select, update

from bidroom import db
from bidroom.models import Player
from bidroom.repositories.base import BaseRepository


class PlayerRepository(BaseRepository[Player]):
    """Repository for player data access operations."""

    def __init__(self):
        super().__init__(Player)

    def get_by_auction(self, auction_id: int) -> List[Player]:
        """Get all players for an auction in display order.

        Args:
            auction_id: ID of the auction.

        Returns:
            List of Player instances sorted by order.
        """
        return db.session.execute(
            select(Player)
            .where(Player.auction_id == auction_id)
            .order_by(Player.order, Player.id)
        ).scalars().all()

    def count_for_auction(self, auction_id: int) -> int:
        return self.count(auction_id=auction_id)

    def mark_sold(self, player_id: int, team_id: int, amount: Union[int, float]) -> int:
        """Record a sale on the player row.

        Returns:
            Number of rows updated.
        """
        result = db.session.execute(
            update(Player)
            .where(Player.id == player_id)
            .values(is_sold=True, is_unsold=False, sold_to=team_id, sold_price=amount)
        )
        return result.rowcount

    def mark_unsold(self, player_id: int) -> int:
        result = db.session.execute(
            update(Player)
            .where(Player.id == player_id)
            .values(is_sold=False, is_unsold=True)
        )
        return result.rowcount

    def release_from_team(self, team_id: int) -> int:
        """Return every player sold to a team to the pending pool.

        Returns:
            Number of players released.
        """
        result = db.session.execute(
            update(Player)
            .where(Player.sold_to == team_id)
            .values(is_sold=False, sold_to=None, sold_price=0)
        )
        return result.rowcount
