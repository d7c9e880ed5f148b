"""
Auction repository for auction data access.

Provides listing and the cascade delete of an auction's teams and players.
"""

from typing import List

from sqlalchemy import delete, or_, select

from bidroom import db
from bidroom.models import Auction, Player, Team, team_players
from bidroom.repositories.base import BaseRepository


class AuctionRepository(BaseRepository[Auction]):
    """Repository for auction data access operations."""

    def __init__(self):
        super().__init__(Auction)

    def get_newest_first(self) -> List[Auction]:
        """Get all auctions, most recent date first."""
        return db.session.execute(
            select(Auction).order_by(Auction.date.desc(), Auction.id.desc())
        ).scalars().all()

    def delete_cascade(self, auction_id: int) -> int:
        """Delete an auction together with its teams and players.

        Rows go child-first: owned-set links, then players (whose sold_to
        references a team), then teams, then the auction.

        Args:
            auction_id: ID of the auction.

        Returns:
            Number of auction rows deleted (0 or 1).
        """
        team_ids = select(Team.id).where(Team.auction_id == auction_id)
        player_ids = select(Player.id).where(Player.auction_id == auction_id)
        db.session.execute(
            delete(team_players).where(or_(
                team_players.c.team_id.in_(team_ids),
                team_players.c.player_id.in_(player_ids),
            ))
        )
        db.session.execute(
            delete(Player).where(Player.auction_id == auction_id)
        )
        db.session.execute(
            delete(Team).where(Team.auction_id == auction_id)
        )
        result = db.session.execute(
            delete(Auction).where(Auction.id == auction_id)
        )
        return result.rowcount
