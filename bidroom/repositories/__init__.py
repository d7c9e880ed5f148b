"""
Repository layer for data access.

This module provides repository classes that abstract database operations,
providing a clean interface for data access separate from business logic.
"""

from bidroom.repositories.base import BaseRepository
from bidroom.repositories.auction_repository import AuctionRepository
from bidroom.repositories.player_repository import PlayerRepository
from bidroom.repositories.team_repository import TeamRepository

__all__ = [
    'BaseRepository',
    'AuctionRepository',
    'PlayerRepository',
    'TeamRepository',
]
