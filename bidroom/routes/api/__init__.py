"""
API routes package for the auction room server.

Contains all HTTP endpoints organized by resource.
"""

# Import submodules to register routes
from bidroom.routes.api import auctions, players, teams

__all__ = ['auctions', 'players', 'teams']
