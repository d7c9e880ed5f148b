"""
Centralized constants and default values for the auction room server.
"""

from typing import Final

# ==================== RECORD SCHEMA ====================
SCHEMA_VERSION: Final[int] = 2

DEFAULT_CATEGORIES: Final[list] = ['Marquee', 'Set 1', 'Set 2', 'Set 3', 'Set 4']
DEFAULT_ROLES: Final[list] = ['Batsman', 'Bowler', 'All Rounder', 'Wicket Keeper']
DEFAULT_TEAM_COLOR: Final[str] = '#000000'

# ==================== LIMITS ====================
MAX_NAME_LENGTH: Final[int] = 100
MAX_ACCESS_CODE_LENGTH: Final[int] = 128

# ==================== SOCKET EVENTS ====================
# Outbound
EVENT_AUCTION_STATE: Final[str] = 'auction_state'
EVENT_DATA_UPDATE: Final[str] = 'data_update'
EVENT_ACTION_REJECTED: Final[str] = 'action_rejected'
