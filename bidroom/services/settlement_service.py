"""
Settlement service: the only writer of durable sale fields.

Encapsulates:
- Committing a sale (player marked sold, team charged and credited)
- Committing a pass (player marked unsold)
- Reversing a sale when a player is deleted
- Releasing a deleted team's players back to the pending pool

A sale is two independent writes, one per record, each in its own
transaction. Both are always attempted; ``data_update`` is broadcast only
when both succeed. A crash or failure between them leaves the player and
team out of step. Failures are logged and never retried, and the live room
state that was already broadcast is not rolled back.
"""

from typing import Callable, Optional, Union

from bidroom.gateway import broadcast_data_update
from bidroom.logger import get_logger, log_audit
from bidroom.repositories.player_repository import PlayerRepository
from bidroom.repositories.team_repository import TeamRepository
from bidroom.rooms import RoomKey
from bidroom.services.base import BaseService, NotFoundError, ServiceError

logger = get_logger(__name__)

Amount = Union[int, float]


class SettlementService(BaseService):
    """Service translating sell/unsell transitions into durable writes."""

    def __init__(
        self,
        player_repo: Optional[PlayerRepository] = None,
        team_repo: Optional[TeamRepository] = None
    ):
        """Initialize service with optional repository injection.

        Args:
            player_repo: PlayerRepository instance (defaults to new instance).
            team_repo: TeamRepository instance (defaults to new instance).
        """
        self.player_repo = player_repo or PlayerRepository()
        self.team_repo = team_repo or TeamRepository()

    def _write(self, description: str, write: Callable[[], None]) -> bool:
        """Apply one durable write in its own transaction.

        Returns:
            True if the write committed.
        """
        try:
            with self.transaction(description):
                write()
            return True
        except ServiceError as e:
            logger.error(f"Settlement write failed ({description}): {e.message}", exc_info=True)
            return False

    def commit_sale(
        self,
        auction_id: RoomKey,
        player_id: int,
        team_id: int,
        amount: Amount
    ) -> bool:
        """Persist a sale and notify the room once both records are written.

        Args:
            auction_id: Room to notify.
            player_id: ID of the player sold.
            team_id: ID of the buying team.
            amount: Final price.

        Returns:
            True if both writes committed.
        """
        def mark_player():
            if not self.player_repo.mark_sold(player_id, team_id, amount):
                raise NotFoundError(f"Player {player_id} not found")

        def charge_team():
            if not self.team_repo.increment_spent(team_id, amount):
                raise NotFoundError(f"Team {team_id} not found")
            self.team_repo.add_player(team_id, player_id)

        player_ok = self._write(f"mark player {player_id} sold", mark_player)
        team_ok = self._write(f"charge team {team_id}", charge_team)

        if not (player_ok and team_ok):
            logger.error(
                f"Sale of player {player_id} to team {team_id} in auction "
                f"{auction_id} is not fully persisted (player={player_ok}, team={team_ok})"
            )
            return False

        log_audit('player_sold', 'player', player_id, {
            'auction_id': str(auction_id),
            'team_id': team_id,
            'amount': amount,
        })
        broadcast_data_update(auction_id)
        return True

    def commit_unsell(self, auction_id: RoomKey, player_id: int) -> bool:
        """Persist a pass and notify the room.

        Returns:
            True if the write committed.
        """
        def mark_player():
            if not self.player_repo.mark_unsold(player_id):
                raise NotFoundError(f"Player {player_id} not found")

        if not self._write(f"mark player {player_id} unsold", mark_player):
            return False

        log_audit('player_unsold', 'player', player_id, {'auction_id': str(auction_id)})
        broadcast_data_update(auction_id)
        return True

    def reverse_sale(self, player_id: int) -> bool:
        """Refund the owning team of a sold player that is being deleted.

        Pulls the player from the team's owned set and takes its sold
        price off the team's spent total. Runs inside the caller's
        transaction.

        Returns:
            True if a sale was reversed.
        """
        player = self.player_repo.get_for_update(player_id)
        if not player:
            raise NotFoundError("Player not found")
        if not (player.is_sold and player.sold_to):
            return False

        team_id = player.sold_to
        self.team_repo.remove_player(team_id, player.id)
        self.team_repo.increment_spent(team_id, -player.sold_price)

        log_audit('sale_reversed', 'player', player.id, {
            'team_id': team_id,
            'refund': player.sold_price,
        })
        return True

    def reverse_team(self, team_id: int) -> int:
        """Return every player sold to a team to the pending pool.

        Players keep their records; only their sale fields are cleared.
        Runs inside the caller's transaction.

        Returns:
            Number of players released.
        """
        released = self.player_repo.release_from_team(team_id)
        if released:
            log_audit('team_players_released', 'team', team_id, {'released': released})
        return released


# Singleton instance for use in socket handlers and services
settlement_service = SettlementService()
