"""
Tests for the SettlementService.

Tests the durable writes behind sell, unsell and the deletion reversals.
"""

import pytest

from bidroom import db
from bidroom.models import Player, Team
from bidroom.services import settlement_service as settlement_module
from bidroom.services.settlement_service import SettlementService


class TestSettlementService:
    """Test suite for SettlementService."""

    @pytest.fixture
    def service(self):
        """Create settlement service instance."""
        return SettlementService()

    @pytest.fixture
    def data_updates(self, monkeypatch):
        """Record data_update broadcasts instead of emitting them."""
        calls = []
        monkeypatch.setattr(
            settlement_module, 'broadcast_data_update', lambda auction_id: calls.append(auction_id)
        )
        return calls

    def test_commit_sale_updates_player_and_team(
        self, app, service, data_updates, sample_auction, sample_teams, sample_players
    ):
        player_id = sample_players[0].id
        team_id = sample_teams[0].id

        assert service.commit_sale(str(sample_auction.id), player_id, team_id, 1000) is True

        db.session.expire_all()
        player = db.session.get(Player, player_id)
        team = db.session.get(Team, team_id)

        assert player.is_sold is True
        assert player.is_unsold is False
        assert player.sold_to == team_id
        assert player.sold_price == 1000
        assert team.spent == 1000
        assert [p.id for p in team.players] == [player_id]
        assert data_updates == [str(sample_auction.id)]

    def test_commit_sale_clears_previous_unsold_flag(
        self, app, service, data_updates, sample_auction, sample_teams, sample_players
    ):
        player_id = sample_players[0].id
        service.commit_unsell(sample_auction.id, player_id)
        service.commit_sale(sample_auction.id, player_id, sample_teams[0].id, 1200)

        db.session.expire_all()
        player = db.session.get(Player, player_id)
        assert player.is_sold is True
        assert player.is_unsold is False

    def test_commit_sale_accumulates_spent(
        self, app, service, data_updates, sample_auction, sample_teams, sample_players
    ):
        team_id = sample_teams[1].id
        service.commit_sale(sample_auction.id, sample_players[0].id, team_id, 1000)
        service.commit_sale(sample_auction.id, sample_players[1].id, team_id, 2500)

        db.session.expire_all()
        team = db.session.get(Team, team_id)
        assert team.spent == 3500
        assert sorted(p.id for p in team.players) == sorted(
            [sample_players[0].id, sample_players[1].id]
        )

    def test_commit_sale_with_failed_team_write_is_partial(
        self, app, service, data_updates, monkeypatch, sample_auction, sample_teams, sample_players
    ):
        """The player write lands even though the team write fails."""
        player_id = sample_players[0].id
        team_id = sample_teams[0].id
        monkeypatch.setattr(service.team_repo, 'increment_spent', lambda team_id, amount: 0)

        assert service.commit_sale(sample_auction.id, player_id, team_id, 1000) is False

        db.session.expire_all()
        player = db.session.get(Player, player_id)
        assert player.is_sold is True
        assert player.sold_to == team_id
        assert db.session.get(Team, team_id).spent == 0
        assert data_updates == []

    def test_commit_sale_with_missing_team_writes_nothing(
        self, app, service, data_updates, sample_auction, sample_players
    ):
        player_id = sample_players[0].id

        assert service.commit_sale(sample_auction.id, player_id, 9999, 1000) is False

        db.session.expire_all()
        player = db.session.get(Player, player_id)
        assert player.is_sold is False
        assert player.sold_to is None
        assert data_updates == []

    def test_commit_sale_with_missing_player_rolls_back_team_write(
        self, app, service, data_updates, sample_auction, sample_teams
    ):
        team_id = sample_teams[0].id

        assert service.commit_sale(sample_auction.id, 9999, team_id, 700) is False

        db.session.expire_all()
        team = db.session.get(Team, team_id)
        assert team.spent == 0
        assert team.players == []
        assert data_updates == []

    def test_commit_unsell_marks_player(
        self, app, service, data_updates, sample_auction, sample_players
    ):
        player_id = sample_players[2].id

        assert service.commit_unsell(sample_auction.id, player_id) is True

        db.session.expire_all()
        player = db.session.get(Player, player_id)
        assert player.is_unsold is True
        assert player.is_sold is False
        assert player.state.value == 'unsold'
        assert data_updates == [sample_auction.id]

    def test_commit_unsell_missing_player(self, app, service, data_updates, sample_auction):
        assert service.commit_unsell(sample_auction.id, 9999) is False
        assert data_updates == []

    def test_reverse_sale_refunds_team(
        self, app, service, data_updates, sample_auction, sample_teams, sample_players
    ):
        player_id = sample_players[0].id
        team_id = sample_teams[0].id
        service.commit_sale(sample_auction.id, player_id, team_id, 1500)
        service.commit_sale(sample_auction.id, sample_players[1].id, team_id, 500)

        with service.transaction():
            assert service.reverse_sale(player_id) is True

        db.session.expire_all()
        team = db.session.get(Team, team_id)
        assert team.spent == 500
        assert [p.id for p in team.players] == [sample_players[1].id]

    def test_reverse_sale_of_pending_player_is_noop(
        self, app, service, sample_teams, sample_players
    ):
        with service.transaction():
            assert service.reverse_sale(sample_players[0].id) is False

        db.session.expire_all()
        assert db.session.get(Team, sample_teams[0].id).spent == 0

    def test_reverse_team_releases_players(
        self, app, service, data_updates, sample_auction, sample_teams, sample_players
    ):
        team_id = sample_teams[0].id
        service.commit_sale(sample_auction.id, sample_players[0].id, team_id, 1000)
        service.commit_sale(sample_auction.id, sample_players[1].id, team_id, 2000)
        service.commit_sale(sample_auction.id, sample_players[2].id, sample_teams[1].id, 3000)

        with service.transaction():
            assert service.reverse_team(team_id) == 2

        db.session.expire_all()
        for player in sample_players[:2]:
            player = db.session.get(Player, player.id)
            assert player.is_sold is False
            assert player.sold_to is None
            assert player.sold_price == 0

        other = db.session.get(Player, sample_players[2].id)
        assert other.is_sold is True
        assert other.sold_to == sample_teams[1].id
