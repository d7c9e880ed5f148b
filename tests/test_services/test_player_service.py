"""
Tests for the PlayerService.
"""

import pytest

from bidroom import db
from bidroom.models import Player, Team
from bidroom.services.base import NotFoundError, ValidationError
from bidroom.services.player_service import PlayerService
from bidroom.services.settlement_service import SettlementService


class TestPlayerService:
    """Test suite for PlayerService."""

    @pytest.fixture
    def service(self):
        return PlayerService()

    @pytest.fixture
    def settlement(self, monkeypatch):
        monkeypatch.setattr(
            'bidroom.services.settlement_service.broadcast_data_update', lambda auction_id: None
        )
        return SettlementService()

    def test_create_player_assigns_order_by_count(self, app, service, sample_auction):
        first = service.create_player(sample_auction.id, 'Opener', role='Batsman', base_price=500)
        second = service.create_player(sample_auction.id, 'Spinner', role='Bowler', category='Set 2')

        assert first['order'] == 0
        assert second['order'] == 1
        assert second['category'] == 'Set 2'
        assert second['basePrice'] == 0
        assert second['isSold'] is False
        assert second['isUnsold'] is False
        assert second['soldTo'] is None
        assert second['state'] == 'pending'

    def test_create_player_order_after_existing(self, app, service, sample_auction, sample_players):
        player = service.create_player(sample_auction.id, 'Late Entry')
        assert player['order'] == 3

    @pytest.mark.parametrize('name, base_price', [('', 0), (None, 0), ('Ok', -10), ('Ok', 'abc')])
    def test_create_player_validation(self, app, service, sample_auction, name, base_price):
        with pytest.raises(ValidationError):
            service.create_player(sample_auction.id, name, base_price=base_price)

    def test_create_player_unknown_auction(self, app, service):
        with pytest.raises(NotFoundError):
            service.create_player(404, 'Nobody')

    def test_delete_sold_player_refunds_team(
        self, app, service, settlement, sample_auction, sample_teams, sample_players
    ):
        team_id = sample_teams[0].id
        sold_id = sample_players[0].id
        kept_id = sample_players[1].id
        settlement.commit_sale(sample_auction.id, sold_id, team_id, 1500)
        settlement.commit_sale(sample_auction.id, kept_id, team_id, 1000)

        assert service.delete_player(sold_id) == sample_auction.id

        db.session.expire_all()
        team = db.session.get(Team, team_id)
        assert db.session.get(Player, sold_id) is None
        assert team.spent == 1000
        assert [p.id for p in team.players] == [kept_id]

    def test_delete_pending_player(self, app, service, sample_auction, sample_teams, sample_players):
        player_id = sample_players[2].id

        assert service.delete_player(player_id) == sample_auction.id

        db.session.expire_all()
        assert db.session.get(Player, player_id) is None
        assert db.session.get(Team, sample_teams[0].id).spent == 0

    def test_delete_unknown_player(self, app, service):
        assert service.delete_player(404) is None
