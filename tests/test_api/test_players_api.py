"""
Tests for player API endpoints.
"""

from bidroom import db
from bidroom.models import Player, Team
from bidroom.services.settlement_service import settlement_service


class TestPlayerEndpoints:
    """Tests for POST /api/players and DELETE /api/players/<id>."""

    def test_create_player(self, client, sample_auction):
        response = client.post('/api/players', json={
            'auctionId': sample_auction.id,
            'name': 'Opener',
            'role': 'Batsman',
            'category': 'Marquee',
            'basePrice': 2000,
        })

        assert response.status_code == 200
        player = response.get_json()['player']
        assert player['name'] == 'Opener'
        assert player['basePrice'] == 2000
        assert player['order'] == 0
        assert player['isSold'] is False
        assert player['isUnsold'] is False
        assert player['soldTo'] is None

    def test_create_player_appends_to_order(self, client, sample_auction, sample_players):
        response = client.post('/api/players', json={
            'auctionId': sample_auction.id,
            'name': 'Late Entry',
        })
        assert response.get_json()['player']['order'] == 3

    def test_create_player_without_name(self, client, sample_auction):
        response = client.post('/api/players', json={'auctionId': sample_auction.id})
        assert response.status_code == 400

    def test_create_player_negative_price(self, client, sample_auction):
        response = client.post('/api/players', json={
            'auctionId': sample_auction.id,
            'name': 'Opener',
            'basePrice': -1,
        })
        assert response.status_code == 400

    def test_delete_sold_player_refunds_team(
        self, client, sample_auction, sample_teams, sample_players
    ):
        team_id = sample_teams[1].id
        player_id = sample_players[1].id
        settlement_service.commit_sale(sample_auction.id, player_id, team_id, 2500)

        response = client.delete(f'/api/players/{player_id}')

        assert response.status_code == 200
        db.session.expire_all()
        team = db.session.get(Team, team_id)
        assert db.session.get(Player, player_id) is None
        assert team.spent == 0
        assert team.players == []

    def test_delete_missing_player(self, client):
        response = client.delete('/api/players/999')
        assert response.status_code == 200
        assert response.get_json() == {'success': True, 'message': 'Deleted'}
