"""
Pytest fixtures for auction room server tests.

Provides fixtures for app, clients, database, live rooms and sample data.
"""

import pytest

from bidroom import create_app, db, socketio
from bidroom.auth import hash_password
from bidroom.models import Auction, Player, Team
from bidroom.rooms import room_table


@pytest.fixture
def app():
    """Create application for testing with fresh database."""
    app = create_app('testing')

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def clean_rooms():
    """Live rooms are process-wide; start every test with none."""
    room_table.clear()
    yield
    room_table.clear()


@pytest.fixture
def client(app):
    """Test client for making requests."""
    return app.test_client()


@pytest.fixture
def socket_client(app, client):
    """Socket.IO test client sharing the Flask test client's cookies."""
    sc = socketio.test_client(app, flask_test_client=client)
    yield sc
    if sc.is_connected():
        sc.disconnect()


@pytest.fixture
def sample_auction(app):
    """Create a sample auction with access code 'room-code'."""
    auction = Auction(
        name='Test Auction',
        access_code_hash=hash_password('room-code'),
    )
    db.session.add(auction)
    db.session.commit()
    return auction


@pytest.fixture
def sample_teams(app, sample_auction):
    """Create two teams with 10,000 budgets."""
    team_a = Team(auction_id=sample_auction.id, name='Team Alpha', budget=10_000)
    team_b = Team(auction_id=sample_auction.id, name='Team Beta', budget=10_000, color='#ff0000')
    db.session.add_all([team_a, team_b])
    db.session.commit()
    return [team_a, team_b]


@pytest.fixture
def sample_players(app, sample_auction):
    """Create three pending players in running order."""
    players = [
        Player(
            auction_id=sample_auction.id,
            name=f'Player {i}',
            role='Batsman' if i % 2 == 0 else 'Bowler',
            category='Set 1',
            base_price=1000,
            order=i,
        )
        for i in range(3)
    ]
    db.session.add_all(players)
    db.session.commit()
    return players


@pytest.fixture
def drain(socket_client):
    """Return a function that empties the socket queue as (event, payload) pairs."""
    def _drain():
        return [
            (msg['name'], msg['args'][0] if msg['args'] else None)
            for msg in socket_client.get_received()
        ]
    return _drain
