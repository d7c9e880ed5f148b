"""
Tests for the in-memory room state table.
"""

import threading

from bidroom.dataclasses import BidSnapshot, RoomSession
from bidroom.enums import RoomStatus
from bidroom.rooms import RoomStateTable, room_key


class TestRoomStateTable:
    """Tests for creation, lookup and eviction of room sessions."""

    def test_get_or_create_returns_fresh_session(self):
        table = RoomStateTable()
        session = table.get_or_create('a1')

        assert session.current_bid == 0
        assert session.leading_team_id is None
        assert session.current_player_id is None
        assert session.status == RoomStatus.IDLE
        assert session.bid_history == []

    def test_get_or_create_returns_same_session(self):
        table = RoomStateTable()
        first = table.get_or_create('a1')
        first.current_bid = 500

        assert table.get_or_create('a1') is first
        assert table.get_or_create('a1').current_bid == 500

    def test_int_and_str_ids_share_a_room(self):
        table = RoomStateTable()
        assert table.get_or_create(7) is table.get_or_create('7')
        assert room_key(' 7 ') == '7'

    def test_rooms_are_independent(self):
        table = RoomStateTable()
        table.get_or_create('a1').current_bid = 900

        assert table.get_or_create('a2').current_bid == 0
        assert len(table) == 2

    def test_get_does_not_create(self):
        table = RoomStateTable()
        assert table.get('missing') is None
        assert 'missing' not in table

    def test_remove_then_recreate_starts_fresh(self):
        table = RoomStateTable()
        session = table.get_or_create('a1')
        session.current_bid = 1500
        session.status = RoomStatus.ACTIVE

        assert table.remove('a1') is True
        assert 'a1' not in table

        fresh = table.get_or_create('a1')
        assert fresh is not session
        assert fresh == RoomSession()

    def test_remove_unknown_room(self):
        table = RoomStateTable()
        assert table.remove('nope') is False

    def test_concurrent_get_or_create_installs_one_session(self):
        table = RoomStateTable()
        seen = []
        barrier = threading.Barrier(8)

        def worker():
            barrier.wait()
            seen.append(table.get_or_create('shared'))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len({id(s) for s in seen}) == 1

    def test_locked_yields_session_with_lock_held(self):
        table = RoomStateTable()
        with table.locked('a1') as session:
            assert session.lock.locked()
        assert not session.lock.locked()


class TestRoomSession:
    """Tests for the session record itself."""

    def test_reset_matches_fresh_session(self):
        session = RoomSession(
            current_bid=3000,
            leading_team_id=2,
            current_player_id=9,
            status=RoomStatus.PAUSED,
            bid_history=[BidSnapshot(bid=1000, leader=None)],
        )
        session.reset()
        assert session == RoomSession()

    def test_to_dict_uses_wire_keys(self):
        session = RoomSession(
            current_bid=1500,
            leading_team_id=2,
            current_player_id=9,
            status=RoomStatus.ACTIVE,
            bid_history=[BidSnapshot(bid=1000, leader=None)],
        )
        assert session.to_dict() == {
            'currentBid': 1500,
            'leadingTeamId': 2,
            'currentPlayerId': 9,
            'status': 'ACTIVE',
            'bidHistory': [{'bid': 1000, 'leader': None}],
        }
