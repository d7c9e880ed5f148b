from datetime import datetime, timezone

from bidroom import db
from bidroom.constants import (
    DEFAULT_CATEGORIES,
    DEFAULT_ROLES,
    DEFAULT_TEAM_COLOR,
    SCHEMA_VERSION,
)
from bidroom.enums import PlayerState


def utc_now():
    """Get current time in UTC"""
    return datetime.now(timezone.utc)


# Players owned by a team; written only by settlement
team_players = db.Table(
    'team_player',
    db.Column('team_id', db.Integer, db.ForeignKey('team.id', ondelete='CASCADE'), primary_key=True),
    db.Column('player_id', db.Integer, db.ForeignKey('player.id', ondelete='CASCADE'), primary_key=True),
)


class Auction(db.Model):
    """An auction room and its configuration"""
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    date = db.Column(db.DateTime, default=utc_now, index=True)
    access_code_hash = db.Column(db.String(128), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    categories = db.Column(db.JSON, default=lambda: list(DEFAULT_CATEGORIES), nullable=False)
    roles = db.Column(db.JSON, default=lambda: list(DEFAULT_ROLES), nullable=False)
    schema_version = db.Column(db.Integer, default=SCHEMA_VERSION, nullable=False)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'date': self.date.isoformat() if self.date else None,
            'isActive': self.is_active,
            'categories': list(self.categories or []),
            'roles': list(self.roles or []),
        }

    def __repr__(self):
        return f'<Auction {self.name}>'


class Team(db.Model):
    """Team competing in an auction"""
    id = db.Column(db.Integer, primary_key=True)
    auction_id = db.Column(db.Integer, db.ForeignKey('auction.id'), nullable=False, index=True)
    name = db.Column(db.String(100), nullable=False)
    budget = db.Column(db.Float, nullable=False)
    spent = db.Column(db.Float, default=0, nullable=False)
    color = db.Column(db.String(20), default=DEFAULT_TEAM_COLOR, nullable=False)
    players = db.relationship('Player', secondary=team_players, lazy='selectin')

    def to_dict(self, with_players: bool = False) -> dict:
        data = {
            'id': self.id,
            'auctionId': self.auction_id,
            'name': self.name,
            'budget': self.budget,
            'spent': self.spent,
            'color': self.color,
        }
        if with_players:
            data['players'] = [p.to_dict() for p in self.players]
        else:
            data['players'] = [p.id for p in self.players]
        return data

    def __repr__(self):
        return f'<Team {self.name}>'


class Player(db.Model):
    """Player put up for bidding"""
    id = db.Column(db.Integer, primary_key=True)
    auction_id = db.Column(db.Integer, db.ForeignKey('auction.id'), nullable=False, index=True)
    name = db.Column(db.String(100))
    role = db.Column(db.String(50))
    category = db.Column(db.String(50))
    base_price = db.Column(db.Float, default=0, nullable=False)
    order = db.Column(db.Integer, default=0, nullable=False)
    is_sold = db.Column(db.Boolean, default=False, nullable=False)
    is_unsold = db.Column(db.Boolean, default=False, nullable=False)
    sold_to = db.Column(db.Integer, db.ForeignKey('team.id'), nullable=True, index=True)
    sold_price = db.Column(db.Float, default=0, nullable=False)

    @property
    def state(self) -> PlayerState:
        if self.is_sold:
            return PlayerState.SOLD
        if self.is_unsold:
            return PlayerState.UNSOLD
        return PlayerState.PENDING

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'auctionId': self.auction_id,
            'name': self.name,
            'role': self.role,
            'category': self.category,
            'basePrice': self.base_price,
            'order': self.order,
            'isSold': self.is_sold,
            'isUnsold': self.is_unsold,
            'soldTo': self.sold_to,
            'soldPrice': self.sold_price,
            'state': self.state.value,
        }

    def __repr__(self):
        return f'<Player {self.name}>'
