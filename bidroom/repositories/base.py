"""
Generic repository over one model.

Subclasses add the queries and bulk UPDATE/DELETE statements their service
needs; nothing here commits.
"""

from typing import Generic, Optional, Type, TypeVar

from sqlalchemy import func, select

from bidroom import db
from bidroom.db_utils import get_for_update

T = TypeVar('T')


class BaseRepository(Generic[T]):
    """Model-bound lookups and session bookkeeping.

    Attributes:
        model: The SQLAlchemy model class this repository manages.
    """

    def __init__(self, model: Type[T]):
        self.model = model

    def get(self, id: int) -> Optional[T]:
        return db.session.get(self.model, id)

    def get_for_update(self, id: int) -> Optional[T]:
        """Like get(), but locks the row on backends that support it."""
        return get_for_update(self.model, id)

    def create(self, **kwargs) -> T:
        """Add a new instance to the session. The caller commits."""
        instance = self.model(**kwargs)
        db.session.add(instance)
        return instance

    def delete(self, instance: T) -> None:
        db.session.delete(instance)

    def count(self, **kwargs) -> int:
        """Number of rows matching the keyword filters."""
        return db.session.execute(
            select(func.count()).select_from(self.model).filter_by(**kwargs)
        ).scalar_one()
