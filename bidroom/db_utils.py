"""
Database helpers shared by repositories and the app factory.

SQLite does not support row-level locking (SELECT FOR UPDATE), so locking
reads fall back to a plain SELECT there. SQLite also ignores foreign keys
unless each connection turns them on; enforce_foreign_keys() does that so
deletes behave the same as on PostgreSQL. Sale counters are updated with
single UPDATE statements instead of read-modify-write, which keeps them
atomic on every backend.
"""

from typing import Type, TypeVar

from sqlalchemy import event, select

from bidroom import db

T = TypeVar('T')


def is_sqlite() -> bool:
    """Check if the current database is SQLite."""
    return 'sqlite' in str(db.engine.url)


def _sqlite_foreign_keys_on(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute('PRAGMA foreign_keys=ON')
    cursor.close()


def enforce_foreign_keys() -> None:
    """Turn on foreign key checks for every new SQLite connection.

    Must run inside an app context, before the engine's first connection.
    A no-op on other backends.
    """
    if not is_sqlite():
        return
    if not event.contains(db.engine, 'connect', _sqlite_foreign_keys_on):
        event.listen(db.engine, 'connect', _sqlite_foreign_keys_on)


def get_for_update(model: Type[T], id_value: int) -> T | None:
    """
    Get a model instance with optional row-level locking.

    For SQLite: Returns regular query
    For PostgreSQL/MySQL: Uses with_for_update() for row-level locking
    """
    query = select(model).where(model.id == id_value)

    if not is_sqlite():
        query = query.with_for_update()

    return db.session.execute(query).scalar_one_or_none()
