"""Core database modules."""

from inkwell.db.database import (
    close_db,
    create_engine,
    create_session_maker,
    init_db,
    ping,
    transaction,
)

__all__ = [
    "close_db",
    "create_engine",
    "create_session_maker",
    "init_db",
    "ping",
    "transaction",
]
