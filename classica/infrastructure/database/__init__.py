"""Database infrastructure - connection, models, and session management."""

from classica.infrastructure.database.connection import (
    close_db,
    get_db,
    init_db,
    ping_db,
)

__all__ = ["init_db", "close_db", "get_db", "ping_db"]
