"""
Database infrastructure: engine lifecycle and transactional sessions.
"""

from .connection import close_database, database_health_check, init_database
from .session import get_db_session, standalone_session_factory

__all__ = [
    "init_database",
    "close_database",
    "database_health_check",
    "get_db_session",
    "standalone_session_factory",
]
