"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    ConnectionError,
    SessionError,
)
from .event_store import EventStore
from .session_store import SessionStore, InMemorySessionStore, DatabaseSessionStore

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',
    
    # Exceptions
    'DatabaseError',
    'ConnectionError',
    'SessionError',
    
    # Stores
    'EventStore',
    'SessionStore',
    'InMemorySessionStore',
    'DatabaseSessionStore',
]
