"""Routes package initialization."""

from . import auth, events, health

__all__ = [
    'auth',
    'events',
    'health'
]
