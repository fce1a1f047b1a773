"""Models package initialization."""

from .base import Base
from .event import Event
from .fields import EventField, DEFAULT_EVENT_TYPE
from .session import StoredSession

__all__ = ['Base', 'Event', 'EventField', 'DEFAULT_EVENT_TYPE', 'StoredSession']
