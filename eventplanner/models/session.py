"""Model for server-side login sessions."""

from sqlalchemy import Column, String, DateTime, JSON

from .base import Base


class StoredSession(Base):
    """
    Persisted login session.

    Fields:
        sid: Opaque session identifier (the unsigned cookie value)
        data: Session payload, e.g. {'isAuthenticated': True, 'user': {'role': 'admin'}}
        expires_at: Instant after which the session is treated as absent
    """
    __tablename__ = 'sessions'

    sid = Column(String(128), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    def __str__(self) -> str:
        """String representation."""
        return f"StoredSession(sid={self.sid}, expires_at={self.expires_at})"
