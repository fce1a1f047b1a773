"""Authentication package."""

from .session_gate import SessionGate

__all__ = ['SessionGate']
