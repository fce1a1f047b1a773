"""Configuration package."""

from .auth import AuthConfig
from .storage import StorageConfig

__all__ = ['AuthConfig', 'StorageConfig']
