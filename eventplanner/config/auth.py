"""Session gate configuration."""

import os
import logging
from dataclasses import dataclass
from typing import List, Optional

from .environment import IS_PRODUCTION_ENVIRONMENT

INSECURE_SESSION_SECRET = 'a-very-insecure-fallback-secret-replace-me!'


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class AuthConfig:
    """
    Authentication configuration settings.

    Fields:
        app_password: Shared password that grants an authenticated session
        session_secret: Secret used to sign the session cookie
        session_ttl_seconds: Lifetime of a session after login
        auth_required: Whether mutating endpoints require a session
        cookie_name: Name of the session cookie
        secure_cookie: Whether the cookie is only sent over HTTPS
    """

    app_password: str = ""
    session_secret: str = ""
    session_ttl_seconds: int = 0
    auth_required: Optional[bool] = None
    cookie_name: str = 'planner.sid'
    secure_cookie: Optional[bool] = None

    def __post_init__(self):
        """Load unset values from the environment."""
        if not self.app_password:
            self.app_password = os.environ.get('APP_PASSWORD', '')
        if not self.session_secret:
            self.session_secret = os.environ.get('SESSION_SECRET', '') or INSECURE_SESSION_SECRET
        if not self.session_ttl_seconds:
            self.session_ttl_seconds = int(os.environ.get('SESSION_TTL_SECONDS', '3600'))
        if self.auth_required is None:
            self.auth_required = _env_flag('AUTH_REQUIRED', True)
        if self.secure_cookie is None:
            self.secure_cookie = IS_PRODUCTION_ENVIRONMENT

    @property
    def password_configured(self) -> bool:
        return bool(self.app_password)

    def validate(self) -> bool:
        """Validate the configuration."""
        if self.session_ttl_seconds <= 0:
            raise ValueError("SESSION_TTL_SECONDS must be a positive number of seconds")
        if not self.cookie_name:
            raise ValueError("Session cookie name must not be empty")
        return True

    def warnings(self) -> List[str]:
        """Return configuration problems that should be reported at startup."""
        problems = []
        if not self.app_password:
            problems.append("APP_PASSWORD environment variable is not set. Login/protected routes will fail.")
        if self.session_secret == INSECURE_SESSION_SECRET:
            problems.append("SESSION_SECRET is not securely set. Session cookies are insecure!")
        if not self.auth_required:
            problems.append("AUTH_REQUIRED is disabled. Any caller can modify events.")
        return problems

    def log_warnings(self, logger: logging.Logger) -> None:
        """Log configuration problems at startup."""
        for problem in self.warnings():
            logger.warning(problem)
        if IS_PRODUCTION_ENVIRONMENT and self.session_secret == INSECURE_SESSION_SECRET:
            logger.error("FATAL ERROR: SESSION_SECRET is not securely set for production!")
