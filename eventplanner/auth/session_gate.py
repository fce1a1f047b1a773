"""Shared-password session gate.

A correct password creates a server-side session marked as authenticated.
The session id travels in a cookie signed with the session secret; mutating
endpoints require a live authenticated session unless the gate is disabled.
"""

import hashlib
import hmac
import logging
import secrets
from typing import Any, Dict, Optional

from ..config.auth import AuthConfig
from ..db.db_core import DatabaseError
from ..db.session_store import SessionStore
from ..exceptions import AuthConfigurationError, InvalidCredentialsError, UnauthorizedError

logger = logging.getLogger(__name__)

ADMIN_USER = {'role': 'admin'}


class SessionGate:
    """Issues, checks and destroys authenticated sessions."""

    def __init__(self, config: AuthConfig, store: SessionStore):
        self.config = config
        self.store = store

    @property
    def enabled(self) -> bool:
        """Whether mutating operations require an authenticated session."""
        return self.config.auth_required

    def _require_password_configured(self) -> None:
        if not self.config.password_configured:
            logger.error("APP_PASSWORD is not configured!")
            raise AuthConfigurationError("Server configuration error.")

    def check_password(self, password: Optional[str]) -> bool:
        """
        Compare a password with the configured secret without creating a session.

        Raises:
            AuthConfigurationError: If no password is configured on the server
        """
        self._require_password_configured()
        is_valid = bool(password) and password == self.config.app_password
        logger.info(f"Password check: {'successful' if is_valid else 'failed'}")
        return is_valid

    def login(self, password: Optional[str]) -> str:
        """
        Create an authenticated session if the password matches.

        Returns:
            str: The new session id (unsigned)

        Raises:
            AuthConfigurationError: If no password is configured on the server
            InvalidCredentialsError: If the password does not match
        """
        if not self.check_password(password):
            logger.info("Login failed: Incorrect password")
            raise InvalidCredentialsError("Invalid password.")

        sid = secrets.token_urlsafe(32)
        self.store.set(
            sid,
            {'isAuthenticated': True, 'user': dict(ADMIN_USER)},
            self.config.session_ttl_seconds,
        )
        logger.info(f"Login successful, session created: {sid[:8]}...")
        return sid

    def logout(self, sid: Optional[str]) -> None:
        """Destroy the session. Destroying an absent session is not an error."""
        if sid:
            self.store.delete(sid)
            logger.info(f"Session destroyed: {sid[:8]}...")

    def _session(self, sid: Optional[str]) -> Optional[Dict[str, Any]]:
        if not sid:
            return None
        data = self.store.get(sid)
        if data and data.get('isAuthenticated'):
            return data
        return None

    def is_authenticated(self, sid: Optional[str]) -> bool:
        """
        True if the session exists and is authenticated.

        Raises:
            DatabaseError: If the session store cannot be read
        """
        return self._session(sid) is not None

    def status(self, sid: Optional[str]) -> Dict[str, Any]:
        """Report whether the caller's session is valid. Never raises."""
        try:
            data = self._session(sid)
        except DatabaseError as e:
            logger.error(f"Session lookup failed: {e}")
            return {'loggedIn': False}
        if data is None:
            return {'loggedIn': False}
        return {'loggedIn': True, 'user': data.get('user', dict(ADMIN_USER))}

    def authorize(self, sid: Optional[str]) -> None:
        """
        Guard for mutating operations.

        Raises:
            UnauthorizedError: If the gate is enabled and the session is not authenticated
            DatabaseError: If the session store cannot be read
        """
        if not self.enabled:
            return
        if not self.is_authenticated(sid):
            logger.warning("Unauthorized access attempt blocked.")
            raise UnauthorizedError("Unauthorized. Please log in first.")

    def _signature(self, sid: str) -> str:
        return hmac.new(
            self.config.session_secret.encode('utf-8'),
            sid.encode('utf-8'),
            hashlib.sha256
        ).hexdigest()

    def sign(self, sid: str) -> str:
        """Cookie value for a session id."""
        return f"{sid}.{self._signature(sid)}"

    def unsign(self, cookie_value: Optional[str]) -> Optional[str]:
        """Session id from a cookie value, or None if it is missing or tampered with."""
        if not cookie_value or '.' not in cookie_value:
            return None
        sid, signature = cookie_value.rsplit('.', 1)
        if not sid or not hmac.compare_digest(signature, self._signature(sid)):
            return None
        return sid
