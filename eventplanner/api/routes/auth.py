"""Login, logout and session status routes."""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel

from ..dependencies import get_session_gate, get_session_id
from ...auth.session_gate import SessionGate
from ...db import DatabaseError
from ...exceptions import AuthConfigurationError, InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


class LoginRequest(BaseModel):
    password: Optional[str] = None


class PasswordCheckRequest(BaseModel):
    # Type is checked in the route, after the server configuration
    password: Any = None


@router.post("/login")
async def login(
    response: Response,
    body: Optional[LoginRequest] = None,
    gate: SessionGate = Depends(get_session_gate)
):
    """Create an authenticated session if the password is correct."""
    password = body.password if body else None
    try:
        sid = gate.login(password)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except AuthConfigurationError:
        raise HTTPException(status_code=500, detail="Server configuration error.")
    except DatabaseError as e:
        logger.error(f"Session save error: {e}", exc_info=e)
        raise HTTPException(status_code=500, detail="Session could not be saved.")

    response.set_cookie(
        key=gate.config.cookie_name,
        value=gate.sign(sid),
        max_age=gate.config.session_ttl_seconds,
        httponly=True,
        secure=gate.config.secure_cookie,
        samesite="lax",
    )
    return {"success": True, "message": "Login successful."}


@router.post("/logout")
async def logout(
    response: Response,
    sid: Optional[str] = Depends(get_session_id),
    gate: SessionGate = Depends(get_session_gate)
):
    """Destroy the current session and clear the cookie."""
    try:
        gate.logout(sid)
    except DatabaseError as e:
        logger.error(f"Error destroying session: {e}", exc_info=e)
        raise HTTPException(status_code=500, detail="Logout failed.")

    response.delete_cookie(gate.config.cookie_name)
    return {"success": True, "message": "Logout successful."}


@router.get("/auth/status")
async def auth_status(
    sid: Optional[str] = Depends(get_session_id),
    gate: SessionGate = Depends(get_session_gate)
):
    """Report whether the caller holds a valid session."""
    return gate.status(sid)


@router.post("/auth/check")
async def check_password(
    body: Optional[PasswordCheckRequest] = None,
    gate: SessionGate = Depends(get_session_gate)
):
    """Check a password without creating a session."""
    if not gate.config.password_configured:
        # Do not reveal that the password is missing on the server
        logger.error("APP_PASSWORD is not configured!")
        raise HTTPException(status_code=500, detail="Server configuration error.")

    password = body.password if body else None
    if not isinstance(password, str):
        raise HTTPException(status_code=400, detail="Password missing or invalid format in request body.")

    return {"isValid": gate.check_password(password)}
