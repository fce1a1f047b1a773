"""FastAPI dependencies resolving the components stored on the application."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request

from ..auth.session_gate import SessionGate
from ..event_service import EventService
from ..db import DatabaseError
from ..exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def get_event_service(request: Request) -> EventService:
    return request.app.state.event_service


def get_session_gate(request: Request) -> SessionGate:
    return request.app.state.session_gate


def get_session_id(
    request: Request,
    gate: SessionGate = Depends(get_session_gate)
) -> Optional[str]:
    """Session id from the signed session cookie, if present and intact."""
    return gate.unsign(request.cookies.get(gate.config.cookie_name))


def require_session(
    sid: Optional[str] = Depends(get_session_id),
    gate: SessionGate = Depends(get_session_gate)
) -> None:
    """Reject the request with 401 unless the caller holds an authenticated session."""
    try:
        gate.authorize(sid)
    except UnauthorizedError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except DatabaseError as e:
        logger.error(f"Session lookup failed: {e}", exc_info=e)
        raise HTTPException(status_code=500, detail="Session could not be verified.")
