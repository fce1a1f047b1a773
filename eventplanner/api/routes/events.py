"""Events router module."""

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..dependencies import get_event_service, require_session
from ...db import DatabaseError
from ...event_service import EventService, ImageUpload
from ...exceptions import (
    BlobStoreError,
    EventNotFoundError,
    EventValidationError,
    ImageTooLargeError,
    MalformedPayloadError,
)
from ...models.fields import IMAGE_UPLOAD_FIELD

logger = logging.getLogger(__name__)

router = APIRouter(tags=["events"])


def _http_error(error: Exception, failure_message: str) -> HTTPException:
    """Translate a domain error into an HTTPException without leaking internals."""
    if isinstance(error, StarletteHTTPException):
        return error
    if isinstance(error, ImageTooLargeError):
        return HTTPException(status_code=413, detail=str(error))
    if isinstance(error, EventValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, EventNotFoundError):
        return HTTPException(status_code=404, detail="Event not found.")
    if isinstance(error, (DatabaseError, BlobStoreError)):
        logger.error(f"{failure_message} {error}", exc_info=error)
    else:
        logger.error(f"Unexpected error: {failure_message} {error}", exc_info=error)
    return HTTPException(status_code=500, detail=failure_message)


async def _read_event_payload(request: Request) -> Tuple[Dict[str, Any], Optional[ImageUpload]]:
    """
    Read event fields and an optional image from a JSON or multipart body.

    Returns:
        Tuple of (fields keyed by wire name, uploaded image or None)

    Raises:
        MalformedPayloadError: If a JSON body cannot be decoded into an object
    """
    content_type = request.headers.get('content-type', '')
    if content_type.startswith('application/json'):
        try:
            body = await request.json()
        except ValueError as e:
            raise MalformedPayloadError("Invalid JSON body.") from e
        if not isinstance(body, dict):
            raise MalformedPayloadError("Invalid data: expected a JSON object.")
        return body, None

    form = await request.form()
    fields: Dict[str, Any] = {}
    image = None
    for key, value in form.multi_items():
        if isinstance(value, UploadFile):
            # Browsers send an empty file part when no file was chosen
            if key == IMAGE_UPLOAD_FIELD and value.filename:
                data = await value.read()
                if data:
                    image = ImageUpload(filename=value.filename, data=data, content_type=value.content_type)
            continue
        fields.setdefault(key, value)
    return fields, image


@router.get("/events", response_model=List[Dict])
async def get_events(service: EventService = Depends(get_event_service)):
    """Get all events, ordered by date and start time."""
    try:
        return service.list_events()
    except Exception as e:
        raise _http_error(e, "Error loading events from database.") from e


@router.post("/events", status_code=201, dependencies=[Depends(require_session)])
async def create_event(request: Request, service: EventService = Depends(get_event_service)):
    """Create an event from multipart form fields and an optional eventImage file."""
    try:
        fields, image = await _read_event_payload(request)
        event_id = service.create_event(fields, image)
    except Exception as e:
        raise _http_error(e, "Error adding event.") from e
    return {"success": True, "message": "Event added successfully.", "id": event_id}


@router.put("/events/{event_id}", dependencies=[Depends(require_session)])
async def update_event(event_id: str, request: Request, service: EventService = Depends(get_event_service)):
    """Update an event from JSON or multipart fields; an eventImage file replaces the current image."""
    try:
        fields, image = await _read_event_payload(request)
        service.update_event(event_id, fields, image)
    except Exception as e:
        raise _http_error(e, "Error updating event.") from e
    return {"success": True, "message": "Event updated successfully."}


@router.delete("/events/{event_id}", dependencies=[Depends(require_session)])
async def delete_event(event_id: str, service: EventService = Depends(get_event_service)):
    """Delete an event and its image."""
    try:
        service.delete_event(event_id)
    except Exception as e:
        raise _http_error(e, "Error deleting event.") from e
    return {"success": True, "message": "Event deleted successfully."}


@router.delete("/events/{event_id}/image", dependencies=[Depends(require_session)])
async def delete_event_image(event_id: str, service: EventService = Depends(get_event_service)):
    """Delete only the image of an event."""
    try:
        deleted = service.delete_image(event_id)
    except Exception as e:
        raise _http_error(e, "Error deleting image.") from e
    if not deleted:
        return {"success": True, "message": "No image found for this event."}
    return {"success": True, "message": "Image deleted successfully."}
