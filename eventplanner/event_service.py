"""Event operations composed from the mapper, event store and blob store."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .config.storage import MAX_UPLOAD_BYTES
from .db.event_store import EventStore
from .exceptions import EventNotFoundError, ImageTooLargeError
from .models.fields import EventField
from .storage.blob_store import BlobStore
from .utils.event_mapper import map_event_input, validate_event_id

logger = logging.getLogger(__name__)


@dataclass
class ImageUpload:
    """An uploaded image as received from the client."""
    filename: str
    data: bytes
    content_type: Optional[str] = None


class EventService:
    """
    Create, read, update and delete events together with their images.

    Authorization is checked before these methods are called; everything
    here assumes the caller is allowed to perform the operation.
    """

    def __init__(self, events: EventStore, blobs: BlobStore, max_upload_bytes: int = MAX_UPLOAD_BYTES):
        self.events = events
        self.blobs = blobs
        self.max_upload_bytes = max_upload_bytes

    def list_events(self) -> List[Dict[str, Any]]:
        return self.events.list_events()

    def _upload(self, image: Optional[ImageUpload]) -> Optional[str]:
        if image is None:
            return None
        if len(image.data) > self.max_upload_bytes:
            raise ImageTooLargeError(
                f"Image is larger than {self.max_upload_bytes // (1024 * 1024)}MB."
            )
        logger.info(f"Processing image upload: {image.filename}")
        return self.blobs.upload(image.data, image.filename, image.content_type)

    def create_event(self, fields: Mapping[str, Any], image: Optional[ImageUpload] = None) -> str:
        """
        Validate the input, upload the image if any and store a new event.

        Returns:
            str: ID of the new event

        Raises:
            EventValidationError: If the input is invalid
            BlobStoreError: If the image upload fails
            DatabaseError: If the event cannot be stored
        """
        data = map_event_input(fields)
        image_url = self._upload(image)
        try:
            return self.events.create_event(data, image_url)
        except Exception:
            if image_url:
                self.blobs.delete(image_url)
            raise

    def update_event(self, event_id: str, fields: Mapping[str, Any], image: Optional[ImageUpload] = None) -> None:
        """
        Replace an event's fields, and its image when a new one is uploaded.

        The identifier always comes from the caller's path, never from fields.
        The old image is removed only after the record points at the new one.

        Raises:
            EventValidationError: If the ID or input is invalid
            EventNotFoundError: If the event does not exist
            BlobStoreError: If the image upload fails
            DatabaseError: If the event cannot be stored
        """
        validate_event_id(event_id)
        data = map_event_input(fields)

        existing = self.events.get_event(event_id)
        if existing is None:
            raise EventNotFoundError(event_id)
        old_image_url = existing.get(EventField.IMAGE_URL.value)

        new_image_url = self._upload(image)
        try:
            self.events.update_event(event_id, data, new_image_url or old_image_url)
        except Exception:
            if new_image_url:
                self.blobs.delete(new_image_url)
            raise

        if new_image_url and old_image_url:
            self.blobs.delete(old_image_url)

    def delete_event(self, event_id: str) -> None:
        """
        Delete an event and reclaim its image.

        The record is removed first; a failing image deletion is only logged.

        Raises:
            EventNotFoundError: If the event does not exist
        """
        validate_event_id(event_id)
        image_url = self.events.delete_event(event_id)
        if image_url:
            self.blobs.delete(image_url)

    def delete_image(self, event_id: str) -> bool:
        """
        Remove only the image of an event.

        Returns:
            bool: False if the event had no image (nothing was done)

        Raises:
            EventNotFoundError: If the event does not exist
        """
        validate_event_id(event_id)
        image_url = self.events.clear_image(event_id)
        if not image_url:
            logger.info(f"Event {event_id} has no image to delete.")
            return False
        self.blobs.delete(image_url)
        logger.info(f"Image for event {event_id} deleted successfully.")
        return True
