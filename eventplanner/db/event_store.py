"""Event store adapter.

Persists event records and translates between the stored representation
(UTC instants) and the wire representation (date strings).
"""

import logging
from typing import Any, Dict, List, Optional

from .db_core import Database
from ..exceptions import EventNotFoundError
from ..models.event import Event
from ..utils.event_mapper import EventInput
from ..utils.timezone import date_to_utc_midnight, now_utc

logger = logging.getLogger(__name__)


class EventStore:
    """CRUD operations on the events table."""

    def __init__(self, database: Database):
        self.database = database

    def list_events(self) -> List[Dict[str, Any]]:
        """
        Get all events in display order.

        Events are ordered by date ascending, undated events last, then by
        start time as plain string comparison.

        Returns:
            List[Dict[str, Any]]: Events in wire representation
        """
        with self.database.session() as session:
            events = session.query(Event).order_by(
                Event.event_date.is_(None),
                Event.event_date.asc(),
                Event.start_time.asc(),
            ).all()
            logger.info(f"{len(events)} events fetched from database")
            return [event.to_dict() for event in events]

    def get_event(self, event_id: str) -> Optional[Dict[str, Any]]:
        """Get a single event by ID, or None if it does not exist."""
        with self.database.session() as session:
            event = session.get(Event, event_id)
            return event.to_dict() if event else None

    def create_event(self, data: EventInput, image_url: Optional[str] = None) -> str:
        """
        Store a new event.

        Args:
            data: Validated event data
            image_url: Reference to an already uploaded image (optional)

        Returns:
            str: The identifier assigned to the new event
        """
        columns = data.to_columns()
        columns['event_date'] = date_to_utc_midnight(data.event_date)
        with self.database.session() as session:
            event = Event(**columns, image_url=image_url or None, created_at=now_utc())
            session.add(event)
            session.flush()
            event_id = event.id
        logger.info(f"New event added with ID: {event_id}")
        return event_id

    def update_event(self, event_id: str, data: EventInput, image_url: Optional[str]) -> None:
        """
        Overwrite all mutable fields of an existing event.

        Args:
            event_id: Identifier of the event to update
            data: Validated event data
            image_url: Image reference the event should carry afterwards; None removes it

        Raises:
            EventNotFoundError: If no event has this ID
        """
        columns = data.to_columns()
        columns['event_date'] = date_to_utc_midnight(data.event_date)
        with self.database.session() as session:
            event = session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            for name, value in columns.items():
                setattr(event, name, value)
            event.image_url = image_url or None
        logger.info(f"Event {event_id} successfully updated")

    def clear_image(self, event_id: str) -> Optional[str]:
        """
        Remove the image reference from an event.

        Returns:
            Optional[str]: The reference that was removed, or None if the event had no image

        Raises:
            EventNotFoundError: If no event has this ID
        """
        with self.database.session() as session:
            event = session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            previous = event.image_url
            event.image_url = None
        return previous

    def delete_event(self, event_id: str) -> Optional[str]:
        """
        Delete an event.

        Returns:
            Optional[str]: The deleted event's image reference, so the caller
            can reclaim the blob once the record is gone

        Raises:
            EventNotFoundError: If no event has this ID
        """
        with self.database.session() as session:
            event = session.get(Event, event_id)
            if event is None:
                raise EventNotFoundError(event_id)
            image_url = event.image_url
            session.delete(event)
        logger.info(f"Event {event_id} successfully deleted from database")
        return image_url
