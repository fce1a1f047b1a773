"""Event model definition."""

import uuid
from typing import Any, Dict

from sqlalchemy import Column, String, Text, DateTime

from .base import Base
from .fields import EventField, DEFAULT_EVENT_TYPE
from ..utils.timezone import ensure_utc, now_utc


def generate_event_id() -> str:
    """Opaque identifier for a new event."""
    return uuid.uuid4().hex


class Event(Base):
    """
    Event record as stored in the database.

    Fields:
        id: Opaque identifier, assigned when the record is created
        title: Event title (required)
        event_date: UTC midnight of the event's calendar date. Imported
                    records may have none; they sort after dated ones.
        start_time: Free-form start time text (e.g. '18:00')
        end_time: Free-form end time text
        description: What the event is about
        resources: Comma-joined list of requested resources
        responsible: Person responsible for the event
        event_type: Visibility/category label
        participant_info: Additional information for participants
        image_url: Reference to the attached image in the blob store (optional)
        created_at: When the record was created; never changed afterwards
    """
    __tablename__ = 'events'

    id = Column(String(64), primary_key=True, default=generate_event_id)
    title = Column(Text, nullable=False)
    event_date = Column(DateTime(timezone=True), nullable=True, index=True)
    start_time = Column(Text, nullable=False, default='')
    end_time = Column(Text, nullable=False, default='')
    description = Column(Text, nullable=False, default='')
    resources = Column(Text, nullable=False, default='')
    responsible = Column(Text, nullable=False, default='')
    event_type = Column(Text, nullable=False, default=DEFAULT_EVENT_TYPE)
    participant_info = Column(Text, nullable=False, default='')
    image_url = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc)

    def __init__(self, **kwargs):
        """Initialize Event with the given attributes."""
        # Ensure timezone-aware datetimes
        for field in ('event_date', 'created_at'):
            if kwargs.get(field) is not None:
                kwargs[field] = ensure_utc(kwargs[field])

        super().__init__(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        event_date = ensure_utc(self.event_date)
        created_at = ensure_utc(self.created_at)
        data = {
            EventField.ID.value: self.id,
            EventField.TITLE.value: self.title,
            EventField.EVENT_DATE.value: event_date.date().isoformat() if event_date else None,
            EventField.START_TIME.value: self.start_time or '',
            EventField.END_TIME.value: self.end_time or '',
            EventField.DESCRIPTION.value: self.description or '',
            EventField.RESOURCES.value: self.resources or '',
            EventField.RESPONSIBLE.value: self.responsible or '',
            EventField.EVENT_TYPE.value: self.event_type or DEFAULT_EVENT_TYPE,
            EventField.PARTICIPANT_INFO.value: self.participant_info or '',
            EventField.CREATED_AT.value: created_at.isoformat() if created_at else None,
        }
        if self.image_url:
            data[EventField.IMAGE_URL.value] = self.image_url
        return data

    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, title={self.title}, event_date={self.event_date})"
