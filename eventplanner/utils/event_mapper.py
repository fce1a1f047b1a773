"""Mapping of loosely typed request input onto canonical event fields."""

import re
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Mapping

from ..exceptions import InvalidDateError, InvalidEventIdError, MissingFieldError
from ..models.fields import (
    EventField,
    DEFAULT_EVENT_TYPE,
    OPTIONAL_TEXT_FIELDS,
    REQUIRED_FIELDS,
)
from .dates import parse_event_date

EVENT_ID_PATTERN = re.compile(r'^[A-Za-z0-9_-]{1,128}$')


@dataclass
class EventInput:
    """
    Validated, canonical event data ready to be stored.

    Holds only caller-controlled fields; id, image and creation time are
    owned by the store.
    """
    title: str
    event_date: date
    start_time: str = ''
    end_time: str = ''
    description: str = ''
    resources: str = ''
    responsible: str = ''
    event_type: str = DEFAULT_EVENT_TYPE
    participant_info: str = ''

    def to_columns(self) -> Dict[str, Any]:
        """Column values for the Event model, keyed by attribute name."""
        return {
            'title': self.title,
            'event_date': self.event_date,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'description': self.description,
            'resources': self.resources,
            'responsible': self.responsible,
            'event_type': self.event_type,
            'participant_info': self.participant_info,
        }


def _text(data: Mapping[str, Any], key: EventField) -> str:
    value = data.get(key.value)
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


def map_event_input(data: Mapping[str, Any]) -> EventInput:
    """
    Build an EventInput from arbitrary request fields.

    Unknown keys are ignored, including id, imageUrl and createdAt.

    Args:
        data: Form or JSON fields keyed by wire name

    Returns:
        EventInput: The canonical event data

    Raises:
        MissingFieldError: If title or eventDate is absent or blank
        InvalidDateError: If eventDate cannot be parsed
    """
    if data is None:
        raise MissingFieldError("Title and Date are required fields.")

    if any(not _text(data, f).strip() for f in REQUIRED_FIELDS):
        raise MissingFieldError("Title and Date are required fields.")

    raw_date = _text(data, EventField.EVENT_DATE)
    event_date = parse_event_date(raw_date)
    if event_date is None:
        raise InvalidDateError(
            f"Invalid date format: '{raw_date}'. Please use YYYY-MM-DD."
        )

    optional = {f.name.lower(): _text(data, f) for f in OPTIONAL_TEXT_FIELDS}
    return EventInput(
        title=_text(data, EventField.TITLE),
        event_date=event_date,
        event_type=_text(data, EventField.EVENT_TYPE) or DEFAULT_EVENT_TYPE,
        **optional,
    )


def validate_event_id(event_id: Any) -> str:
    """
    Check an event identifier taken from a request path.

    Raises:
        InvalidEventIdError: If the identifier is empty or contains unexpected characters
    """
    if not isinstance(event_id, str) or not EVENT_ID_PATTERN.match(event_id):
        raise InvalidEventIdError("Event ID missing or malformed.")
    return event_id
