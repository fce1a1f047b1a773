"""Canonical event field names.

One enumeration shared by the input mapper, the store adapter and the API
layer, so wire keys are spelled in exactly one place.
"""

from enum import Enum


class EventField(str, Enum):
    """Wire names of the event record attributes."""

    ID = 'id'
    TITLE = 'title'
    EVENT_DATE = 'eventDate'
    START_TIME = 'startTime'
    END_TIME = 'endTime'
    DESCRIPTION = 'description'
    RESOURCES = 'resources'
    RESPONSIBLE = 'responsible'
    EVENT_TYPE = 'eventType'
    PARTICIPANT_INFO = 'participantInfo'
    IMAGE_URL = 'imageUrl'
    CREATED_AT = 'createdAt'


# Label used when an event does not say which category it belongs to
DEFAULT_EVENT_TYPE = 'Öffentlich'

REQUIRED_FIELDS = (EventField.TITLE, EventField.EVENT_DATE)

# Free-text fields a caller may set; each defaults to an empty string
OPTIONAL_TEXT_FIELDS = (
    EventField.START_TIME,
    EventField.END_TIME,
    EventField.DESCRIPTION,
    EventField.RESOURCES,
    EventField.RESPONSIBLE,
    EventField.PARTICIPANT_INFO,
)

# Form field carrying an uploaded image
IMAGE_UPLOAD_FIELD = 'eventImage'
