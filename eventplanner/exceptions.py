"""Domain exceptions raised by the event planner core.

The API layer translates these into HTTP responses; nothing below the routes
knows about status codes.
"""


class EventPlannerError(Exception):
    """Base exception for all event planner errors."""
    pass


class EventValidationError(EventPlannerError):
    """Raised when client input cannot be turned into an event record."""
    pass


class MissingFieldError(EventValidationError):
    """Raised when a required field is absent or blank."""
    pass


class InvalidDateError(EventValidationError):
    """Raised when the event date cannot be parsed."""
    pass


class InvalidEventIdError(EventValidationError):
    """Raised when an event identifier is malformed."""
    pass


class MalformedPayloadError(EventValidationError):
    """Raised when a request body cannot be read at all."""
    pass


class ImageTooLargeError(EventValidationError):
    """Raised when an uploaded image exceeds the size limit."""
    pass


class EventNotFoundError(EventPlannerError):
    """Raised when the referenced event does not exist."""

    def __init__(self, event_id: str):
        super().__init__(f"Event not found: {event_id}")
        self.event_id = event_id


class BlobStoreError(EventPlannerError):
    """Raised when the blob backend fails to store an object."""
    pass


class AuthError(EventPlannerError):
    """Base exception for session gate errors."""
    pass


class UnauthorizedError(AuthError):
    """Raised when a protected operation is attempted without a valid session."""
    pass


class InvalidCredentialsError(AuthError):
    """Raised when the supplied password does not match."""
    pass


class AuthConfigurationError(AuthError):
    """Raised when the shared password is not configured on the server."""
    pass
