"""
Error taxonomy for event and registration operations.

Every error carries the HTTP status it maps to and a short client-facing
message; the API layer renders them as ``{"error": message}``.
"""


class EventRegistrationError(Exception):
    status_code = 400
    default_message = "Bad request"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(EventRegistrationError):
    default_message = "Invalid request"


class NotFoundError(EventRegistrationError):
    status_code = 404
    default_message = "Event not found"


class PastEventError(EventRegistrationError):
    default_message = "Cannot register for past events"


class EventFullError(EventRegistrationError):
    default_message = "Event is full"


class DuplicateRegistrationError(EventRegistrationError):
    default_message = "User already registered for this event"


class NotRegisteredError(EventRegistrationError):
    default_message = "User is not registered for this event"


class RegistrationBusyError(EventRegistrationError):
    """Raised when the per-event lock could not be acquired in time."""

    status_code = 503
    default_message = "Event is busy, please try again."


class InternalError(EventRegistrationError):
    status_code = 500
    default_message = "Internal Server Error"
