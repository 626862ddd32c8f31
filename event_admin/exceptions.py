"""Error kinds raised by the event admin stores and controller."""


class EventAdminError(Exception):
    """Base class for event admin errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class AuthorizationError(EventAdminError):
    """No authenticated actor is available for a write."""

    def __init__(self, message: str = "No authenticated user"):
        super().__init__(message)


class MissingIdentifierError(EventAdminError):
    """An update was requested while no event is selected for editing."""

    def __init__(self, message: str = "No event selected for editing"):
        super().__init__(message)


class StoreError(EventAdminError):
    """A read or write failure reported by a store."""


class EventNotFoundError(StoreError):
    def __init__(self, event_id: str):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id
