class SeatingError(Exception):
    """
    Base exception for all domain-level errors
    inside the event seating engine.
    """


class ValidationError(SeatingError):
    """Raised when an operation receives malformed input."""


class NotFoundError(SeatingError):
    """Raised when an event or a matching pending booking does not exist."""


class CapacityError(SeatingError):
    """Raised when a booking would exceed the confirmed-seat capacity."""

    def __init__(self, event_id: int, requested: int, available: int):
        self.event_id = event_id
        self.requested = requested
        self.available = available
        super().__init__("not enough seats")


class StorageError(SeatingError):
    """
    Raised when a unit of work against the database fails,
    including failed commits. Nothing from that unit is visible.
    """


class InvalidStateTransitionError(SeatingError):
    """
    Raised when an illegal booking state transition is attempted.
    """

    def __init__(self, from_state: str, to_state: str):
        self.from_state = from_state
        self.to_state = to_state

        message = (
            f"Illegal state transition attempted: "
            f"{from_state} -> {to_state}"
        )
        super().__init__(message)
