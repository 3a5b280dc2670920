# event_seating/domain/state_machine.py

from enum import Enum
from typing import Dict, Set

from event_seating.domain.exceptions import InvalidStateTransitionError


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class BookingStateMachine:
    """
    Central lifecycle controller for booking transitions.

    pending is the only non-terminal state. The ledger builds the
    status predicate of its bulk updates from source_states(), so a
    transition that is not listed here can never be written.
    """

    _ALLOWED_TRANSITIONS: Dict[BookingStatus, Set[BookingStatus]] = {
        BookingStatus.PENDING: {
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED,
        },
        BookingStatus.CONFIRMED: set(),
        BookingStatus.CANCELLED: set(),
    }

    INITIAL_STATUS = BookingStatus.PENDING

    @classmethod
    def can_transition(
        cls,
        from_status: BookingStatus,
        to_status: BookingStatus,
    ) -> bool:
        """
        Returns True if transition is allowed.
        """
        cls._ensure_valid_status(from_status)
        cls._ensure_valid_status(to_status)

        return to_status in cls._ALLOWED_TRANSITIONS.get(from_status, set())

    @classmethod
    def source_states(cls, to_status: BookingStatus) -> Set[BookingStatus]:
        """
        Returns every state that may move into to_status.
        Raises InvalidStateTransitionError when no state can.
        """
        sources = {
            from_status
            for from_status in BookingStatus
            if cls.can_transition(from_status, to_status)
        }
        if not sources:
            raise InvalidStateTransitionError(
                from_state="*",
                to_state=to_status.value,
            )
        return sources

    @staticmethod
    def _ensure_valid_status(status: BookingStatus) -> None:
        if not isinstance(status, BookingStatus):
            raise TypeError(
                f"Expected BookingStatus, got {type(status)}"
            )
