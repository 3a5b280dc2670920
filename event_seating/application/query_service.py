from dataclasses import dataclass

from event_seating.domain.exceptions import NotFoundError
from event_seating.infrastructure.db.models import Booking, Event
from event_seating.infrastructure.db.session import Database
from event_seating.infrastructure.repositories.booking_repository import BookingRepository
from event_seating.infrastructure.repositories.event_repository import EventRepository
from event_seating.infrastructure.repositories.inventory_repository import InventoryRepository


@dataclass(frozen=True)
class EventDetail:
    event: Event
    bookings: list[Booking]
    available_seats: int


@dataclass(frozen=True)
class EventAvailability:
    event: Event
    available_seats: int


class QueryService:
    """Read-side composition for the request layer. Holds no state."""

    def __init__(self, database: Database):
        self.database = database

    def get_event_detail(self, event_id: int) -> EventDetail:
        with self.database.transaction() as db:
            event = EventRepository(db).get_by_id(event_id)
            if not event:
                raise NotFoundError(f"Event {event_id} not found")

            bookings = BookingRepository(db).list_for_event(event_id)
            available = InventoryRepository(db).available_seats(event_id)

        return EventDetail(event=event, bookings=bookings, available_seats=available)

    def list_events_with_availability(self) -> list[EventAvailability]:
        with self.database.transaction() as db:
            rows = InventoryRepository(db).availability_by_date()

        return [
            EventAvailability(event=event, available_seats=available)
            for event, available in rows
        ]
