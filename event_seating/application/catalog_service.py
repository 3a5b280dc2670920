from datetime import datetime
import logging

from event_seating.domain.clock import to_utc
from event_seating.domain.exceptions import NotFoundError, ValidationError
from event_seating.infrastructure.db.models import Event
from event_seating.infrastructure.db.session import Database
from event_seating.infrastructure.repositories.event_repository import EventRepository

logger = logging.getLogger(__name__)


class CatalogService:
    """Owns event definitions: capacity, schedule and payment window."""

    def __init__(self, database: Database):
        self.database = database

    def create_event(
        self,
        name: str,
        date: datetime,
        total_seats: int,
        payment_time_minutes: int,
    ) -> Event:
        if not name or not name.strip():
            raise ValidationError("Event name must not be empty")
        if not isinstance(date, datetime):
            raise ValidationError("Event date must be a datetime")
        if total_seats <= 0:
            raise ValidationError("total_seats must be positive")
        if payment_time_minutes <= 0:
            raise ValidationError("payment_time_minutes must be positive")

        event_date = to_utc(date)
        logger.info(
            "Creating event name=%s date=%s total_seats=%s payment_time_minutes=%s",
            name,
            event_date.isoformat(),
            total_seats,
            payment_time_minutes,
        )

        with self.database.transaction() as db:
            event = EventRepository(db).create_event(
                name=name,
                date=event_date,
                total_seats=total_seats,
                payment_time_minutes=payment_time_minutes,
            )

        logger.info("Created event id=%s", event.id)
        return event

    def get_event(self, event_id: int) -> Event:
        with self.database.transaction() as db:
            event = EventRepository(db).get_by_id(event_id)

        if not event:
            logger.warning("Event not found id=%s", event_id)
            raise NotFoundError(f"Event {event_id} not found")
        return event

    def list_events(self) -> list[Event]:
        with self.database.transaction() as db:
            events = EventRepository(db).list_by_date()

        logger.info("Retrieved %s events", len(events))
        return events

    def delete_event(self, event_id: int) -> None:
        with self.database.transaction() as db:
            deleted = EventRepository(db).delete_by_id(event_id)
            if not deleted:
                raise NotFoundError(f"Event {event_id} not found")

        logger.info("Deleted event id=%s and its bookings", event_id)
