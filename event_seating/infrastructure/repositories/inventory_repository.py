# event_seating/infrastructure/repositories/inventory_repository.py

from sqlalchemy import and_, func, select
from sqlalchemy.orm import Session

from event_seating.domain.state_machine import BookingStatus
from event_seating.infrastructure.db.models import Booking, Event


def _available_seats_column():
    return Event.total_seats - func.coalesce(func.sum(Booking.seats), 0)


def _confirmed_join():
    # Outer join so an event without confirmed bookings still yields a row.
    return and_(
        Booking.event_id == Event.id,
        Booking.status == BookingStatus.CONFIRMED,
    )


class InventoryRepository:
    """
    Capacity reads. Availability is always recomputed from confirmed
    bookings; pending holds never count against it.
    """

    def __init__(self, db: Session):
        self.db = db

    def lock_event(self, event_id: int) -> Event | None:
        """
        SELECT ... FOR UPDATE on the event row.
        Serializes capacity decisions for one event.
        """

        stmt = (
            select(Event)
            .where(Event.id == event_id)
            .with_for_update()
        )

        return self.db.execute(stmt).scalar_one_or_none()

    def available_seats(self, event_id: int) -> int | None:
        stmt = (
            select(_available_seats_column())
            .select_from(Event)
            .outerjoin(Booking, _confirmed_join())
            .where(Event.id == event_id)
            .group_by(Event.id, Event.total_seats)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def availability_by_date(self) -> list[tuple[Event, int]]:
        stmt = (
            select(Event, _available_seats_column())
            .outerjoin(Booking, _confirmed_join())
            .group_by(Event.id)
            .order_by(Event.date, Event.id)
        )
        return [(event, available) for event, available in self.db.execute(stmt).all()]
