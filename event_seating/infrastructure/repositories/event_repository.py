# event_seating/infrastructure/repositories/event_repository.py

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from event_seating.infrastructure.db.models import Event


class EventRepository:

    def __init__(self, db: Session):
        self.db = db

    def create_event(
        self,
        name: str,
        date: datetime,
        total_seats: int,
        payment_time_minutes: int,
    ) -> Event:
        event = Event(
            name=name,
            date=date,
            total_seats=total_seats,
            payment_time_minutes=payment_time_minutes,
        )
        self.db.add(event)
        self.db.flush()
        return event

    def get_by_id(self, event_id: int) -> Event | None:
        stmt = select(Event).where(Event.id == event_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_date(self) -> list[Event]:
        stmt = select(Event).order_by(Event.date, Event.id)
        return list(self.db.execute(stmt).scalars().all())

    def delete_by_id(self, event_id: int) -> bool:
        # Bookings go with the event through ON DELETE CASCADE.
        result = self.db.execute(delete(Event).where(Event.id == event_id))
        return result.rowcount > 0
