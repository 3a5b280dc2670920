# event_seating/infrastructure/repositories/booking_repository.py

from datetime import datetime, timedelta

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, aliased

from event_seating.domain.state_machine import BookingStateMachine, BookingStatus
from event_seating.infrastructure.db.models import Booking, Event


class BookingRepository:

    def __init__(self, db: Session):
        self.db = db

    def record_booking(
        self,
        event_id: int,
        user_name: str,
        seats: int,
    ) -> Booking:
        booking = Booking(
            event_id=event_id,
            user_name=user_name,
            seats=seats,
            status=BookingStateMachine.INITIAL_STATUS,
        )

        self.db.add(booking)
        self.db.flush()
        return booking

    def list_for_event(self, event_id: int) -> list[Booking]:
        stmt = (
            select(Booking)
            .where(Booking.event_id == event_id)
            .order_by(Booking.id)
        )
        return list(self.db.execute(stmt).scalars().all())

    def pending_seats(self, event_id: int, user_name: str) -> int:
        stmt = select(func.coalesce(func.sum(Booking.seats), 0)).where(
            Booking.event_id == event_id,
            Booking.user_name == user_name,
            Booking.status == BookingStatus.PENDING,
        )
        return self.db.execute(stmt).scalar_one()

    def confirm_pending(self, event_id: int, user_name: str) -> int:
        """
        Confirms every pending booking of user_name for the event in one
        statement, but only if all of them fit into the seats not yet
        confirmed. Returns the number of rows confirmed (0 or all).
        """
        sources = list(BookingStateMachine.source_states(BookingStatus.CONFIRMED))

        # Aliases keep the subqueries from correlating with the updated table.
        confirmed = aliased(Booking)
        requested = aliased(Booking)

        total_seats = (
            select(Event.total_seats)
            .where(Event.id == event_id)
            .scalar_subquery()
        )
        confirmed_seats = (
            select(func.coalesce(func.sum(confirmed.seats), 0))
            .where(
                confirmed.event_id == event_id,
                confirmed.status == BookingStatus.CONFIRMED,
            )
            .scalar_subquery()
        )
        requested_seats = (
            select(func.coalesce(func.sum(requested.seats), 0))
            .where(
                requested.event_id == event_id,
                requested.user_name == user_name,
                requested.status.in_(sources),
            )
            .scalar_subquery()
        )

        stmt = (
            update(Booking)
            .where(
                Booking.event_id == event_id,
                Booking.user_name == user_name,
                Booking.status.in_(sources),
                total_seats - confirmed_seats >= requested_seats,
            )
            .values(status=BookingStatus.CONFIRMED)
            .execution_options(synchronize_session=False)
        )
        return self.db.execute(stmt).rowcount

    def expire_pending(self, now: datetime) -> int:
        """
        Cancels pending bookings whose payment window closed before now.
        One UPDATE per distinct payment window keeps the age comparison
        free of backend-specific interval arithmetic.
        """
        sources = list(BookingStateMachine.source_states(BookingStatus.CANCELLED))

        windows_stmt = (
            select(Event.payment_time_minutes)
            .join(Booking, Booking.event_id == Event.id)
            .where(Booking.status.in_(sources))
            .distinct()
        )
        windows = list(self.db.execute(windows_stmt).scalars().all())

        expired = 0
        for minutes in windows:
            try:
                cutoff = now - timedelta(minutes=minutes)
            except OverflowError:
                # Window reaches before datetime.min; no booking is that old.
                continue
            events_with_window = select(Event.id).where(
                Event.payment_time_minutes == minutes
            )
            stmt = (
                update(Booking)
                .where(
                    Booking.status.in_(sources),
                    Booking.created_at < cutoff,
                    Booking.event_id.in_(events_with_window),
                )
                .values(status=BookingStatus.CANCELLED)
                .execution_options(synchronize_session=False)
            )
            expired += self.db.execute(stmt).rowcount

        return expired
