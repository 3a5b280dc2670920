from datetime import datetime
import logging

from event_seating.domain.clock import to_utc
from event_seating.domain.exceptions import CapacityError, NotFoundError
from event_seating.infrastructure.db.models import Booking
from event_seating.infrastructure.db.session import Database
from event_seating.infrastructure.repositories.booking_repository import BookingRepository
from event_seating.infrastructure.repositories.event_repository import EventRepository
from event_seating.infrastructure.repositories.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


class LedgerService:
    """Booking records and their status transitions."""

    def __init__(self, database: Database):
        self.database = database

    def confirm_booking(self, event_id: int, user_name: str) -> int:
        """
        Confirms all pending bookings of user_name for the event.

        Capacity is re-checked: either every matching booking fits into
        the unconfirmed seats and all are confirmed, or none is and
        CapacityError is raised. Returns the number confirmed.
        """
        logger.info("Confirming bookings user=%s event_id=%s", user_name, event_id)

        with self.database.transaction() as db:
            inventory = InventoryRepository(db)
            bookings = BookingRepository(db)

            if not inventory.lock_event(event_id):
                raise NotFoundError(f"Event {event_id} not found")

            requested = bookings.pending_seats(event_id, user_name)
            if requested == 0:
                logger.warning(
                    "No pending booking found user=%s event_id=%s",
                    user_name,
                    event_id,
                )
                raise NotFoundError("booking not found")

            confirmed = bookings.confirm_pending(event_id, user_name)
            if confirmed == 0:
                # Lost a race with the sweeper, or the holds no longer fit.
                if bookings.pending_seats(event_id, user_name) == 0:
                    raise NotFoundError("booking not found")
                available = inventory.available_seats(event_id)
                logger.warning(
                    "Confirmation rejected, not enough seats available=%s requested=%s user=%s event_id=%s",
                    available,
                    requested,
                    user_name,
                    event_id,
                )
                raise CapacityError(event_id=event_id, requested=requested, available=available)

        logger.info(
            "Confirmed %s booking(s) user=%s event_id=%s",
            confirmed,
            user_name,
            event_id,
        )
        return confirmed

    def list_bookings_for_event(self, event_id: int) -> list[Booking]:
        with self.database.transaction() as db:
            if not EventRepository(db).get_by_id(event_id):
                raise NotFoundError(f"Event {event_id} not found")
            bookings = BookingRepository(db).list_for_event(event_id)

        logger.info("Retrieved %s bookings for event_id=%s", len(bookings), event_id)
        return bookings

    def expire_pending_older_than(self, now: datetime) -> int:
        now = to_utc(now)

        with self.database.transaction() as db:
            expired = BookingRepository(db).expire_pending(now)

        logger.info("Cancelled %s expired bookings", expired)
        return expired
