import logging

from event_seating.domain.exceptions import CapacityError, NotFoundError, ValidationError
from event_seating.infrastructure.db.models import Booking
from event_seating.infrastructure.db.session import Database
from event_seating.infrastructure.repositories.booking_repository import BookingRepository
from event_seating.infrastructure.repositories.inventory_repository import InventoryRepository

logger = logging.getLogger(__name__)


class InventoryService:
    """
    The only writer of new bookings.

    Admission is optimistic: a new hold is checked against confirmed
    seats only, so several pending holds may together exceed capacity.
    The no-oversell guarantee is enforced again when bookings are
    confirmed (see LedgerService.confirm_booking).
    """

    def __init__(self, database: Database):
        self.database = database

    def book_seats(self, event_id: int, user_name: str, seats: int) -> Booking:
        if not user_name or not user_name.strip():
            raise ValidationError("user_name must not be empty")
        if seats <= 0:
            raise ValidationError("seats must be positive")

        logger.info(
            "Booking seats user=%s seats=%s event_id=%s",
            user_name,
            seats,
            event_id,
        )

        with self.database.transaction() as db:
            inventory = InventoryRepository(db)

            if not inventory.lock_event(event_id):
                raise NotFoundError(f"Event {event_id} not found")

            available = inventory.available_seats(event_id)
            logger.info(
                "Available seats for event_id=%s: %s, requested: %s",
                event_id,
                available,
                seats,
            )

            if available < seats:
                logger.warning(
                    "Not enough seats available=%s requested=%s user=%s event_id=%s",
                    available,
                    seats,
                    user_name,
                    event_id,
                )
                raise CapacityError(event_id=event_id, requested=seats, available=available)

            booking = BookingRepository(db).record_booking(
                event_id=event_id,
                user_name=user_name,
                seats=seats,
            )

        logger.info(
            "Created booking id=%s user=%s seats=%s event_id=%s",
            booking.id,
            user_name,
            seats,
            event_id,
        )
        return booking

    def get_available_seats(self, event_id: int) -> int:
        with self.database.transaction() as db:
            available = InventoryRepository(db).available_seats(event_id)

        if available is None:
            raise NotFoundError(f"Event {event_id} not found")

        logger.info("Event id=%s has %s available seats", event_id, available)
        return available
