# event_seating/infrastructure/db/models.py

from datetime import datetime

from sqlalchemy import (
    String,
    Integer,
    DateTime,
    Enum,
    CheckConstraint,
    ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from event_seating.domain.clock import to_utc, utc_now
from event_seating.domain.state_machine import BookingStatus
from event_seating.infrastructure.db.session import Base


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware datetime column pinned to UTC.

    Values are converted to UTC on the way in and come back as aware
    UTC datetimes, whatever the backend keeps. SQLite has no zone
    support, so it stores the naive UTC wall time.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        value = to_utc(value)
        if dialect.name == "sqlite":
            return value.replace(tzinfo=None)
        return value

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return to_utc(value)


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    total_seats: Mapped[int] = mapped_column(Integer, nullable=False)
    payment_time_minutes: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=30,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
    )

    __table_args__ = (
        CheckConstraint("total_seats > 0", name="ck_event_total_seats_positive"),
        CheckConstraint(
            "payment_time_minutes > 0",
            name="ck_event_payment_time_positive",
        ),
    )


class Booking(Base):
    """
    Booking row. Status changes only through the ledger's guarded
    updates; rows are never deleted except by the event cascade.
    """

    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("events.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_name: Mapped[str] = mapped_column(String(255), nullable=False)
    seats: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[BookingStatus] = mapped_column(
        Enum(
            BookingStatus,
            name="booking_status",
            values_callable=lambda statuses: [status.value for status in statuses],
        ),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime,
        nullable=False,
        default=utc_now,
        index=True,
    )

    __table_args__ = (
        CheckConstraint("seats > 0", name="ck_booking_seats_positive"),
    )
