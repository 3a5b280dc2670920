from datetime import datetime, timedelta, timezone

import pytest

from event_seating.domain.exceptions import NotFoundError
from event_seating.domain.state_machine import BookingStatus


def test_event_detail_composes_event_bookings_and_availability(
    inventory, ledger, queries, make_event
):
    event = make_event(name="Concert", total_seats=50)
    inventory.book_seats(event.id, "alice", 10)
    inventory.book_seats(event.id, "bob", 5)
    ledger.confirm_booking(event.id, "alice")

    detail = queries.get_event_detail(event.id)

    assert detail.event.id == event.id
    assert detail.event.name == "Concert"
    assert [(b.user_name, b.status) for b in detail.bookings] == [
        ("alice", BookingStatus.CONFIRMED),
        ("bob", BookingStatus.PENDING),
    ]
    assert detail.available_seats == 40


def test_event_detail_without_bookings(queries, make_event):
    event = make_event(total_seats=25)

    detail = queries.get_event_detail(event.id)

    assert detail.bookings == []
    assert detail.available_seats == 25


def test_event_detail_not_found(queries):
    with pytest.raises(NotFoundError):
        queries.get_event_detail(999)


def test_list_events_with_availability(inventory, ledger, queries, make_event):
    now = datetime.now(timezone.utc)
    later = make_event(name="Later", total_seats=30, date=now + timedelta(days=2))
    sooner = make_event(name="Sooner", total_seats=10, date=now + timedelta(days=1))
    inventory.book_seats(later.id, "alice", 12)
    ledger.confirm_booking(later.id, "alice")
    inventory.book_seats(sooner.id, "bob", 4)

    rows = queries.list_events_with_availability()

    assert [(row.event.name, row.available_seats) for row in rows] == [
        ("Sooner", 10),
        ("Later", 18),
    ]


def test_list_events_with_availability_empty(queries):
    assert queries.list_events_with_availability() == []
