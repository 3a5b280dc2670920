from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update

from event_seating.application.catalog_service import CatalogService
from event_seating.application.inventory_service import InventoryService
from event_seating.application.ledger_service import LedgerService
from event_seating.application.query_service import QueryService
from event_seating.config import Settings
from event_seating.domain.clock import utc_now
from event_seating.infrastructure.db.models import Base, Booking
from event_seating.infrastructure.db.session import Database
from event_seating.main import create_app


@pytest.fixture
def database(tmp_path):
    # File-backed so worker threads share one database.
    database = Database.from_url(f"sqlite:///{tmp_path / 'seating.db'}")
    Base.metadata.create_all(bind=database.engine)
    yield database
    database.dispose()


@pytest.fixture
def catalog(database):
    return CatalogService(database)


@pytest.fixture
def inventory(database):
    return InventoryService(database)


@pytest.fixture
def ledger(database):
    return LedgerService(database)


@pytest.fixture
def queries(database):
    return QueryService(database)


@pytest.fixture
def make_event(catalog):
    def _make_event(
        name="Test Event",
        total_seats=100,
        payment_time_minutes=30,
        date=None,
    ):
        return catalog.create_event(
            name=name,
            date=date or datetime.now(timezone.utc) + timedelta(days=1),
            total_seats=total_seats,
            payment_time_minutes=payment_time_minutes,
        )

    return _make_event


@pytest.fixture
def age_booking(database):
    """Moves a booking's created_at into the past."""

    def _age_booking(booking_id, minutes):
        with database.transaction() as db:
            db.execute(
                update(Booking)
                .where(Booking.id == booking_id)
                .values(created_at=utc_now() - timedelta(minutes=minutes))
            )

    return _age_booking


@pytest.fixture
def client(database):
    settings = Settings(
        database_url="sqlite://",
        db_connect_max_retries=1,
        sweeper_enabled=False,
    )
    app = create_app(settings=settings, database=database)
    with TestClient(app) as test_client:
        yield test_client
