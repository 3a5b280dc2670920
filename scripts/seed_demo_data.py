from datetime import datetime, timedelta, timezone

from event_seating.application.catalog_service import CatalogService
from event_seating.config import load_settings
from event_seating.infrastructure.db.models import Base
from event_seating.infrastructure.db.session import Database


def _dt(days_from_now: int, hour: int, minute: int) -> datetime:
    now_utc = datetime.now(timezone.utc)
    target = now_utc + timedelta(days=days_from_now)
    return target.replace(hour=hour, minute=minute, second=0, microsecond=0)


EVENT_DEFS = [
    {
        "name": "Symphony Night",
        "date": _dt(days_from_now=10, hour=19, minute=30),
        "total_seats": 400,
        "payment_time_minutes": 30,
    },
    {
        "name": "Python Workshop",
        "date": _dt(days_from_now=15, hour=11, minute=0),
        "total_seats": 50,
        "payment_time_minutes": 15,
    },
    {
        "name": "Developer Conference",
        "date": _dt(days_from_now=30, hour=9, minute=0),
        "total_seats": 500,
        "payment_time_minutes": 60,
    },
]


def seed_events(catalog: CatalogService) -> None:
    existing = {event.name for event in catalog.list_events()}

    for item in EVENT_DEFS:
        if item["name"] in existing:
            continue
        catalog.create_event(**item)


def main() -> None:
    database = Database.from_url(load_settings().database_url)
    try:
        Base.metadata.create_all(bind=database.engine)
        seed_events(CatalogService(database))
        print("Seed complete: Symphony Night, Python Workshop, Developer Conference added.")
    finally:
        database.dispose()


if __name__ == "__main__":
    main()
