from contextlib import asynccontextmanager
import logging
import time

from fastapi import FastAPI
from sqlalchemy.exc import OperationalError
import uvicorn

from event_seating.api.routes.routes import router
from event_seating.application.container import build_services
from event_seating.application.expiration_sweeper import ExpirationSweeper
from event_seating.config import Settings, load_settings
from event_seating.infrastructure.db.models import Base
from event_seating.infrastructure.db.session import Database

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def _wait_for_db(database: Database, max_retries: int, retry_delay_seconds: float) -> None:
    # Handles the common case where the API starts before Postgres is ready.
    for attempt in range(1, max_retries + 1):
        try:
            database.ping()
            logger.info("Database is reachable.")
            return
        except OperationalError:
            if attempt == max_retries:
                logger.exception(
                    "Database not reachable after %s attempts. Check DATABASE_URL and Postgres status.",
                    max_retries,
                )
                raise
            logger.warning(
                "Database not ready (attempt %s/%s). Retrying in %.1f seconds...",
                attempt,
                max_retries,
                retry_delay_seconds,
            )
            time.sleep(retry_delay_seconds)


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    owns_database = database is None
    database = database or Database.from_url(settings.database_url)

    services = build_services(database)
    sweeper = ExpirationSweeper(
        services.ledger,
        interval_seconds=settings.sweeper_interval_seconds,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _wait_for_db(
            database,
            settings.db_connect_max_retries,
            settings.db_connect_retry_delay,
        )
        Base.metadata.create_all(bind=database.engine)
        if settings.sweeper_enabled:
            sweeper.start()
        try:
            yield
        finally:
            sweeper.stop(timeout=settings.sweeper_interval_seconds)
            if owns_database:
                database.dispose()

    app = FastAPI(title="Event Seating Engine", lifespan=lifespan)
    app.state.services = services
    app.state.sweeper = sweeper
    app.include_router(router)
    return app


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
