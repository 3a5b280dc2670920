from datetime import datetime
from typing import Callable
import logging
import threading

from event_seating.application.ledger_service import LedgerService
from event_seating.domain.clock import utc_now
from event_seating.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


class ExpirationSweeper:
    """
    Periodically cancels pending bookings whose payment window has passed.

    Keeps no state between passes and every pass is a single idempotent
    transaction, so several sweepers against one database are harmless.
    The worker waits on a stop event rather than sleeping, which lets
    stop() return as soon as the current pass (if any) has committed.
    A failed pass is logged and the next one runs on schedule.
    """

    def __init__(
        self,
        ledger: LedgerService,
        interval_seconds: float = 60.0,
        clock: Callable[[], datetime] = utc_now,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.ledger = ledger
        self.interval_seconds = interval_seconds
        self.clock = clock
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        return self.ledger.expire_pending_older_than(self.clock())

    def start(self) -> None:
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            name="expiration-sweeper",
            daemon=True,
        )
        self._thread.start()
        logger.info("Expiration sweeper started (interval %.1f seconds).", self.interval_seconds)

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                logger.warning("Expiration sweeper did not stop within %s seconds.", timeout)
                return
        self._thread = None
        logger.info("Expiration sweeper stopped.")

    def _run(self) -> None:
        while not self._stop_event.wait(self.interval_seconds):
            try:
                self.run_once()
            except StorageError:
                logger.exception(
                    "Expiration sweep failed. Retrying in %.1f seconds...",
                    self.interval_seconds,
                )
            except Exception:
                # A bad pass must not end the worker.
                logger.exception(
                    "Unexpected error during expiration sweep. Retrying in %.1f seconds...",
                    self.interval_seconds,
                )
