"""Background totals poller.

Keeps the last known goal/raised so the server-rendered page starts from
fresh numbers. Failed polls are ignored and the previous values stay.
"""

import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable

from models import TotalsResult, TotalsSnapshot, progress_percent

logger = logging.getLogger(__name__)


class TotalsState:
    """Displayed totals, written by the poller thread and read by request handlers."""

    def __init__(self, goal: float, raised: float, currency_symbol: str = "$"):
        self._lock = threading.Lock()
        self._goal = goal
        self._raised = raised
        self._currency_symbol = currency_symbol
        self._live = False
        self._updated_at: datetime | None = None

    def apply(self, result: TotalsResult) -> bool:
        """Replace displayed totals with a successful result. Returns whether it applied."""
        if not result.success:
            return False
        with self._lock:
            if result.goal is not None:
                self._goal = result.goal
            if result.raised is not None:
                self._raised = result.raised
            if result.currency_symbol:
                self._currency_symbol = result.currency_symbol
            self._live = True
            self._updated_at = datetime.now(timezone.utc)
        return True

    @property
    def updated_at(self) -> datetime | None:
        with self._lock:
            return self._updated_at

    def snapshot(self) -> TotalsSnapshot:
        with self._lock:
            return TotalsSnapshot(
                goal=self._goal,
                raised=self._raised,
                currencySymbol=self._currency_symbol,
                live=self._live,
                percent=progress_percent(self._raised, self._goal),
                updatedAt=self._updated_at,
            )


class TotalsPoller:
    """Polls a totals source on a fixed interval until stopped.

    The first poll runs immediately on start(). A result that completes
    after stop() is discarded.
    """

    def __init__(
        self,
        fetch: Callable[[], TotalsResult],
        state: TotalsState,
        interval_seconds: float = 60.0,
    ):
        self._fetch = fetch
        self._state = state
        self._interval = interval_seconds
        self._cancelled = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive() and not self._cancelled.is_set()

    def start(self):
        if self._thread is not None:
            return
        logger.info("Starting totals poller (interval=%ss)", self._interval)
        self._thread = threading.Thread(target=self._run, name="totals-poller", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0):
        self._cancelled.set()
        if self._thread is not None:
            self._thread.join(timeout)
        logger.info("Totals poller stopped")

    def poll_once(self) -> bool:
        """Run a single poll. Returns True when the displayed totals changed."""
        start = time.monotonic()
        try:
            result = self._fetch()
        except Exception:
            logger.exception("Totals poll raised")
            return False

        if self._cancelled.is_set():
            logger.debug("Discarding totals that arrived after stop")
            return False

        if not result.success:
            logger.debug("Totals poll failed, keeping previous values: %s", result.error_message)
            return False

        self._state.apply(result)
        logger.debug("Totals poll applied in %dms", int((time.monotonic() - start) * 1000))
        return True

    def _run(self):
        while not self._cancelled.is_set():
            self.poll_once()
            if self._cancelled.wait(self._interval):
                break
