"""Background scheduler that refreshes the event cache on a fixed interval."""
import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Runs a refresh callback periodically on a daemon thread."""

    def __init__(self, callback: Callable[[], None], interval_seconds: float = 60):
        """
        Initialize the scheduler.

        Args:
            callback: Function invoked on every cycle
            interval_seconds: Delay between cycles in seconds (default: 60)
        """
        self.callback = callback
        self.interval_seconds = interval_seconds
        self._thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, run_immediately: bool = True) -> None:
        """
        Start the background thread if it is not already running.

        Args:
            run_immediately: Run one cycle before the first wait (default: True)
        """
        with self._lock:
            if self.is_running:
                return
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(stop_event, run_immediately),
                name="EventCacheRefresh",
                daemon=True
            )
            self._thread = thread
            self._stop_event = stop_event
            logger.info(f"Starting cache refresh every {self.interval_seconds} seconds")
            thread.start()

    def stop(self, timeout: float = 5) -> None:
        """
        Signal the background thread to exit and wait for it.

        A cycle already in progress runs to completion first.

        Args:
            timeout: Maximum seconds to wait for the thread (default: 5)
        """
        with self._lock:
            thread = self._thread
            stop_event = self._stop_event
            self._thread = None
            self._stop_event = None

        if stop_event:
            stop_event.set()
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=timeout)
            logger.info("Stopped cache refresh")

    def _run(self, stop_event: threading.Event, run_immediately: bool) -> None:
        if run_immediately:
            self._run_cycle()
        while not stop_event.wait(timeout=self.interval_seconds):
            self._run_cycle()

    def _run_cycle(self) -> None:
        try:
            self.callback()
        except Exception:
            # A failed cycle must not end the loop
            logger.exception("Cache refresh cycle failed")
