"""Unit tests for RefreshScheduler."""
import threading
from unittest.mock import Mock

from storage.refresh_scheduler import RefreshScheduler


class CountingCallback:
    """Callback that records calls and signals once a target is reached."""

    def __init__(self, target: int, fail_on=()):
        self.calls = 0
        self.target = target
        self.fail_on = set(fail_on)
        self.reached = threading.Event()
        self._lock = threading.Lock()

    def __call__(self):
        with self._lock:
            self.calls += 1
            call_number = self.calls
        if call_number >= self.target:
            self.reached.set()
        if call_number in self.fail_on:
            raise RuntimeError(f'cycle {call_number} failed')


class TestRefreshScheduler:
    """Test cases for RefreshScheduler class."""

    def test_start_runs_immediately(self):
        """Test that the first cycle runs without waiting for the interval."""
        callback = CountingCallback(target=1)
        scheduler = RefreshScheduler(callback, interval_seconds=60)

        scheduler.start()
        try:
            assert callback.reached.wait(timeout=5)
        finally:
            scheduler.stop()

        assert callback.calls == 1

    def test_repeats_on_interval(self):
        """Test that cycles repeat until stopped."""
        callback = CountingCallback(target=3)
        scheduler = RefreshScheduler(callback, interval_seconds=0.01)

        scheduler.start()
        try:
            assert callback.reached.wait(timeout=5)
        finally:
            scheduler.stop()

        assert callback.calls >= 3

    def test_failed_cycle_does_not_stop_loop(self):
        """Test that an exception in one cycle does not end the schedule."""
        callback = CountingCallback(target=3, fail_on=(1, 2))
        scheduler = RefreshScheduler(callback, interval_seconds=0.01)

        scheduler.start()
        try:
            assert callback.reached.wait(timeout=5)
        finally:
            scheduler.stop()

        assert callback.calls >= 3

    def test_start_without_immediate_run(self):
        """Test that run_immediately=False waits a full interval first."""
        callback = Mock()
        scheduler = RefreshScheduler(callback, interval_seconds=60)

        scheduler.start(run_immediately=False)
        assert scheduler.is_running is True
        scheduler.stop()

        callback.assert_not_called()

    def test_stop_ends_thread(self):
        """Test that stop joins the thread and no further cycles run."""
        callback = CountingCallback(target=1)
        scheduler = RefreshScheduler(callback, interval_seconds=60)

        scheduler.start()
        assert callback.reached.wait(timeout=5)
        scheduler.stop()

        assert scheduler.is_running is False
        assert callback.calls == 1

    def test_start_is_idempotent(self):
        """Test that starting twice does not create a second thread."""
        callback = CountingCallback(target=1)
        scheduler = RefreshScheduler(callback, interval_seconds=60)

        scheduler.start()
        try:
            assert callback.reached.wait(timeout=5)
            scheduler.start()
        finally:
            scheduler.stop()

        assert callback.calls == 1

    def test_stop_before_start(self):
        """Test that stop is safe when nothing is running."""
        scheduler = RefreshScheduler(Mock(), interval_seconds=60)

        scheduler.stop()
        scheduler.stop()

        assert scheduler.is_running is False

    def test_restart_after_stop(self):
        """Test that a stopped scheduler can be started again."""
        callback = CountingCallback(target=2)
        scheduler = RefreshScheduler(callback, interval_seconds=60)

        scheduler.start()
        scheduler.stop()
        scheduler.start()
        try:
            assert callback.reached.wait(timeout=5)
        finally:
            scheduler.stop()

        assert callback.calls == 2
