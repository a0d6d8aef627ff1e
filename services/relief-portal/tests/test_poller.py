"""Tests for the background totals poller and its shared state."""

import sys
import threading
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from models import TotalsResult, progress_percent
from poller import TotalsPoller, TotalsState


def _ok(goal: float, raised: float) -> TotalsResult:
    return TotalsResult(success=True, goal=goal, raised=raised, currency_symbol="$")


def _failed() -> TotalsResult:
    return TotalsResult(success=False, error_message="No totals found")


class TestProgressPercent:
    def test_rounds_half_up(self):
        assert progress_percent(1, 200) == 1  # 0.5%
        assert progress_percent(3250, 7000) == 46

    def test_clamped(self):
        assert progress_percent(9000, 7000) == 100
        assert progress_percent(-5, 7000) == 0

    def test_zero_goal(self):
        assert progress_percent(100, 0) == 0


class TestTotalsState:
    def test_starts_from_defaults(self):
        snap = TotalsState(goal=7000, raised=0).snapshot()
        assert snap.goal == 7000
        assert snap.raised == 0
        assert snap.live is False
        assert snap.percent == 0

    def test_success_replaces_values(self):
        state = TotalsState(goal=7000, raised=0)
        assert state.apply(_ok(8000, 4000)) is True
        snap = state.snapshot()
        assert (snap.goal, snap.raised, snap.live, snap.percent) == (8000, 4000, True, 50)
        assert state.updated_at is not None

    def test_failure_keeps_previous_values(self):
        state = TotalsState(goal=7000, raised=100)
        assert state.apply(_failed()) is False
        snap = state.snapshot()
        assert (snap.goal, snap.raised, snap.live) == (7000, 100, False)
        assert state.updated_at is None


class TestTotalsPoller:
    def test_poll_once_applies_success(self):
        state = TotalsState(goal=7000, raised=0)
        poller = TotalsPoller(fetch=lambda: _ok(7000, 3250), state=state, interval_seconds=60)
        assert poller.poll_once() is True
        assert state.snapshot().raised == 3250

    def test_poll_once_ignores_failure(self):
        state = TotalsState(goal=7000, raised=10)
        poller = TotalsPoller(fetch=_failed, state=state, interval_seconds=60)
        assert poller.poll_once() is False
        assert state.snapshot().raised == 10

    def test_poll_once_swallows_fetch_exception(self):
        def boom():
            raise RuntimeError("network down")

        state = TotalsState(goal=7000, raised=10)
        poller = TotalsPoller(fetch=boom, state=state, interval_seconds=60)
        assert poller.poll_once() is False
        assert state.snapshot().raised == 10

    def test_first_poll_runs_immediately(self):
        state = TotalsState(goal=0, raised=0)
        poller = TotalsPoller(fetch=lambda: _ok(100, 50), state=state, interval_seconds=3600)
        poller.start()
        try:
            deadline = time.monotonic() + 2.0
            while not state.snapshot().live and time.monotonic() < deadline:
                time.sleep(0.01)
        finally:
            poller.stop()
        assert state.snapshot().goal == 100
        assert poller.running is False

    def test_polls_repeat_on_interval(self):
        calls = []
        enough = threading.Event()

        def fetch():
            calls.append(1)
            if len(calls) >= 3:
                enough.set()
            return _ok(100, len(calls))

        poller = TotalsPoller(fetch=fetch, state=TotalsState(0, 0), interval_seconds=0.01)
        poller.start()
        try:
            assert enough.wait(2.0)
        finally:
            poller.stop()
        assert len(calls) >= 3

    def test_result_after_stop_is_discarded(self):
        state = TotalsState(goal=7000, raised=0)

        def fetch_then_teardown():
            poller.stop()
            return _ok(9999, 1)

        poller = TotalsPoller(fetch=fetch_then_teardown, state=state, interval_seconds=60)
        assert poller.poll_once() is False
        assert state.snapshot().goal == 7000
        assert state.snapshot().live is False
