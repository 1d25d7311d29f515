"""
Tests for the virtual-clock scheduler.
"""

import pytest

from dropcatch.core.scheduler import ManualScheduler


@pytest.fixture
def scheduler():
    return ManualScheduler()


class TestRecurringTasks:

    def test_fires_on_interval(self, scheduler):
        """Task fires at each multiple of its interval."""
        calls = []
        scheduler.every(1000, lambda: calls.append(scheduler.now_ms))

        scheduler.advance(3500)

        assert calls == [1000, 2000, 3000]
        assert scheduler.now_ms == 3500

    def test_two_cadences_interleave_in_time_order(self, scheduler):
        """Spawn and tick cadences fire in time order, earlier registration first on ties."""
        calls = []
        scheduler.every(750, lambda: calls.append(("spawn", scheduler.now_ms)))
        scheduler.every(1000, lambda: calls.append(("tick", scheduler.now_ms)))

        fired = scheduler.advance(3000)

        assert calls == [
            ("spawn", 750),
            ("tick", 1000),
            ("spawn", 1500),
            ("tick", 2000),
            ("spawn", 2250),
            ("spawn", 3000),
            ("tick", 3000),
        ]
        assert fired == 7

    def test_small_steps_match_one_big_step(self):
        """Stepping in frames fires the same instants as one large advance."""
        a, b = ManualScheduler(), ManualScheduler()
        calls_a, calls_b = [], []
        a.every(750, lambda: calls_a.append(a.now_ms))
        b.every(750, lambda: calls_b.append(b.now_ms))

        a.advance(10_000)
        for _ in range(625):
            b.advance(16)

        assert calls_a == calls_b

    def test_fractional_frames_accumulate(self, scheduler):
        """Sixty 60 Hz frames add up to exactly one second."""
        calls = []
        scheduler.every(1000, lambda: calls.append(scheduler.now_ms))

        for _ in range(60):
            scheduler.advance(1000 / 60)

        assert scheduler.now_ms == 1000
        assert calls == [1000]

    def test_sub_millisecond_steps_move_the_clock(self, scheduler):
        """Deltas below one millisecond are carried, not dropped."""
        for _ in range(10):
            scheduler.advance(0.25)
        assert scheduler.now_ms == 2

    def test_non_positive_interval_rejected(self, scheduler):
        """Zero interval is rejected."""
        with pytest.raises(ValueError):
            scheduler.every(0, lambda: None)

    def test_sub_millisecond_interval_rejected(self, scheduler):
        """An interval that truncates to zero is rejected instead of looping forever."""
        with pytest.raises(ValueError):
            scheduler.every(0.5, lambda: None)
        assert scheduler.active_tasks == []

    def test_negative_advance_is_ignored(self, scheduler):
        """Negative advance leaves the clock alone."""
        scheduler.advance(-50)
        assert scheduler.now_ms == 0


class TestCancellation:

    def test_cancelled_task_stops_firing(self, scheduler):
        """Cancelled task fires no more and leaves the active list."""
        calls = []
        task = scheduler.every(100, lambda: calls.append(1))

        scheduler.advance(250)
        task.cancel()
        scheduler.advance(1000)

        assert len(calls) == 2
        assert task.cancelled
        assert scheduler.active_tasks == []

    def test_cancel_inside_callback_blocks_same_instant_task(self, scheduler):
        """A task cancelled by an earlier callback must not fire at the same instant."""
        calls = []
        holder = {}

        def first():
            calls.append("first")
            holder["second"].cancel()

        scheduler.every(1000, first)
        holder["second"] = scheduler.every(1000, lambda: calls.append("second"))

        scheduler.advance(5000)

        assert calls == ["first"] * 5

    def test_cancel_all(self, scheduler):
        """cancel_all stops every task."""
        calls = []
        scheduler.every(100, lambda: calls.append("a"))
        scheduler.every(150, lambda: calls.append("b"))

        scheduler.cancel_all()
        scheduler.advance(1000)

        assert calls == []

    def test_double_cancel_is_harmless(self, scheduler):
        """Cancelling twice is a no-op."""
        task = scheduler.every(100, lambda: None)
        task.cancel()
        task.cancel()
        assert task.cancelled
