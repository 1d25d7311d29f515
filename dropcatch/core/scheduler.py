"""
Scheduler
=========

Cancelable recurring tasks on a virtual millisecond clock.

The game never reads wall-clock time. Front ends call advance() with the
elapsed frame time and tests call it with exact amounts, so every spawn and
countdown tick happens at a reproducible instant.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class RecurringTask:
    """A callback fired every interval_ms until cancelled."""

    def __init__(
        self,
        scheduler: "ManualScheduler",
        interval_ms: int,
        callback: Callable[[], None],
        seq: int,
        name: str = ""
    ):
        self._scheduler = scheduler
        self.interval_ms = interval_ms
        self.callback = callback
        self.next_due_ms = scheduler.now_ms + interval_ms
        self.seq = seq
        self.name = name or getattr(callback, "__name__", "task")
        self.fire_count = 0
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Stop the task. Safe to call more than once and from inside a callback."""
        if self._cancelled:
            return
        self._cancelled = True
        self._scheduler._discard(self)

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else f"due={self.next_due_ms}"
        return f"RecurringTask({self.name} every {self.interval_ms}ms, {state})"


class ManualScheduler:
    """
    Deterministic scheduler driven by explicit advance() calls.

    Tasks due at the same instant fire in registration order. Cancelling a
    task inside a callback takes effect immediately, so a task cancelled by an
    earlier callback never fires later in the same advance().
    """

    def __init__(self, start_ms: int = 0):
        self._now_ms: int = start_ms
        self._remainder_ms: float = 0.0  # Fraction of a ms carried between advance() calls
        self._tasks: List[RecurringTask] = []
        self._seq: int = 0

    @property
    def now_ms(self) -> int:
        """Current virtual time in milliseconds."""
        return self._now_ms

    @property
    def active_tasks(self) -> List[RecurringTask]:
        return list(self._tasks)

    def every(
        self,
        interval_ms: int,
        callback: Callable[[], None],
        name: str = ""
    ) -> RecurringTask:
        """
        Register a callback to run every interval_ms, first at now + interval_ms.

        Raises:
            ValueError: If interval_ms is below one millisecond.
        """
        interval = int(interval_ms)
        if interval <= 0:
            raise ValueError(f"interval_ms must be at least 1, got {interval_ms}")
        task = RecurringTask(self, interval, callback, self._seq, name)
        self._seq += 1
        self._tasks.append(task)
        logger.debug("scheduled %r", task)
        return task

    def _discard(self, task: RecurringTask) -> None:
        if task in self._tasks:
            self._tasks.remove(task)
            logger.debug("cancelled %r", task)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    def _next_due(self, until_ms: int) -> Optional[RecurringTask]:
        due = [t for t in self._tasks if t.next_due_ms <= until_ms]
        if not due:
            return None
        return min(due, key=lambda t: (t.next_due_ms, t.seq))

    def advance(self, ms: float) -> int:
        """
        Move the clock forward, firing every task that comes due.

        Args:
            ms: Milliseconds to advance. Negative values are treated as zero.
                Fractions accumulate until they add up to a whole millisecond.

        Returns:
            Number of callbacks fired.
        """
        total = self._remainder_ms + max(0.0, ms)
        whole = math.floor(total + 1e-9)
        self._remainder_ms = max(0.0, total - whole)
        target = self._now_ms + whole
        fired = 0
        while True:
            task = self._next_due(target)
            if task is None:
                break
            self._now_ms = task.next_due_ms
            task.next_due_ms += task.interval_ms
            task.fire_count += 1
            fired += 1
            task.callback()
        self._now_ms = target
        return fired
