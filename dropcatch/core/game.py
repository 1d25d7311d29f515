"""
Game Session
============

The session state machine: owns score, countdown, spawn cadence and
win/loss evaluation, and ties together spawner, scoring, rules, catcher and
scheduler.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from dropcatch.core.catcher import Catcher
from dropcatch.core.config_loader import Difficulty, GameConfig, get_config
from dropcatch.core.drop_catalog import DropCatalog, get_catalog
from dropcatch.core.geometry import Rect
from dropcatch.core.rng import Drop, DropSpawner
from dropcatch.core.rules import EndReason, GameResult, TerminationRules
from dropcatch.core.scheduler import ManualScheduler, RecurringTask
from dropcatch.core.scoring import ScoreEvent, ScoreTracker
from dropcatch.core.state_snapshot import GameSnapshot, SnapshotBuilder

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


class GameSession:
    """
    One play-through from start to end or reset.

    States: IDLE -> RUNNING -> ENDED, and back to IDLE via reset().

    While running, two recurring tasks on the scheduler drive the game: one
    spawns a drop every spawn interval, the other decrements the countdown
    every tick interval. Both are cancelled together when the session ends or
    is reset. Calls that are invalid for the current state are no-ops.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scheduler: Optional[ManualScheduler] = None
    ):
        """
        Initialize session in the IDLE state.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducible drops.
            scheduler: Clock to run timers on. A fresh ManualScheduler if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._scheduler = scheduler if scheduler is not None else ManualScheduler()

        # Subsystems
        self._catalog: DropCatalog = get_catalog(config)
        self._spawner = DropSpawner(config, seed)
        self._scorer = ScoreTracker(config)
        self._rules = TerminationRules(config)
        self._catcher = Catcher(config)
        self._snapshot_builder = SnapshotBuilder(config)

        # Session state
        self._state = SessionState.IDLE
        self._difficulty: Difficulty = config.default_difficulty
        self._time_left: int = config.timing.default_time_left
        self._drops: List[Drop] = []
        self._tasks: List[RecurringTask] = []
        self._result: Optional[GameResult] = None

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def catalog(self) -> DropCatalog:
        return self._catalog

    @property
    def scheduler(self) -> ManualScheduler:
        return self._scheduler

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is SessionState.RUNNING

    @property
    def is_over(self) -> bool:
        return self._state is SessionState.ENDED

    @property
    def score(self) -> int:
        """Current score."""
        return self._scorer.score

    @property
    def time_left(self) -> int:
        """Remaining seconds on the countdown."""
        return self._time_left

    @property
    def difficulty(self) -> Difficulty:
        """Difficulty used by the running session, or by the next start()."""
        return self._difficulty

    @property
    def result(self) -> Optional[GameResult]:
        """Outcome of the last session, or None until one ends."""
        return self._result

    @property
    def message(self) -> str:
        """End-of-game message, empty while idle or running."""
        return self._result.message if self._result is not None else ""

    @property
    def live_drops(self) -> Tuple[Drop, ...]:
        return tuple(self._drops)

    @property
    def catcher(self) -> Catcher:
        return self._catcher

    @property
    def now_ms(self) -> int:
        return self._scheduler.now_ms

    def drop_rect(self, drop: Drop) -> Rect:
        """Bounding box of a drop at the current time."""
        return drop.rect_at(self._scheduler.now_ms)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def select_difficulty(self, difficulty: "Difficulty | str") -> bool:
        """
        Choose the difficulty for the next start().

        Only takes effect while IDLE.

        Raises:
            ValueError: If the name is not a known difficulty.
        """
        difficulty = Difficulty.parse(difficulty)
        if self._state is not SessionState.IDLE:
            logger.debug("select_difficulty(%s) ignored in state %s", difficulty.value, self._state.value)
            return False
        self._difficulty = difficulty
        return True

    def start(self, difficulty: "Difficulty | str | None" = None) -> bool:
        """
        Start a session.

        Args:
            difficulty: Difficulty to play. Uses the selected one if None.

        Returns:
            True if the session started, False if not IDLE.
        """
        if self._state is not SessionState.IDLE:
            logger.debug("start() ignored in state %s", self._state.value)
            return False
        if difficulty is not None:
            self._difficulty = Difficulty.parse(difficulty)

        diff = self._config.get_difficulty(self._difficulty)
        self._time_left = diff.time_limit
        self._scorer.reset()
        self._spawner.reset()
        self._drops.clear()
        self._result = None
        self._state = SessionState.RUNNING

        timing = self._config.timing
        self._tasks = [
            self._scheduler.every(timing.spawn_interval_ms, self.spawn, name="spawn"),
            self._scheduler.every(timing.tick_interval_ms, self.tick, name="countdown"),
        ]
        logger.info(
            "session started: difficulty=%s time_left=%d",
            self._difficulty.value, self._time_left
        )
        return True

    def tick(self) -> None:
        """Countdown step: one second less; ends the session at zero."""
        if not self.running:
            return
        self._time_left -= 1
        reason = self._rules.check_time(self._time_left)
        if reason is not None:
            self._finish(reason)

    def spawn(self) -> Optional[Drop]:
        """
        Release a new drop.

        Returns:
            The new drop, or None if not running.
        """
        if not self.running:
            return None
        self._expire_drops()
        drop = self._spawner.spawn(self._difficulty, self._scheduler.now_ms)
        self._drops.append(drop)
        return drop

    def collect(self, drop: Drop) -> Optional[ScoreEvent]:
        """
        Catch a live drop: apply its score delta, remove it, check end rules.

        Returns:
            The ScoreEvent, or None if not running or the drop is not live.
        """
        if not self.running:
            return None
        self._expire_drops()
        if drop not in self._drops:
            return None

        event = self._scorer.apply_catch(drop.type, drop.uid)
        self._drops.remove(drop)
        logger.debug("caught %r", event)

        reason = self._rules.check_score(self._scorer.score)
        if reason is not None:
            self._finish(reason)
        return event

    def collect_overlapping(self) -> List[ScoreEvent]:
        """
        Catch every live drop the catcher currently overlaps.

        Drops are taken in spawn order and collection stops as soon as a catch
        ends the session.

        Returns:
            ScoreEvents for the drops caught.
        """
        if not self.running:
            return []
        self._expire_drops()

        can = self._catcher.rect
        now = self._scheduler.now_ms
        hits = [d for d in self._drops if can.overlaps(d.rect_at(now))]

        events = []
        for drop in hits:
            if not self.running:
                break
            event = self.collect(drop)
            if event is not None:
                events.append(event)
        return events

    def end(self, won: bool) -> bool:
        """
        End a running session.

        Args:
            won: True for a win. A loss is attributed to the score floor if the
                score is at or below it, otherwise to the timeout.

        Returns:
            True if the session ended, False if it was not running.
        """
        if won:
            reason = EndReason.WIN
        elif self._scorer.score <= self._rules.lose_score:
            reason = EndReason.SCORE_FLOOR
        else:
            reason = EndReason.TIMEOUT
        return self._finish(reason)

    def reset(self) -> None:
        """Stop timers, clear drops and return to IDLE with default score and time."""
        self._cancel_tasks()
        self._drops.clear()
        self._scorer.reset()
        self._time_left = self._config.timing.default_time_left
        self._result = None
        self._catcher.center()
        previous = self._state
        self._state = SessionState.IDLE
        logger.info("session reset from %s", previous.value)

    def advance(self, ms: float) -> int:
        """
        Run the clock forward, firing due spawns and ticks.

        Drops whose fall has completed are removed as misses.

        Returns:
            Number of timer callbacks fired.
        """
        fired = self._scheduler.advance(ms)
        self._expire_drops()
        return fired

    def move_catcher_to(self, x: float, y: Optional[float] = None) -> Rect:
        """Pointer or touch follow."""
        return self._catcher.move_to(x, y)

    def nudge_catcher(self, dx: int, dy: int) -> Rect:
        """Arrow-key step."""
        return self._catcher.nudge(dx, dy)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _finish(self, reason: EndReason) -> bool:
        if not self.running:
            return False
        self._cancel_tasks()
        self._drops.clear()
        self._state = SessionState.ENDED
        self._result = self._rules.result(reason, self._scorer.score)
        logger.info(
            "session ended: reason=%s score=%d time_left=%d",
            reason.value, self._scorer.score, self._time_left
        )
        return True

    def _cancel_tasks(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []

    def _expire_drops(self) -> None:
        now = self._scheduler.now_ms
        landed = [d for d in self._drops if d.has_landed(now)]
        for drop in landed:
            self._drops.remove(drop)
            self._scorer.record_miss()
            logger.debug("missed uid=%d type=%s", drop.uid, drop.type.value)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        """Build current session snapshot."""
        return self._snapshot_builder.build(
            state=self._state.value,
            difficulty=self._difficulty.value,
            score=self._scorer.score,
            time_left=self._time_left,
            time_ms=self._scheduler.now_ms,
            message=self.message,
            catcher=self._catcher.rect,
            drops=self._drops
        )

    def get_info(self) -> Dict[str, Any]:
        """Counters for logging and display."""
        return {
            "state": self._state.value,
            "difficulty": self._difficulty.value,
            "score": self._scorer.score,
            "time_left": self._time_left,
            "live_drops": len(self._drops),
            "spawned": self._spawner.spawned,
            "catches": self._scorer.catches,
            "missed": self._scorer.missed,
            "caught_by_type": {t.value: n for t, n in self._scorer.caught_by_type.items()},
            "end_reason": self._result.reason.value if self._result else "",
        }
