"""
RNG - Drop Spawner
==================

Draws each new drop's type, fall duration, size and horizontal position
from the difficulty settings, using a seedable random.Random.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional

from dropcatch.core.config_loader import Difficulty, DifficultyConfig, GameConfig, get_config
from dropcatch.core.drop_catalog import DropType
from dropcatch.core.geometry import Rect

logger = logging.getLogger(__name__)


@dataclass
class Drop:
    """A falling scorable unit."""
    uid: int
    type: DropType
    spawn_time_ms: int
    fall_duration_s: float
    x: float                # Left edge
    size: float             # Width and height
    start_top: float        # Top edge at spawn
    end_top: float          # Top edge when the fall completes

    @property
    def fall_duration_ms(self) -> float:
        return self.fall_duration_s * 1000.0

    def progress(self, now_ms: float) -> float:
        """Fraction of the fall completed, in [0, 1]."""
        elapsed = now_ms - self.spawn_time_ms
        return max(0.0, min(1.0, elapsed / self.fall_duration_ms))

    def top_at(self, now_ms: float) -> float:
        return self.start_top + (self.end_top - self.start_top) * self.progress(now_ms)

    def rect_at(self, now_ms: float) -> Rect:
        return Rect(self.x, self.top_at(now_ms), self.size, self.size)

    def has_landed(self, now_ms: float) -> bool:
        """True once the drop has fallen past the bottom uncaught."""
        return now_ms - self.spawn_time_ms >= self.fall_duration_ms


class DropSpawner:
    """
    Produces drops for one difficulty.

    The type is chosen by walking the difficulty's cumulative thresholds with a
    single uniform draw in [0, 1). Fall duration is uniform in
    [fall_duration_min, fall_duration_max).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._next_uid: int = 1
        self._spawned: int = 0

    @property
    def spawned(self) -> int:
        """Number of drops produced since the last reset."""
        return self._spawned

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset counters with optional new seed.

        Args:
            seed: New random seed. Keeps current RNG state if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
        self._spawned = 0

    def choose_type(self, difficulty: DifficultyConfig, roll: Optional[float] = None) -> DropType:
        """
        Map a uniform roll in [0, 1) to a drop type.

        Args:
            difficulty: Difficulty whose thresholds apply.
            roll: Draw to use. A fresh one is taken if None.
        """
        if roll is None:
            roll = self._rng.random()
        thresholds = difficulty.thresholds
        for name, upper in thresholds:
            if roll < upper:
                return DropType(name)
        return DropType(thresholds[-1][0])

    def choose_fall_duration(self, difficulty: DifficultyConfig) -> float:
        low = difficulty.fall_duration_min
        return low + self._rng.random() * (difficulty.fall_duration_max - low)

    def spawn(self, difficulty: "Difficulty | str", now_ms: int) -> Drop:
        """
        Create a new drop at the top of the board.

        Args:
            difficulty: Current difficulty.
            now_ms: Spawn time on the session clock.

        Returns:
            The new Drop.
        """
        diff = self._config.get_difficulty(difficulty)
        drops = self._config.drops
        board = self._config.board

        size = drops.min_size + self._rng.random() * drops.size_range
        x = self._rng.random() * (board.width - size - 2 * drops.side_margin) + drops.side_margin
        fall_duration = self.choose_fall_duration(diff)
        drop_type = self.choose_type(diff)

        drop = Drop(
            uid=self._next_uid,
            type=drop_type,
            spawn_time_ms=now_ms,
            fall_duration_s=fall_duration,
            x=x,
            size=size,
            start_top=drops.spawn_top,
            end_top=float(board.height)
        )
        self._next_uid += 1
        self._spawned += 1
        logger.debug(
            "spawn uid=%d type=%s x=%.1f size=%.1f fall=%.2fs",
            drop.uid, drop.type.value, drop.x, drop.size, drop.fall_duration_s
        )
        return drop
