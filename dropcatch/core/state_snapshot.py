"""
State Snapshot
==============

Packs session state into fixed-size numpy arrays for renderers and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence, TYPE_CHECKING
import numpy as np

from dropcatch.core.config_loader import GameConfig, get_config
from dropcatch.core.drop_catalog import DropCatalog, get_catalog
from dropcatch.core.geometry import Rect

if TYPE_CHECKING:
    from dropcatch.core.rng import Drop


@dataclass
class GameSnapshot:
    """
    Session state at one instant.

    Drop arrays are fixed-size with masking for the variable drop count.
    Only the oldest max_drops live drops are packed into the arrays.
    """
    # Core state
    state: str
    difficulty: str
    score: int
    time_left: int
    time_ms: int
    message: str
    drops_count: int

    # Board info (for normalization)
    board_width: float
    board_height: float

    # Catcher
    catcher_x: float
    catcher_y: float
    catcher_width: float
    catcher_height: float

    # Drop arrays (fixed size, padded)
    drop_uid: np.ndarray          # (MAX_DROPS,) int32
    drop_type_id: np.ndarray      # (MAX_DROPS,) int16, -1 when empty
    drop_x: np.ndarray            # (MAX_DROPS,) float32
    drop_y: np.ndarray            # (MAX_DROPS,) float32
    drop_size: np.ndarray         # (MAX_DROPS,) float32
    drop_progress: np.ndarray     # (MAX_DROPS,) float32, fall completed in [0, 1]
    drop_mask: np.ndarray         # (MAX_DROPS,) bool

    def to_dict(self) -> Dict[str, object]:
        """Flatten into a plain dictionary of scalars and arrays."""
        return {
            "state": self.state,
            "difficulty": self.difficulty,
            "score": np.array(self.score, dtype=np.int32),
            "time_left": np.array(self.time_left, dtype=np.int32),
            "time_ms": np.array(self.time_ms, dtype=np.int64),
            "message": self.message,
            "drops_count": np.array(self.drops_count, dtype=np.int32),
            "board_width": np.array(self.board_width, dtype=np.float32),
            "board_height": np.array(self.board_height, dtype=np.float32),
            "catcher": np.array(
                [self.catcher_x, self.catcher_y, self.catcher_width, self.catcher_height],
                dtype=np.float32
            ),
            "drop_uid": self.drop_uid,
            "drop_type_id": self.drop_type_id,
            "drop_x": self.drop_x,
            "drop_y": self.drop_y,
            "drop_size": self.drop_size,
            "drop_progress": self.drop_progress,
            "drop_mask": self.drop_mask,
        }


class SnapshotBuilder:
    """Builds session snapshots."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._catalog: DropCatalog = get_catalog(config)
        self._max_drops = config.snapshot.max_drops
        self._board_width = float(config.board.width)
        self._board_height = float(config.board.height)

    @property
    def max_drops(self) -> int:
        return self._max_drops

    def build(
        self,
        state: str,
        difficulty: str,
        score: int,
        time_left: int,
        time_ms: int,
        message: str,
        catcher: Rect,
        drops: Sequence["Drop"]
    ) -> GameSnapshot:
        """Build a snapshot from current session state."""
        n = self._max_drops
        drop_uid = np.zeros(n, dtype=np.int32)
        drop_type_id = np.full(n, -1, dtype=np.int16)
        drop_x = np.zeros(n, dtype=np.float32)
        drop_y = np.zeros(n, dtype=np.float32)
        drop_size = np.zeros(n, dtype=np.float32)
        drop_progress = np.zeros(n, dtype=np.float32)
        drop_mask = np.zeros(n, dtype=bool)

        count = min(len(drops), n)
        for i, drop in enumerate(drops[:count]):
            drop_uid[i] = drop.uid
            drop_type_id[i] = self._catalog[drop.type].id
            drop_x[i] = drop.x
            drop_y[i] = drop.top_at(time_ms)
            drop_size[i] = drop.size
            drop_progress[i] = drop.progress(time_ms)
            drop_mask[i] = True

        return GameSnapshot(
            state=state,
            difficulty=difficulty,
            score=score,
            time_left=time_left,
            time_ms=time_ms,
            message=message,
            drops_count=len(drops),
            board_width=self._board_width,
            board_height=self._board_height,
            catcher_x=catcher.left,
            catcher_y=catcher.top,
            catcher_width=catcher.width,
            catcher_height=catcher.height,
            drop_uid=drop_uid,
            drop_type_id=drop_type_id,
            drop_x=drop_x,
            drop_y=drop_y,
            drop_size=drop_size,
            drop_progress=drop_progress,
            drop_mask=drop_mask
        )
