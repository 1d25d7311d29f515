"""
Drop Catch Core - the game simulation.

Main exports:
- GameSession: session state machine (start / tick / spawn / collect / end / reset)
- ManualScheduler: virtual clock the session's timers run on
- GameConfig: Configuration loaded from game_config.yaml
"""

from dropcatch.core.config_loader import Difficulty, GameConfig, load_config
from dropcatch.core.drop_catalog import DropCatalog, DropKind, DropType
from dropcatch.core.game import GameSession, SessionState
from dropcatch.core.geometry import Rect
from dropcatch.core.rng import Drop, DropSpawner
from dropcatch.core.rules import EndReason, GameResult
from dropcatch.core.scheduler import ManualScheduler, RecurringTask
from dropcatch.core.scoring import ScoreEvent, ScoreTracker
from dropcatch.core.state_snapshot import GameSnapshot

__all__ = [
    "Difficulty",
    "GameConfig",
    "load_config",
    "DropCatalog",
    "DropKind",
    "DropType",
    "GameSession",
    "SessionState",
    "Rect",
    "Drop",
    "DropSpawner",
    "EndReason",
    "GameResult",
    "ManualScheduler",
    "RecurringTask",
    "ScoreEvent",
    "ScoreTracker",
    "GameSnapshot",
]
