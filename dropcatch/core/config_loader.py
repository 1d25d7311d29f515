"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml


class Difficulty(str, Enum):
    """Selectable difficulty levels."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "Difficulty | str") -> "Difficulty":
        """Parse a difficulty from its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(d.value for d in cls)
            raise ValueError(f"Unknown difficulty '{value}', expected one of: {names}") from None


@dataclass(frozen=True)
class BoardConfig:
    """Play area geometry."""
    width: int
    height: int


@dataclass(frozen=True)
class CatcherConfig:
    """The player's container."""
    width: int
    height: int
    bottom_margin: int  # Gap below the can when centred
    key_step: int       # Pixels per arrow-key press


@dataclass(frozen=True)
class TimingConfig:
    """Timer cadences."""
    spawn_interval_ms: int
    tick_interval_ms: int
    default_time_left: int


@dataclass(frozen=True)
class DropTypeConfig:
    """Configuration for a single drop type."""
    name: str
    points: int
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class DropsConfig:
    """Drop sizing and the type table."""
    spawn_top: float
    min_size: float
    size_range: float
    side_margin: float
    types: Tuple[DropTypeConfig, ...]


@dataclass(frozen=True)
class DifficultyConfig:
    """Per-difficulty time limit, fall speed and type distribution."""
    name: str
    time_limit: int
    fall_duration_min: float
    fall_duration_max: float
    weights: Tuple[Tuple[str, float], ...]  # (type name, probability) in table order

    @property
    def thresholds(self) -> Tuple[Tuple[str, float], ...]:
        """
        Cumulative upper bounds for a uniform draw in [0, 1).

        Types with zero probability are omitted. The last bound is pinned to
        1.0 so rounding never leaves a gap at the top of the interval.
        """
        bounds = []
        cumulative = 0.0
        for name, weight in self.weights:
            if weight <= 0.0:
                continue
            cumulative += weight
            bounds.append((name, cumulative))
        if bounds:
            bounds[-1] = (bounds[-1][0], 1.0)
        return tuple(bounds)

    @property
    def total_weight(self) -> float:
        return sum(weight for _, weight in self.weights)


@dataclass(frozen=True)
class RulesConfig:
    """End-of-game thresholds."""
    lose_score: int
    win_score: int


@dataclass(frozen=True)
class MessagesConfig:
    """End-of-game message texts."""
    win: str
    score_floor: str
    timeout: str


@dataclass(frozen=True)
class SnapshotConfig:
    """Snapshot array sizing."""
    max_drops: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    catcher: CatcherConfig
    timing: TimingConfig
    drops: DropsConfig
    difficulties: Dict[Difficulty, DifficultyConfig]
    default_difficulty: Difficulty
    rules: RulesConfig
    messages: MessagesConfig
    snapshot: SnapshotConfig

    @property
    def drop_type_names(self) -> Tuple[str, ...]:
        return tuple(t.name for t in self.drops.types)

    def get_difficulty(self, difficulty: "Difficulty | str") -> DifficultyConfig:
        """Get difficulty settings by enum or name."""
        return self.difficulties[Difficulty.parse(difficulty)]


def _parse_color(color_data) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_range(range_data, what: str) -> Tuple[float, float]:
    """Parse a [min, max] pair from YAML."""
    if len(range_data) != 2:
        raise ValueError(f"{what} must have 2 values [min, max], got {range_data}")
    return (float(range_data[0]), float(range_data[1]))


def _parse_difficulty(name: str, data: dict, type_names: Tuple[str, ...]) -> DifficultyConfig:
    """Parse one difficulty block, ordering weights by the drop type table."""
    raw_weights = data.get("weights", {})
    unknown = set(raw_weights) - set(type_names)
    if unknown:
        raise ValueError(f"Difficulty '{name}' has weights for unknown drop types: {sorted(unknown)}")

    low, high = _parse_range(data["fall_duration"], f"{name}.fall_duration")
    return DifficultyConfig(
        name=name,
        time_limit=int(data["time_limit"]),
        fall_duration_min=low,
        fall_duration_max=high,
        weights=tuple((t, float(raw_weights.get(t, 0.0))) for t in type_names)
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.board.width <= 0 or config.board.height <= 0:
        raise ValueError(f"Board size must be positive, got {config.board.width}x{config.board.height}")

    if config.catcher.width > config.board.width or config.catcher.height > config.board.height:
        raise ValueError("Catcher does not fit inside the board")

    if config.timing.spawn_interval_ms <= 0 or config.timing.tick_interval_ms <= 0:
        raise ValueError("Timer intervals must be positive")

    if config.drops.min_size + config.drops.size_range + 2 * config.drops.side_margin > config.board.width:
        raise ValueError("Largest drop does not fit inside the board")

    if len(set(config.drop_type_names)) != len(config.drop_type_names):
        raise ValueError(f"Duplicate drop type names: {config.drop_type_names}")

    missing = [d.value for d in Difficulty if d not in config.difficulties]
    if missing:
        raise ValueError(f"Missing difficulty sections: {missing}")

    for diff in config.difficulties.values():
        if any(w < 0.0 for _, w in diff.weights):
            raise ValueError(f"Difficulty '{diff.name}' has negative weights")
        if not math.isclose(diff.total_weight, 1.0, abs_tol=1e-9):
            raise ValueError(
                f"Difficulty '{diff.name}' weights must sum to 1.0, got {diff.total_weight}"
            )
        if not 0.0 < diff.fall_duration_min < diff.fall_duration_max:
            raise ValueError(
                f"Difficulty '{diff.name}' fall_duration must satisfy 0 < min < max, "
                f"got [{diff.fall_duration_min}, {diff.fall_duration_max}]"
            )
        if diff.time_limit <= 0:
            raise ValueError(f"Difficulty '{diff.name}' time_limit must be positive")

    if config.rules.lose_score >= config.rules.win_score:
        raise ValueError(
            f"lose_score ({config.rules.lose_score}) must be below win_score ({config.rules.win_score})"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"])
    )

    catcher_data = raw["catcher"]
    catcher = CatcherConfig(
        width=int(catcher_data["width"]),
        height=int(catcher_data["height"]),
        bottom_margin=int(catcher_data.get("bottom_margin", 12)),
        key_step=int(catcher_data.get("key_step", 20))
    )

    timing_data = raw["timing"]
    timing = TimingConfig(
        spawn_interval_ms=int(timing_data["spawn_interval_ms"]),
        tick_interval_ms=int(timing_data["tick_interval_ms"]),
        default_time_left=int(timing_data.get("default_time_left", 60))
    )

    # Parse drop types first; difficulty weights are keyed by their names
    drops_data = raw["drops"]
    drop_types = tuple(
        DropTypeConfig(
            name=str(t["name"]),
            points=int(t["points"]),
            color=_parse_color(t.get("color", [255, 255, 255]))
        )
        for t in drops_data["types"]
    )
    drops = DropsConfig(
        spawn_top=float(drops_data.get("spawn_top", -80)),
        min_size=float(drops_data.get("min_size", 36)),
        size_range=float(drops_data.get("size_range", 28)),
        side_margin=float(drops_data.get("side_margin", 4)),
        types=drop_types
    )
    type_names = tuple(t.name for t in drop_types)

    difficulties = {}
    for name, data in raw["difficulties"].items():
        difficulty = Difficulty.parse(name)
        difficulties[difficulty] = _parse_difficulty(difficulty.value, data, type_names)

    rules_data = raw["rules"]
    rules = RulesConfig(
        lose_score=int(rules_data["lose_score"]),
        win_score=int(rules_data["win_score"])
    )

    messages_data = raw.get("messages", {})
    messages = MessagesConfig(
        win=str(messages_data.get("win", "You win!")),
        score_floor=str(messages_data.get("score_floor", "Game Over")),
        timeout=str(messages_data.get("timeout", "Time's up"))
    )

    snapshot_data = raw.get("snapshot", {})
    snapshot = SnapshotConfig(
        max_drops=int(snapshot_data.get("max_drops", 64))
    )

    config = GameConfig(
        board=board,
        catcher=catcher,
        timing=timing,
        drops=drops,
        difficulties=difficulties,
        default_difficulty=Difficulty.parse(raw.get("default_difficulty", "easy")),
        rules=rules,
        messages=messages,
        snapshot=snapshot
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
