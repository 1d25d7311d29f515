"""
Game Rules
==========

End-of-game conditions and result messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from dropcatch.core.config_loader import GameConfig, get_config


class EndReason(str, Enum):
    """Why a session ended."""
    WIN = "win"
    SCORE_FLOOR = "score_floor"
    TIMEOUT = "timeout"


@dataclass
class GameResult:
    """Outcome of a finished session."""
    won: bool
    reason: EndReason
    message: str
    final_score: int


class TerminationRules:
    """
    Handles game termination conditions.

    - Score floor: score at or below lose_score is an immediate loss
    - Win: score at or above win_score is an immediate win
    - Timeout: remaining time at or below zero is a loss
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize termination rules.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._lose_score = config.rules.lose_score
        self._win_score = config.rules.win_score

    @property
    def lose_score(self) -> int:
        return self._lose_score

    @property
    def win_score(self) -> int:
        return self._win_score

    def check_score(self, score: int) -> Optional[EndReason]:
        """
        Check the score thresholds after a catch.

        The floor is tested first, matching the order the checks run after
        every catch.
        """
        if score <= self._lose_score:
            return EndReason.SCORE_FLOOR
        if score >= self._win_score:
            return EndReason.WIN
        return None

    def check_time(self, time_left: int) -> Optional[EndReason]:
        """Check the countdown after a tick."""
        if time_left <= 0:
            return EndReason.TIMEOUT
        return None

    def message_for(self, reason: EndReason) -> str:
        messages = self._config.messages
        if reason is EndReason.WIN:
            return messages.win
        if reason is EndReason.SCORE_FLOOR:
            return messages.score_floor
        return messages.timeout

    def result(self, reason: EndReason, score: int) -> GameResult:
        return GameResult(
            won=reason is EndReason.WIN,
            reason=reason,
            message=self.message_for(reason),
            final_score=score
        )
