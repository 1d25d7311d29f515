"""
Catcher
=======

The player's container. Follows the pointer or moves in fixed arrow-key
steps, always kept inside the play area.
"""

from __future__ import annotations

from typing import Optional

from dropcatch.core.config_loader import GameConfig, get_config
from dropcatch.core.geometry import Rect


class Catcher:
    """Rectangle the player moves to catch drops."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._bounds = Rect(0.0, 0.0, float(config.board.width), float(config.board.height))
        self._step = config.catcher.key_step
        self._rect = Rect(0.0, 0.0, float(config.catcher.width), float(config.catcher.height))
        self.center()

    @property
    def rect(self) -> Rect:
        return self._rect

    @property
    def bounds(self) -> Rect:
        return self._bounds

    @property
    def key_step(self) -> int:
        return self._step

    def center(self) -> None:
        """Place the can centred horizontally, just above the bottom edge."""
        w, h = self._rect.width, self._rect.height
        left = round(self._bounds.width / 2 - w / 2)
        top = round(self._bounds.height - h - self._config.catcher.bottom_margin)
        self._rect = self._rect.moved_to(left, top).clamped_within(self._bounds)

    def move_to(self, x: float, y: Optional[float] = None) -> Rect:
        """
        Centre the can on a pointer position, clamped to the play area.

        Args:
            x: Pointer x in play-area coordinates.
            y: Pointer y. Keeps the current height if None.
        """
        left = x - self._rect.width / 2
        top = self._rect.top if y is None else y - self._rect.height / 2
        self._rect = self._rect.moved_to(left, top).clamped_within(self._bounds)
        return self._rect

    def nudge(self, dx: int, dy: int) -> Rect:
        """
        Move by whole key steps.

        Args:
            dx: -1, 0 or 1 steps horizontally.
            dy: -1, 0 or 1 steps vertically.
        """
        left = self._rect.left + dx * self._step
        top = self._rect.top + dy * self._step
        self._rect = self._rect.moved_to(left, top).clamped_within(self._bounds)
        return self._rect
