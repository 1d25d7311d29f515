"""
Tests for rectangle overlap and catcher movement.
"""

import pytest

from dropcatch.core.catcher import Catcher
from dropcatch.core.config_loader import load_config
from dropcatch.core.geometry import Rect, clamp


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def catcher(config):
    return Catcher(config)


class TestRect:

    def test_overlap(self):
        """Partially overlapping rects intersect."""
        assert Rect(0, 0, 10, 10).overlaps(Rect(5, 5, 10, 10))

    def test_disjoint(self):
        """Separated rects do not intersect on either axis."""
        assert not Rect(0, 0, 10, 10).overlaps(Rect(20, 0, 10, 10))
        assert not Rect(0, 0, 10, 10).overlaps(Rect(0, 20, 10, 10))

    def test_touching_edges_count(self):
        """Shared edges count as overlap."""
        assert Rect(0, 0, 10, 10).overlaps(Rect(10, 0, 10, 10))
        assert Rect(0, 0, 10, 10).overlaps(Rect(0, 10, 10, 10))

    def test_containment(self):
        """A rect inside another overlaps it both ways."""
        assert Rect(0, 0, 100, 100).overlaps(Rect(40, 40, 5, 5))
        assert Rect(40, 40, 5, 5).overlaps(Rect(0, 0, 100, 100))

    def test_clamp(self):
        """clamp pins values to the range."""
        assert clamp(-5, 0, 10) == 0
        assert clamp(15, 0, 10) == 10
        assert clamp(5, 0, 10) == 5


class TestCatcher:

    def test_starts_centred_above_bottom(self, catcher, config):
        """Can starts centred horizontally, just above the bottom."""
        rect = catcher.rect
        assert rect.left == (config.board.width - config.catcher.width) / 2
        assert rect.bottom == config.board.height - config.catcher.bottom_margin

    def test_pointer_follow_centres_on_point(self, catcher):
        """Pointer follow centres the can on the point."""
        rect = catcher.move_to(400, 250)
        assert rect.center == (400, 250)

    def test_pointer_clamped_to_board(self, catcher, config):
        """Pointer follow never leaves the board."""
        rect = catcher.move_to(-1000, -1000)
        assert (rect.left, rect.top) == (0, 0)

        rect = catcher.move_to(10_000, 10_000)
        assert rect.right == config.board.width
        assert rect.bottom == config.board.height

    def test_pointer_without_y_keeps_height(self, catcher):
        """Horizontal-only follow keeps the current height."""
        top = catcher.rect.top
        rect = catcher.move_to(100)
        assert rect.top == top

    def test_arrow_step(self, catcher):
        """Arrow keys move by one key step."""
        left = catcher.rect.left
        catcher.nudge(-1, 0)
        assert catcher.rect.left == left - catcher.key_step

        top = catcher.rect.top
        catcher.nudge(0, -1)
        assert catcher.rect.top == top - catcher.key_step

    def test_arrow_steps_stop_at_edge(self, catcher, config):
        """Repeated arrow steps stop at the board edge."""
        for _ in range(100):
            catcher.nudge(1, 1)
        assert catcher.rect.right == config.board.width
        assert catcher.rect.bottom == config.board.height

    def test_center_restores_start(self, catcher):
        """center() restores the starting position."""
        start = catcher.rect
        catcher.move_to(0, 0)
        catcher.center()
        assert catcher.rect == start
