"""
Tests for headless autoplay (tools.benchmark_speed).
"""

import numpy as np
import pytest

from dropcatch.core.config_loader import Difficulty, load_config
from dropcatch.core.game import GameSession
from dropcatch.core.rules import EndReason
from tools.benchmark_speed import benchmark_difficulty, play_session


@pytest.fixture
def session():
    return GameSession(config=load_config(), seed=3)


class TestAutoplay:

    def test_session_runs_to_an_end(self, session):
        outcome = play_session(session, Difficulty.HARD, np.random.default_rng(3))

        assert session.is_over
        assert outcome["reason"] in set(EndReason)
        assert outcome["score"] == session.score
        assert outcome["frames"] > 0

    def test_hard_session_lasts_at_most_thirty_seconds(self, session):
        outcome = play_session(session, Difficulty.HARD, np.random.default_rng(0), frame_ms=16)
        assert outcome["frames"] * 16 <= 30_000 + 16

    def test_bot_catches_something(self, session):
        outcome = play_session(session, Difficulty.EASY, np.random.default_rng(1))
        assert outcome["catches"] > 0

    def test_benchmark_rates_sum_to_one(self):
        result = benchmark_difficulty(Difficulty.MEDIUM, num_sessions=2, seed=5)
        total = result["win_rate"] + result["floor_rate"] + result["timeout_rate"]
        assert total == pytest.approx(1.0)
