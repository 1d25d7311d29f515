"""
Tests for configuration loading and validation.
"""

import os

import pytest
import yaml

from dropcatch.core.config_loader import Difficulty, load_config


DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
    "dropcatch",
    "game_config.yaml"
)


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    path.write_text(yaml.safe_dump(raw, allow_unicode=True), encoding="utf-8")
    return str(path)


class TestDefaultConfig:
    """Values shipped in game_config.yaml."""

    def test_timer_cadences(self, config):
        assert config.timing.spawn_interval_ms == 750
        assert config.timing.tick_interval_ms == 1000
        assert config.timing.default_time_left == 60

    def test_time_limits(self, config):
        assert config.get_difficulty("easy").time_limit == 60
        assert config.get_difficulty("medium").time_limit == 60
        assert config.get_difficulty("hard").time_limit == 30

    def test_fall_duration_ranges(self, config):
        expected = {
            Difficulty.EASY: (3.5, 5.2),
            Difficulty.MEDIUM: (2.0, 3.0),
            Difficulty.HARD: (1.2, 2.0),
        }
        for difficulty, (low, high) in expected.items():
            diff = config.get_difficulty(difficulty)
            assert diff.fall_duration_min == pytest.approx(low)
            assert diff.fall_duration_max == pytest.approx(high)

    def test_score_thresholds(self, config):
        assert config.rules.lose_score == -25
        assert config.rules.win_score == 200

    def test_distributions_sum_to_one(self, config):
        """Every difficulty's type distribution must cover [0, 1) exactly."""
        for difficulty in Difficulty:
            diff = config.get_difficulty(difficulty)
            assert diff.total_weight == pytest.approx(1.0)
            assert diff.thresholds[-1][1] == 1.0

    def test_easy_has_no_danger(self, config):
        names = [name for name, _ in config.get_difficulty("easy").thresholds]
        assert names == ["good", "bad", "coin"]

    def test_cumulative_thresholds(self, config):
        expected = {
            "easy": [0.65, 0.90, 1.0],
            "medium": [0.55, 0.80, 0.90, 1.0],
            "hard": [0.50, 0.75, 0.85, 1.0],
        }
        for name, bounds in expected.items():
            actual = [upper for _, upper in config.get_difficulty(name).thresholds]
            assert actual == pytest.approx(bounds)

    def test_timeout_message_differs_from_score_loss(self, config):
        assert config.messages.timeout.startswith("Time's up")
        assert config.messages.timeout != config.messages.score_floor


class TestDifficultyParsing:

    def test_parse_is_case_insensitive(self):
        assert Difficulty.parse("HARD") is Difficulty.HARD
        assert Difficulty.parse(" medium ") is Difficulty.MEDIUM

    def test_parse_enum_passthrough(self):
        assert Difficulty.parse(Difficulty.EASY) is Difficulty.EASY

    def test_unknown_difficulty_raises(self):
        with pytest.raises(ValueError):
            Difficulty.parse("nightmare")


class TestConfigValidation:
    """Broken configs fail at load time."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_round_trip_of_default_file(self, tmp_path, raw_config):
        config = load_config(write_config(tmp_path, raw_config))
        assert config.board.width == raw_config["board"]["width"]

    def test_weights_not_summing_to_one(self, tmp_path, raw_config):
        raw_config["difficulties"]["medium"]["weights"]["good"] = 0.9
        with pytest.raises(ValueError, match="sum to 1.0"):
            load_config(write_config(tmp_path, raw_config))

    def test_unknown_type_in_weights(self, tmp_path, raw_config):
        raw_config["difficulties"]["easy"]["weights"]["rainbow"] = 0.0
        with pytest.raises(ValueError, match="unknown drop types"):
            load_config(write_config(tmp_path, raw_config))

    def test_inverted_fall_duration(self, tmp_path, raw_config):
        raw_config["difficulties"]["hard"]["fall_duration"] = [2.0, 1.2]
        with pytest.raises(ValueError, match="fall_duration"):
            load_config(write_config(tmp_path, raw_config))

    def test_missing_difficulty(self, tmp_path, raw_config):
        del raw_config["difficulties"]["hard"]
        with pytest.raises(ValueError, match="Missing difficulty"):
            load_config(write_config(tmp_path, raw_config))

    def test_non_positive_interval(self, tmp_path, raw_config):
        raw_config["timing"]["spawn_interval_ms"] = 0
        with pytest.raises(ValueError, match="intervals"):
            load_config(write_config(tmp_path, raw_config))

    def test_inverted_score_thresholds(self, tmp_path, raw_config):
        raw_config["rules"]["lose_score"] = 300
        with pytest.raises(ValueError, match="lose_score"):
            load_config(write_config(tmp_path, raw_config))
