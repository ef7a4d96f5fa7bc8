"""Unit tests for rep target parsing."""
import pytest

from backend.core.reps import DEFAULT_REPS, parse_reps

pytestmark = pytest.mark.unit


class TestParseReps:
    def test_range_returns_mean(self):
        assert parse_reps("8-12") == 10

    def test_range_mean_truncates(self):
        assert parse_reps("8-11") == 9

    def test_single_value(self):
        assert parse_reps("10") == 10

    def test_whitespace_is_ignored(self):
        assert parse_reps(" 6 ") == 6
        assert parse_reps("6 - 8") == 7

    @pytest.mark.parametrize("text", ["abc", "AMRAP", "", None, "8-", "-", "8-12-15", "x-12"])
    def test_malformed_falls_back(self, text):
        assert parse_reps(text) == DEFAULT_REPS

    @pytest.mark.parametrize("text", ["0", "0-0", "-5"])
    def test_non_positive_falls_back(self, text):
        assert parse_reps(text) == DEFAULT_REPS

    def test_default_is_ten(self):
        assert DEFAULT_REPS == 10
