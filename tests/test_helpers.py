"""Tests for logic-state helpers."""

import pytest

from solvechain.models import LogicState
from solvechain.propagation import (
    get_logic_state_color,
    get_logic_state_label,
    infer_logic_state,
)


class TestInferLogicState:
    """Tests for infer_logic_state."""

    @pytest.mark.parametrize(
        ("confidence", "expected"),
        [
            (100, LogicState.TRUE),
            (80, LogicState.TRUE),
            (79.9, LogicState.UNKNOWN),
            (50, LogicState.UNKNOWN),
            (20.1, LogicState.UNKNOWN),
            (20, LogicState.FALSE),
            (0, LogicState.FALSE),
        ],
    )
    def test_thresholds(self, confidence, expected):
        """True at 80 and above, False at 20 and below."""
        assert infer_logic_state(confidence) == expected


class TestPresentation:
    """Tests for labels and colors."""

    def test_labels(self):
        """Every state has a capitalized label."""
        assert get_logic_state_label(LogicState.TRUE) == "True"
        assert get_logic_state_label(LogicState.FALSE) == "False"
        assert get_logic_state_label(LogicState.UNKNOWN) == "Unknown"
        assert get_logic_state_label("conflict") == "Conflict"

    def test_colors(self):
        """Every state has a display color."""
        assert get_logic_state_color(LogicState.TRUE) == "#22c55e"
        assert get_logic_state_color(LogicState.FALSE) == "#ef4444"
        assert get_logic_state_color(LogicState.UNKNOWN) == "#6b7280"
        assert get_logic_state_color(LogicState.CONFLICT) == "#f59e0b"

    def test_unrecognized_state_reads_as_unknown(self):
        """Unrecognized values fall back to Unknown."""
        assert get_logic_state_label("maybe") == "Unknown"
        assert get_logic_state_color("maybe") == "#6b7280"
