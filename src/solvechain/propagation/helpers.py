"""Seeding and presentation helpers for logic states."""

from __future__ import annotations

from solvechain.models import LogicState

TRUE_AT_OR_ABOVE = 80.0
FALSE_AT_OR_BELOW = 20.0

_LABELS: dict[LogicState, str] = {
    LogicState.TRUE: "True",
    LogicState.FALSE: "False",
    LogicState.UNKNOWN: "Unknown",
    LogicState.CONFLICT: "Conflict",
}

_COLORS: dict[LogicState, str] = {
    LogicState.TRUE: "#22c55e",  # green-500
    LogicState.FALSE: "#ef4444",  # red-500
    LogicState.UNKNOWN: "#6b7280",  # gray-500
    LogicState.CONFLICT: "#f59e0b",  # amber-500
}


def infer_logic_state(confidence: float) -> LogicState:
    """Derive a seed logic state from a node's static confidence.

    Examples:
        >>> infer_logic_state(85)
        <LogicState.TRUE: 'true'>
        >>> infer_logic_state(50)
        <LogicState.UNKNOWN: 'unknown'>
    """
    if confidence >= TRUE_AT_OR_ABOVE:
        return LogicState.TRUE
    if confidence <= FALSE_AT_OR_BELOW:
        return LogicState.FALSE
    return LogicState.UNKNOWN


def get_logic_state_label(state: LogicState | str) -> str:
    """Display label for a logic state. Unrecognized values read as Unknown."""
    try:
        return _LABELS[LogicState(state)]
    except ValueError:
        return _LABELS[LogicState.UNKNOWN]


def get_logic_state_color(state: LogicState | str) -> str:
    """Hex display color for a logic state. Unrecognized values get the Unknown color."""
    try:
        return _COLORS[LogicState(state)]
    except ValueError:
        return _COLORS[LogicState.UNKNOWN]


__all__ = [
    "FALSE_AT_OR_BELOW",
    "TRUE_AT_OR_ABOVE",
    "get_logic_state_color",
    "get_logic_state_label",
    "infer_logic_state",
]
