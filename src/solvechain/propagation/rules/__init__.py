"""Built-in propagation rules, one per relation type."""

from .achieves import AchievesRule
from .base import PropagationRule
from .causes import CausesRule
from .conflicts import ConflictsRule
from .depends import DependsRule
from .hinders import HindersRule
from .supports import SupportsRule

BUILTIN_RULES: tuple[type[PropagationRule], ...] = (
    DependsRule,
    SupportsRule,
    AchievesRule,
    HindersRule,
    CausesRule,
    ConflictsRule,
)

__all__ = [
    "BUILTIN_RULES",
    "AchievesRule",
    "CausesRule",
    "ConflictsRule",
    "DependsRule",
    "HindersRule",
    "PropagationRule",
    "SupportsRule",
]
