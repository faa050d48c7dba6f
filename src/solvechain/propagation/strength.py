"""Edge strength encodings.

Edge strength was historically stored as a 0-100 percentage and is now a
0.1-2.0 multiplier. Any value above LEGACY_STRENGTH_THRESHOLD is legacy.

Rules read strength in one of two ways:
- as a multiplier (normalize_strength): legacy values fall back to 1.0
- as a fraction (strength_fraction): legacy values keep their percentage
  meaning, current values are already fractions

Each rule picks its reading; the threshold and fallback are shared.
"""

from __future__ import annotations

LEGACY_STRENGTH_THRESHOLD = 2.0
LEGACY_STRENGTH_FALLBACK = 1.0


def is_legacy_strength(strength: float) -> bool:
    """Check whether strength uses the legacy 0-100 percentage encoding."""
    return strength > LEGACY_STRENGTH_THRESHOLD


def normalize_strength(strength: float) -> float:
    """Read strength as a multiplier.

    Examples:
        >>> normalize_strength(1.5)
        1.5
        >>> normalize_strength(150)
        1.0
    """
    if is_legacy_strength(strength):
        return LEGACY_STRENGTH_FALLBACK
    return strength


def strength_fraction(strength: float) -> float:
    """Read strength as a fraction of full strength.

    Examples:
        >>> strength_fraction(90)
        0.9
        >>> strength_fraction(0.5)
        0.5
    """
    if is_legacy_strength(strength):
        return strength / 100.0
    return strength


__all__ = [
    "LEGACY_STRENGTH_FALLBACK",
    "LEGACY_STRENGTH_THRESHOLD",
    "is_legacy_strength",
    "normalize_strength",
    "strength_fraction",
]
