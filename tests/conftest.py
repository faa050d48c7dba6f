"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add tests directory to path so graph_factories can be imported
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from solvechain.propagation import (  # noqa: E402
    PropagationEngine,
    PropagationEngineConfig,
    RuleRegistry,
)


@pytest.fixture
def config() -> PropagationEngineConfig:
    """Default engine configuration, independent of environment settings."""
    return PropagationEngineConfig()


@pytest.fixture
def registry() -> RuleRegistry:
    """A private registry with the built-in rules."""
    return RuleRegistry.with_builtin_rules()


@pytest.fixture
def engine(config: PropagationEngineConfig, registry: RuleRegistry) -> PropagationEngine:
    """Engine with default config and a private registry."""
    return PropagationEngine(config=config, registry=registry)
