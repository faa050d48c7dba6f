"""Configuration management for Solvechain."""

import logging
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Solvechain configuration loaded from environment variables.

    All settings can be overridden via environment variables with
    the SOLVECHAIN_ prefix. For example:
        SOLVECHAIN_PROPAGATION_MAX_ITERATIONS=250
        SOLVECHAIN_LOG_FORMAT=text

    The propagation_* fields are the defaults an engine picks up when it
    is constructed without an explicit PropagationEngineConfig.
    """

    # Propagation engine
    propagation_max_iterations: int = Field(
        default=100,
        ge=1,
        description="Maximum full passes over the edge list before a run is reported as exhausted",
    )
    propagation_confidence_decay: float = Field(
        default=1.0,
        gt=0.0,
        le=1.0,
        description=(
            "Multiplier applied to every confidence a rule carries from source to target. "
            "1.0 disables decay."
        ),
    )
    propagation_min_confidence: float = Field(
        default=0.0,
        ge=0.0,
        le=100.0,
        description="Sources with confidence below this floor propagate nothing",
    )
    propagation_enable_conflict_detection: bool = Field(
        default=True,
        description="Accept Conflict outcomes from rules and record them",
    )
    propagation_enable_cycle_detection: bool = Field(
        default=True,
        description="Report cycles over Depends/Causes edges on every full run",
    )
    propagation_enforce_node_type_states: bool = Field(
        default=True,
        description="Reject explicit state assignments the node's type does not allow",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )

    model_config = {
        "env_prefix": "SOLVECHAIN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }

    @model_validator(mode="after")
    def _warn_if_floor_unreachable(self) -> "Settings":
        """Warn when decay alone can push every second-hop value under the floor."""
        if self.propagation_min_confidence > 100.0 * self.propagation_confidence_decay**2:
            logger.warning(
                "propagation_min_confidence=%.1f is above what a fully confident source "
                "can reach after two hops with decay=%.2f; propagation will stop after one hop",
                self.propagation_min_confidence,
                self.propagation_confidence_decay,
            )
        return self


# Global settings instance
settings = Settings()
