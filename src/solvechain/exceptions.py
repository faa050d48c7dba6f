"""Solvechain exception hierarchy.

Provides structured exceptions for error handling throughout the codebase.
All exceptions inherit from SolvechainError for easy catching.

The propagation algorithm itself never raises: dangling edges are skipped,
non-convergence is reported on the result and logical conflicts are data.
These exceptions cover the boundaries around it (configuration, explicit
state assignments and rule registration).
"""

from __future__ import annotations


class SolvechainError(Exception):
    """Base exception for all Solvechain errors.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code for API responses.
    """

    code: str = "solvechain_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
            }
        }


class ValidationError(SolvechainError):
    """Invalid input provided.

    Raised when an explicit state assignment is not allowed for the
    node's type.

    Attributes:
        field: The field that failed validation.
        message: Description of the validation failure.
    """

    code: str = "validation_error"

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(f"{field}: {message}")

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "field": self.field,
                "message": self.message,
            }
        }


class ConfigurationError(SolvechainError):
    """Configuration error.

    Raised when engine configuration is invalid (e.g. max_iterations <= 0).
    Invalid values are rejected, never clamped.
    """

    code: str = "configuration_error"


class RuleRegistrationError(SolvechainError):
    """Rule registration failed.

    Attributes:
        relation_type: The relation type the rule claimed, if any.
    """

    code: str = "rule_registration_error"

    def __init__(self, relation_type: str | None, message: str) -> None:
        self.relation_type = relation_type
        super().__init__(message)

    def to_dict(self) -> dict[str, object]:
        """Convert exception to API-friendly dictionary."""
        return {
            "error": {
                "code": self.code,
                "relation_type": self.relation_type,
                "message": self.message,
            }
        }
