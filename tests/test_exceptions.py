"""Tests for Solvechain exception hierarchy."""

import pytest

from solvechain.exceptions import (
    ConfigurationError,
    RuleRegistrationError,
    SolvechainError,
    ValidationError,
)


class TestSolvechainError:
    """Tests for the base SolvechainError class."""

    def test_error_message(self):
        """Should store and return message."""
        error = SolvechainError("Something went wrong")
        assert error.message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_to_dict(self):
        """Should convert to API-friendly dict."""
        assert SolvechainError("boom").to_dict() == {
            "error": {
                "code": "solvechain_error",
                "message": "boom",
            }
        }

    def test_inheritance(self):
        """All custom exceptions should inherit from SolvechainError."""
        exceptions = [
            ValidationError("field", "invalid"),
            ConfigurationError("bad"),
            RuleRegistrationError("precludes", "failed"),
        ]
        for exc in exceptions:
            assert isinstance(exc, SolvechainError)
            assert isinstance(exc, Exception)

    def test_catch_all(self):
        """Should be catchable as SolvechainError."""
        with pytest.raises(SolvechainError):
            raise ConfigurationError("max_iterations must be positive")


class TestValidationError:
    """Tests for ValidationError."""

    def test_field_and_message(self):
        """Should store field and prefix the message with it."""
        error = ValidationError("new_state", "fact node 'a' cannot be set to unknown")
        assert error.field == "new_state"
        assert error.message.startswith("new_state: ")
        assert error.code == "validation_error"

    def test_to_dict_includes_field(self):
        """Should include field in dict representation."""
        result = ValidationError("initial_states[a]", "bad").to_dict()
        assert result["error"]["code"] == "validation_error"
        assert result["error"]["field"] == "initial_states[a]"


class TestConfigurationError:
    """Tests for ConfigurationError."""

    def test_error_code(self):
        """Should have configuration_error code."""
        assert ConfigurationError("bad").code == "configuration_error"


class TestRuleRegistrationError:
    """Tests for RuleRegistrationError."""

    def test_relation_type(self):
        """Should store the relation type, which may be missing."""
        assert RuleRegistrationError("precludes", "x").relation_type == "precludes"
        assert RuleRegistrationError(None, "x").relation_type is None

    def test_to_dict_includes_relation_type(self):
        """Should include relation_type in dict representation."""
        result = RuleRegistrationError("precludes", "failed").to_dict()
        assert result["error"]["code"] == "rule_registration_error"
        assert result["error"]["relation_type"] == "precludes"
        assert result["error"]["message"] == "failed"
