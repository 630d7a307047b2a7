"""Validation models — severity levels, cascade and condition scopes, failures and results.

Results are plain data: a validator run never raises for an invalid instance,
it returns a ValidationResult whose `is_valid` flag is the success indicator.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


DEFAULT_RULE_SET = "default"
WILDCARD_RULE_SET = "*"


class Severity(str, Enum):
    """Failure severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class CascadeMode(str, Enum):
    """How a rule behaves once one of its checks fails."""

    CONTINUE = "continue"  # Run every remaining check on the rule
    STOP = "stop"          # Halt the rule's check chain at the first failure


class ApplyConditionTo(str, Enum):
    """Which checks a `when`/`unless` condition attached to a rule gates."""

    ALL_VALIDATORS = "all_validators"        # The whole rule
    CURRENT_VALIDATOR = "current_validator"  # Only the check declared just before the condition


class ValidationFailure(BaseModel):
    """A single failed check."""

    property_name: str                 # Full path, e.g. "orders[0].total"
    error_message: str
    attempted_value: Any = None
    error_code: Optional[str] = None   # Defaults to the check name, e.g. "NotNullValidator"
    severity: Severity = Severity.ERROR
    formatted_message_arguments: dict[str, Any] = Field(default_factory=dict)
    custom_state: Any = None

    model_config = {"use_enum_values": True, "arbitrary_types_allowed": True}

    def __str__(self) -> str:
        return self.error_message


class ValidationResult(BaseModel):
    """The outcome of one validator run."""

    errors: list[ValidationFailure] = Field(default_factory=list)
    rule_sets_executed: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def to_dictionary(self) -> dict[str, list[str]]:
        """Group error messages by property path, in failure order."""
        grouped: dict[str, list[str]] = {}
        for failure in self.errors:
            grouped.setdefault(failure.property_name, []).append(failure.error_message)
        return grouped

    def to_string(self, separator: str = "\n") -> str:
        return separator.join(f.error_message for f in self.errors)

    def __str__(self) -> str:
        return self.to_string()
