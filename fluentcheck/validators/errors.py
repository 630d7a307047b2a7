"""Error types raised by the validation engine.

Invalid instances never raise; they produce failures in a ValidationResult.
The types here cover the three cases that do raise:

    # Misconfigured rule, raised while a validator is being constructed
    raise ValidatorConfigurationError("Unknown placeholder {Foo}", details={"check": "NotNullValidator"})

    # A predicate, accessor or action blew up during validate()
    raise ValidationEngineError("Predicate raised ZeroDivisionError", details={"property": "total"})

    # validate_and_throw() on an invalid instance
    raise ValidationException(result.errors)
"""

from typing import Any, Iterable, Optional

from fluentcheck.validators.models import Severity, ValidationFailure


class FluentCheckError(Exception):
    """Base class for all engine errors.

    Attributes:
        message: Error message
        details: Additional error context
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidatorConfigurationError(FluentCheckError, ValueError):
    """A rule was registered incorrectly.

    Raised at registration time, never from validate(). Examples:
        - A message template references a placeholder the check cannot supply
        - Length bounds are negative or inverted
        - A comparison value that cannot be ordered
        - Registering rules after the validator has been used
    """


class ValidationEngineError(FluentCheckError, RuntimeError):
    """User code invoked by a rule raised during validate().

    The original exception is chained as __cause__. The validator's rules are
    untouched; only the current call is aborted.
    """


class ValidationException(FluentCheckError):
    """Raised by validate_and_throw() when the instance is invalid.

    Carries the full, ordered failure list.
    """

    def __init__(self, errors: Iterable[ValidationFailure], message: Optional[str] = None) -> None:
        self.errors = list(errors)
        super().__init__(message or self._build_message(self.errors), details={"error_count": len(self.errors)})

    @staticmethod
    def _build_message(errors: list[ValidationFailure]) -> str:
        lines = [
            f" -- {e.property_name}: {e.error_message} Severity: {Severity(e.severity).value.capitalize()}"
            for e in errors
        ]
        return "Validation failed: \n" + "\n".join(lines)
