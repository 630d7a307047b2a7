"""Assertion helpers for testing validators.

    result = validate_for_test(DemoValidator(), Person(surname=None))
    result.should_have_validation_error_for("surname").with_error_message("Surname cannot be null.")
    result.should_not_have_validation_error_for("forename")
"""

from typing import Any, Iterable, Optional, Union

from fluentcheck.validators.engine import AbstractValidator
from fluentcheck.validators.models import Severity, ValidationFailure, ValidationResult


class ValidationTestException(AssertionError):
    """A validator did not produce the expected failures."""


class FailureAssertion:
    """The failures matching one property path; each `with_*` call narrows them further."""

    def __init__(self, property_path: str, failures: list[ValidationFailure]):
        self.property_path = property_path
        self.failures = failures

    def _narrow(self, matches: list[ValidationFailure], expectation: str, actual: Iterable[str]) -> "FailureAssertion":
        if not matches:
            raise ValidationTestException(
                f"Expected {expectation} for '{self.property_path}'. "
                f"Actual: {', '.join(repr(a) for a in actual) or 'none'}"
            )
        return FailureAssertion(self.property_path, matches)

    def with_error_message(self, expected_message: str) -> "FailureAssertion":
        matches = [f for f in self.failures if f.error_message == expected_message]
        return self._narrow(matches, f"an error message of '{expected_message}'", [f.error_message for f in self.failures])

    def with_message_containing(self, fragment: str) -> "FailureAssertion":
        matches = [f for f in self.failures if fragment in f.error_message]
        return self._narrow(matches, f"an error message containing '{fragment}'", [f.error_message for f in self.failures])

    def with_error_code(self, expected_code: str) -> "FailureAssertion":
        matches = [f for f in self.failures if f.error_code == expected_code]
        return self._narrow(matches, f"an error code of '{expected_code}'", [str(f.error_code) for f in self.failures])

    def with_severity(self, expected_severity: Union[Severity, str]) -> "FailureAssertion":
        expected = Severity(expected_severity)
        matches = [f for f in self.failures if Severity(f.severity) == expected]
        return self._narrow(matches, f"a severity of '{expected.value}'", [str(f.severity) for f in self.failures])

    def only(self) -> ValidationFailure:
        """The single remaining failure; raises if there are several."""
        if len(self.failures) != 1:
            raise ValidationTestException(
                f"Expected exactly one failure for '{self.property_path}', found {len(self.failures)}"
            )
        return self.failures[0]


class TestValidationResult:
    """A ValidationResult with assertion methods."""

    __test__ = False

    def __init__(self, result: ValidationResult):
        self.result = result

    @property
    def errors(self) -> list[ValidationFailure]:
        return self.result.errors

    @property
    def is_valid(self) -> bool:
        return self.result.is_valid

    def errors_for(self, property_path: str) -> list[ValidationFailure]:
        return [f for f in self.result.errors if f.property_name == property_path]

    def should_have_validation_error_for(self, property_path: str) -> FailureAssertion:
        failures = self.errors_for(property_path)
        if not failures:
            found = sorted({f.property_name for f in self.result.errors})
            raise ValidationTestException(
                f"Expected a validation error for property '{property_path}'. "
                f"Properties with errors: {found or 'none'}"
            )
        return FailureAssertion(property_path, failures)

    def should_not_have_validation_error_for(self, property_path: str) -> None:
        failures = self.errors_for(property_path)
        if failures:
            raise ValidationTestException(
                f"Expected no validation errors for property '{property_path}'. "
                f"Found: {', '.join(repr(f.error_message) for f in failures)}"
            )

    def should_not_have_any_validation_errors(self) -> None:
        if self.result.errors:
            raise ValidationTestException(
                "Expected no validation errors. Found: "
                + ", ".join(f"{f.property_name}: {f.error_message!r}" for f in self.result.errors)
            )


def validate_for_test(
    validator: AbstractValidator,
    instance: Any,
    include_rule_sets: Union[str, Iterable[str], None] = None,
    root_context_data: Optional[dict[str, Any]] = None,
) -> TestValidationResult:
    """Validate and wrap the result for assertions."""
    return TestValidationResult(validator.validate(instance, include_rule_sets, root_context_data))
