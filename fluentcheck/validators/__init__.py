"""Declarative object validation — rules, validators and results.

Usage:
    from fluentcheck.validators import AbstractValidator

    class OrderValidator(AbstractValidator):
        def __init__(self):
            super().__init__()
            self.rule_for("total").greater_than(0)

    result = OrderValidator().validate(order)
    if not result.is_valid:
        # Inspect result.errors
"""

from fluentcheck.validators.accessors import PropertyAccessor, prop
from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.builder import RuleBuilder
from fluentcheck.validators.child_validators import ChildValidatorAdaptor, PolymorphicValidator
from fluentcheck.validators.context import RuleSetSelector, ValidationContext
from fluentcheck.validators.engine import AbstractValidator, InlineValidator
from fluentcheck.validators.errors import (
    FluentCheckError,
    ValidationEngineError,
    ValidationException,
    ValidatorConfigurationError,
)
from fluentcheck.validators.messages import LanguageManager, MessageFormatter
from fluentcheck.validators.models import (
    ApplyConditionTo,
    CascadeMode,
    Severity,
    ValidationFailure,
    ValidationResult,
)
from fluentcheck.validators.options import ValidatorOptions, global_options

__all__ = [
    "AbstractValidator",
    "InlineValidator",
    "RuleBuilder",
    "PropertyCheck",
    "PropertyAccessor",
    "prop",
    "ChildValidatorAdaptor",
    "PolymorphicValidator",
    "ValidationContext",
    "RuleSetSelector",
    "LanguageManager",
    "MessageFormatter",
    "ValidatorOptions",
    "global_options",
    "ApplyConditionTo",
    "CascadeMode",
    "Severity",
    "ValidationFailure",
    "ValidationResult",
    "FluentCheckError",
    "ValidatorConfigurationError",
    "ValidationEngineError",
    "ValidationException",
]
