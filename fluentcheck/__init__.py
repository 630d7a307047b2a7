"""fluentcheck — declarative, fluent object validation.

Validators are built once from chained rules and reused for every instance:

    from fluentcheck import AbstractValidator

    class PersonValidator(AbstractValidator):
        def __init__(self):
            super().__init__()
            self.rule_for("surname").not_null()

    PersonValidator().validate(person).is_valid
"""

from fluentcheck.validators import (
    AbstractValidator,
    ApplyConditionTo,
    CascadeMode,
    Severity,
    ValidationException,
    ValidationResult,
    global_options,
    prop,
)

__version__ = "1.0.0"

__all__ = [
    "AbstractValidator",
    "ApplyConditionTo",
    "CascadeMode",
    "Severity",
    "ValidationException",
    "ValidationResult",
    "global_options",
    "prop",
]
