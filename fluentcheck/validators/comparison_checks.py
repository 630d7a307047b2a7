"""Comparison checks — equality and ordering against a constant or another property.

A comparison value given as a callable (or a `prop(...)` reference) is read
from the instance at validation time, so cross-field rules such as password
confirmation see the current value of the other field.
"""

import operator
from typing import Any, Callable

from fluentcheck.validators.accessors import PropertyAccessor
from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.context import ValidationContext
from fluentcheck.validators.errors import ValidatorConfigurationError


def _is_orderable(value: Any) -> bool:
    if value is None:
        return False
    return type(value).__lt__ is not object.__lt__


class ComparisonCheck(PropertyCheck):
    """Shared plumbing for checks that compare against a value or property."""

    message_arguments = ("ComparisonValue", "ComparisonProperty")

    def __init__(self, value_to_compare: Any):
        self._is_dynamic = callable(value_to_compare)
        self.value_to_compare = value_to_compare
        self.comparison_property = ""
        if isinstance(value_to_compare, PropertyAccessor):
            self.comparison_property = value_to_compare.display_name

    def _resolve(self, context: ValidationContext) -> Any:
        if self._is_dynamic:
            return self.value_to_compare(context.instance_to_validate)
        return self.value_to_compare

    def _append_arguments(self, context: ValidationContext, comparison_value: Any) -> None:
        context.message_formatter.append_argument("ComparisonValue", comparison_value)
        context.message_formatter.append_argument("ComparisonProperty", self.comparison_property)


class EqualCheck(ComparisonCheck):

    @property
    def name(self) -> str:
        return "EqualValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        comparison_value = self._resolve(context)
        self._append_arguments(context, comparison_value)
        return value == comparison_value


class NotEqualCheck(ComparisonCheck):

    @property
    def name(self) -> str:
        return "NotEqualValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        comparison_value = self._resolve(context)
        self._append_arguments(context, comparison_value)
        return value != comparison_value


class OrderingCheck(ComparisonCheck):
    """Ordering comparison. None values pass; pair with a NotNull check to require one."""

    _name = ""
    _operator: Callable[[Any, Any], bool] = operator.gt

    def __init__(self, value_to_compare: Any):
        if not callable(value_to_compare) and not _is_orderable(value_to_compare):
            raise ValidatorConfigurationError(
                f"{self._name} requires an orderable comparison value, "
                f"got {type(value_to_compare).__name__}",
                details={"check": self._name, "value": repr(value_to_compare)},
            )
        super().__init__(value_to_compare)

    @property
    def name(self) -> str:
        return self._name

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if value is None:
            return True
        comparison_value = self._resolve(context)
        self._append_arguments(context, comparison_value)
        if comparison_value is None:
            return True
        return type(self)._operator(value, comparison_value)


class GreaterThanCheck(OrderingCheck):
    _name = "GreaterThanValidator"
    _operator = operator.gt


class GreaterThanOrEqualCheck(OrderingCheck):
    _name = "GreaterThanOrEqualValidator"
    _operator = operator.ge


class LessThanCheck(OrderingCheck):
    _name = "LessThanValidator"
    _operator = operator.lt


class LessThanOrEqualCheck(OrderingCheck):
    _name = "LessThanOrEqualValidator"
    _operator = operator.le


class InclusiveBetweenCheck(PropertyCheck):
    """from_value <= value <= to_value."""

    message_arguments = ("From", "To")

    def __init__(self, from_value: Any, to_value: Any):
        if not (_is_orderable(from_value) and _is_orderable(to_value)):
            raise ValidatorConfigurationError(
                "InclusiveBetweenValidator requires orderable bounds",
                details={"from": repr(from_value), "to": repr(to_value)},
            )
        if to_value < from_value:
            raise ValidatorConfigurationError(
                f"Upper bound {to_value!r} is less than lower bound {from_value!r}",
                details={"from": repr(from_value), "to": repr(to_value)},
            )
        self.from_value = from_value
        self.to_value = to_value

    @property
    def name(self) -> str:
        return "InclusiveBetweenValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if value is None:
            return True
        context.message_formatter.append_argument("From", self.from_value)
        context.message_formatter.append_argument("To", self.to_value)
        return self.from_value <= value <= self.to_value
