"""Fluent rule builder.

Every call returns the builder so checks and options chain:

    self.rule_for("postcode").not_null().length(5, 10).with_message("Bad postcode")

Check methods append a new component to the rule; option methods
(with_message, when, unless, with_error_code, ...) configure the most
recently added component; rule methods (with_name, cascade, dependent_rules,
where) configure the rule as a whole.
"""

import re
from typing import TYPE_CHECKING, Any, Callable, Iterable, Pattern, Union

from fluentcheck.validators.accessors import PropertyAccessor, identity
from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.child_validators import (
    ChildValidatorAdaptor,
    ForEachCheck,
    PolymorphicValidator,
)
from fluentcheck.validators.comparison_checks import (
    EqualCheck,
    GreaterThanCheck,
    GreaterThanOrEqualCheck,
    InclusiveBetweenCheck,
    LessThanCheck,
    LessThanOrEqualCheck,
    NotEqualCheck,
)
from fluentcheck.validators.custom_checks import CustomCheck, PredicateCheck
from fluentcheck.validators.errors import ValidatorConfigurationError
from fluentcheck.validators.messages import check_template
from fluentcheck.validators.models import ApplyConditionTo, CascadeMode, Severity
from fluentcheck.validators.null_checks import EmptyCheck, NotEmptyCheck, NotNullCheck, NullCheck
from fluentcheck.validators.rules import CollectionPropertyRule, PropertyRule, make_condition
from fluentcheck.validators.string_checks import (
    ExactLengthCheck,
    LengthCheck,
    MaximumLengthCheck,
    MinimumLengthCheck,
    RegularExpressionCheck,
)

if TYPE_CHECKING:
    from fluentcheck.validators.engine import AbstractValidator


class RuleBuilder:
    """Accumulates checks and options onto one rule."""

    def __init__(self, rule: PropertyRule, validator: "AbstractValidator"):
        self.rule = rule
        self.validator = validator

    # ── Checks ──

    def set_check(self, check: PropertyCheck) -> "RuleBuilder":
        """Attach any PropertyCheck, including user-defined ones."""
        self.validator._ensure_mutable()
        self.rule.add_check(check)
        return self

    def not_null(self) -> "RuleBuilder":
        return self.set_check(NotNullCheck())

    def null(self) -> "RuleBuilder":
        return self.set_check(NullCheck())

    def not_empty(self) -> "RuleBuilder":
        return self.set_check(NotEmptyCheck())

    def empty(self) -> "RuleBuilder":
        return self.set_check(EmptyCheck())

    def equal(self, value_to_compare: Any) -> "RuleBuilder":
        """Equal to a constant, or to a callable / prop(...) read at validation time."""
        return self.set_check(EqualCheck(value_to_compare))

    def not_equal(self, value_to_compare: Any) -> "RuleBuilder":
        return self.set_check(NotEqualCheck(value_to_compare))

    def greater_than(self, value_to_compare: Any) -> "RuleBuilder":
        return self.set_check(GreaterThanCheck(value_to_compare))

    def greater_than_or_equal_to(self, value_to_compare: Any) -> "RuleBuilder":
        return self.set_check(GreaterThanOrEqualCheck(value_to_compare))

    def less_than(self, value_to_compare: Any) -> "RuleBuilder":
        return self.set_check(LessThanCheck(value_to_compare))

    def less_than_or_equal_to(self, value_to_compare: Any) -> "RuleBuilder":
        return self.set_check(LessThanOrEqualCheck(value_to_compare))

    def inclusive_between(self, from_value: Any, to_value: Any) -> "RuleBuilder":
        return self.set_check(InclusiveBetweenCheck(from_value, to_value))

    def length(self, min_length: int, max_length: int) -> "RuleBuilder":
        return self.set_check(LengthCheck(min_length, max_length))

    def exact_length(self, length: int) -> "RuleBuilder":
        return self.set_check(ExactLengthCheck(length))

    def minimum_length(self, min_length: int) -> "RuleBuilder":
        return self.set_check(MinimumLengthCheck(min_length))

    def maximum_length(self, max_length: int) -> "RuleBuilder":
        return self.set_check(MaximumLengthCheck(max_length))

    def matches(self, pattern: Union[str, Pattern[str]], flags: int = 0) -> "RuleBuilder":
        return self.set_check(RegularExpressionCheck(pattern, flags))

    def must(self, predicate: Callable[..., bool], message_arguments: Iterable[str] = ()) -> "RuleBuilder":
        """Custom predicate: `(value)`, `(instance, value)` or `(instance, value, context)`."""
        return self.set_check(PredicateCheck(predicate, message_arguments))

    def custom(self, action: Callable[[Any, Any], None], message_arguments: Iterable[str] = ()) -> "RuleBuilder":
        """Free-form action `(value, context)` recording failures via `context.add_failure`."""
        return self.set_check(CustomCheck(action, message_arguments))

    def set_validator(self, validator: Any) -> "RuleBuilder":
        """Validate the value with a child validator, a factory for one, or a PropertyCheck."""
        if isinstance(validator, PropertyCheck):
            return self.set_check(validator)
        return self.set_check(ChildValidatorAdaptor(validator))

    def child_rules(self, configure: Callable[[Any], None]) -> "RuleBuilder":
        """Build an inline child validator: `.child_rules(lambda v: v.rule_for("total").greater_than(0))`."""
        from fluentcheck.validators.engine import InlineValidator

        inline = InlineValidator()
        configure(inline)
        return self.set_check(ChildValidatorAdaptor(inline))

    def set_inheritance_validator(self, configure: Callable[[PolymorphicValidator], Any]) -> "RuleBuilder":
        """Dispatch to sub-validators registered per concrete type."""
        polymorphic = PolymorphicValidator()
        configure(polymorphic)
        polymorphic.freeze()
        return self.set_check(polymorphic)

    def for_each(self, configure: Callable[["RuleBuilder"], Any]) -> "RuleBuilder":
        """Attach element checks to a whole-collection rule.

        `configure` receives a builder for a per-element rule whose failures
        are reported at "<property>[<index>]".
        """
        item_rule = CollectionPropertyRule(PropertyAccessor(identity, name=""), self.rule.rule_sets)
        item_rule.display_name_override = self.rule.get_display_name()
        configure(RuleBuilder(item_rule, self.validator))
        return self.set_check(ForEachCheck(item_rule))

    # ── Component options ──

    def with_message(self, message: Union[str, Callable[..., str]]) -> "RuleBuilder":
        """Override the last check's message.

        A string is a template checked now against the placeholders the check
        can supply; a callable `(instance)` or `(instance, value)` returns the
        final text at failure time.
        """
        self.validator._ensure_mutable()
        component = self.rule.current_component
        if callable(message):
            component.message_factory = message
            component.message = None
            return self

        check_template(message, self.rule.available_placeholders(component), component.check.name)
        component.message = message
        component.message_factory = None
        return self

    def with_error_code(self, error_code: str) -> "RuleBuilder":
        self.validator._ensure_mutable()
        self.rule.current_component.error_code = error_code
        return self

    def with_severity(self, severity: Union[Severity, str]) -> "RuleBuilder":
        self.validator._ensure_mutable()
        self.rule.current_component.severity = Severity(severity)
        return self

    def with_state(self, state: Any) -> "RuleBuilder":
        """Attach custom state (or a callable `(instance)` producing it) to failures."""
        self.validator._ensure_mutable()
        self.rule.current_component.custom_state = state
        return self

    def when(
        self,
        predicate: Callable[..., bool],
        apply_condition_to: ApplyConditionTo = ApplyConditionTo.ALL_VALIDATORS,
    ) -> "RuleBuilder":
        """Run only when `predicate(instance)` holds.

        ALL_VALIDATORS gates the whole rule; CURRENT_VALIDATOR gates only the
        check declared immediately before this call.
        """
        return self._add_condition(make_condition(predicate), apply_condition_to)

    def unless(
        self,
        predicate: Callable[..., bool],
        apply_condition_to: ApplyConditionTo = ApplyConditionTo.ALL_VALIDATORS,
    ) -> "RuleBuilder":
        return self._add_condition(make_condition(predicate, negate=True), apply_condition_to)

    def _add_condition(self, condition, apply_condition_to: ApplyConditionTo) -> "RuleBuilder":
        self.validator._ensure_mutable()
        component = self.rule.current_component
        if ApplyConditionTo(apply_condition_to) == ApplyConditionTo.CURRENT_VALIDATOR:
            component.conditions.append(condition)
        else:
            self.rule.conditions.append(condition)
        return self

    # ── Rule options ──

    def with_name(self, display_name: str) -> "RuleBuilder":
        """Override the {PropertyName} shown in messages; the failure path is unchanged."""
        self.validator._ensure_mutable()
        self.rule.display_name_override = display_name
        return self

    def override_property_name(self, property_name: str) -> "RuleBuilder":
        """Change the path segment failures are reported under."""
        self.validator._ensure_mutable()
        if not re.fullmatch(r"[A-Za-z_][\w.\[\]]*", property_name):
            raise ValidatorConfigurationError(
                f"'{property_name}' is not a valid property name",
                details={"property": property_name},
            )
        self.rule.property_name = property_name
        return self

    def cascade(self, cascade_mode: Union[CascadeMode, str]) -> "RuleBuilder":
        self.validator._ensure_mutable()
        self.rule.cascade_mode = CascadeMode(cascade_mode)
        return self

    def where(self, predicate: Callable[[Any], bool]) -> "RuleBuilder":
        """Only validate collection elements for which `predicate(element)` holds."""
        self.validator._ensure_mutable()
        if not isinstance(self.rule, CollectionPropertyRule):
            raise ValidatorConfigurationError(
                "where() applies only to rule_for_each rules",
                details={"property": self.rule.property_name},
            )
        self.rule.filter = predicate
        return self

    def dependent_rules(self, register: Callable[[], Any]) -> "RuleBuilder":
        """Rules registered inside `register` run only if this rule produced no failure."""
        self.validator._register_dependent_rules(self.rule, register)
        return self
