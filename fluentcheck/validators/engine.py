"""Validation Engine — the validator base class that owns and runs rules.

Subclasses register rules in their constructor; the rule list is frozen on
the first validate() call, so one instance can be shared freely.

Usage:
    class PersonValidator(AbstractValidator):
        validated_type = Person

        def __init__(self):
            super().__init__()
            self.rule_for("surname").not_null().with_message("Surname cannot be null.")
            self.rule_set("Names", lambda: self.rule_for("forename").not_empty())

    result = PersonValidator().validate(person)
    if not result.is_valid:
        # Inspect result.errors
"""

import dataclasses
import time
from typing import Any, Callable, Iterable, Optional, Union

import structlog

from fluentcheck.validators.accessors import PropertyAccessor
from fluentcheck.validators.builder import RuleBuilder
from fluentcheck.validators.child_validators import is_validator
from fluentcheck.validators.context import RuleSetSelector, ValidationContext, parse_rule_sets
from fluentcheck.validators.errors import (
    FluentCheckError,
    ValidationEngineError,
    ValidationException,
    ValidatorConfigurationError,
)
from fluentcheck.validators.models import (
    DEFAULT_RULE_SET,
    CascadeMode,
    ValidationFailure,
    ValidationResult,
)
from fluentcheck.validators.options import global_options
from fluentcheck.validators.rules import (
    CollectionPropertyRule,
    Condition,
    IncludeRule,
    PropertyRule,
    make_condition,
)

logger = structlog.get_logger()

Accessor = Union[str, Callable[[Any], Any], PropertyAccessor]


def _declared_fields(model_type: Optional[type]) -> Optional[set[str]]:
    """Field names of a pydantic model or dataclass, or None if unknown."""
    if model_type is None:
        return None
    fields = getattr(model_type, "model_fields", None)
    if isinstance(fields, dict):
        return set(fields)
    if dataclasses.is_dataclass(model_type):
        return {f.name for f in dataclasses.fields(model_type)}
    return None


class ConditionBuilder:
    """Returned by top-level when/unless so an `otherwise` block can follow."""

    def __init__(self, validator: "AbstractValidator", inverse: Condition):
        self._validator = validator
        self._inverse = inverse

    def otherwise(self, register: Callable[[], Any]) -> None:
        """Rules registered inside `register` run when the original condition is false."""
        self._validator._register_under_condition(self._inverse, register)


class AbstractValidator:
    """Base class for validators of one data type.

    Design principles:
        - Deterministic: same instance → same failures, same order
        - Immutable after first use: safe to share across calls and threads
        - Invalid instances never raise; faults in user callbacks always do
        - Observable: every run is logged with timing
    """

    # Optional: enables property checks at registration and can_validate_instances_of()
    validated_type: Optional[type] = None

    # Optional: overrides global_options.default_rule_level_cascade_mode for this validator
    rule_level_cascade_mode: Optional[CascadeMode] = None

    def __init__(self):
        self._rules: list[Any] = []
        self._registration_targets: list[list[Any]] = [self._rules]
        self._condition_stack: list[Condition] = []
        self._rule_set_stack: list[frozenset[str]] = []
        self._frozen = False

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def rules(self) -> tuple:
        """Snapshot of the top-level rules in registration order.

        The tuple is detached from the validator, but the rules inside are
        shared and must not be modified.
        """
        return tuple(self._rules)

    def can_validate_instances_of(self, model_type: type) -> bool:
        return self.validated_type is None or issubclass(model_type, self.validated_type)

    # ── Registration ──

    def rule_for(self, accessor: Accessor, name: Optional[str] = None) -> RuleBuilder:
        """Start a rule for one property ("surname", "contact.name", or a callable with name=)."""
        rule = PropertyRule(self._make_accessor(accessor, name), self._current_rule_sets())
        return RuleBuilder(self._add_rule(rule), self)

    def rule_for_each(self, accessor: Accessor, name: Optional[str] = None) -> RuleBuilder:
        """Start a rule applied to every element of a sequence property."""
        rule = CollectionPropertyRule(self._make_accessor(accessor, name), self._current_rule_sets())
        return RuleBuilder(self._add_rule(rule), self)

    def rule_set(self, rule_set_names: Union[str, Iterable[str]], register: Callable[[], Any]) -> None:
        """Tag every rule registered inside `register` with the given rule set(s) ("A" or "A,B")."""
        names = parse_rule_sets(rule_set_names)
        if not names:
            raise ValidatorConfigurationError("rule_set() requires at least one rule set name")
        self._rule_set_stack.append(names)
        try:
            register()
        finally:
            self._rule_set_stack.pop()

    def when(self, predicate: Callable[..., bool], register: Callable[[], Any]) -> ConditionBuilder:
        """Rules registered inside `register` run only when `predicate(instance)` holds."""
        self._register_under_condition(make_condition(predicate), register)
        return ConditionBuilder(self, make_condition(predicate, negate=True))

    def unless(self, predicate: Callable[..., bool], register: Callable[[], Any]) -> ConditionBuilder:
        """Rules registered inside `register` run only when `predicate(instance)` is false."""
        self._register_under_condition(make_condition(predicate, negate=True), register)
        return ConditionBuilder(self, make_condition(predicate))

    def include(self, validator: "AbstractValidator") -> None:
        """Run another validator for the same type as if its rules were declared here."""
        if not is_validator(validator):
            raise ValidatorConfigurationError(
                f"include() expects a validator, got {type(validator).__name__}",
            )
        self._add_rule(IncludeRule(validator, self._current_rule_sets()))

    def _add_rule(self, rule: Any) -> Any:
        self._ensure_mutable()
        rule.conditions.extend(self._condition_stack)
        self._registration_targets[-1].append(rule)
        return rule

    def _register_under_condition(self, condition: Condition, register: Callable[[], Any]) -> None:
        self._condition_stack.append(condition)
        try:
            register()
        finally:
            self._condition_stack.pop()

    def _register_dependent_rules(self, parent: PropertyRule, register: Callable[[], Any]) -> None:
        self._ensure_mutable()
        self._registration_targets.append(parent.dependent_rules)
        try:
            register()
        finally:
            self._registration_targets.pop()

    def _current_rule_sets(self) -> set[str]:
        if self._rule_set_stack:
            return set(self._rule_set_stack[-1])
        return {DEFAULT_RULE_SET}

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise ValidatorConfigurationError(
                f"Cannot configure {self.name} after it has been used to validate",
                details={"validator": self.name},
            )

    def _make_accessor(self, accessor: Accessor, name: Optional[str]) -> PropertyAccessor:
        if isinstance(accessor, PropertyAccessor):
            return accessor

        property_accessor = PropertyAccessor(accessor, name)
        fields = _declared_fields(self.validated_type)
        if property_accessor.path and fields is not None:
            root = property_accessor.path.split(".", 1)[0]
            if root not in fields and not hasattr(self.validated_type, root):
                raise ValidatorConfigurationError(
                    f"{self.validated_type.__name__} has no property '{root}'",
                    details={"validator": self.name, "property": property_accessor.path},
                )
        return property_accessor

    # ── Hooks ──

    def pre_validate(self, context: ValidationContext, result: ValidationResult) -> bool:
        """Runs before any rule. Return False to skip every rule.

        The default rejects a None instance with a single failure.
        """
        if context.instance_to_validate is None:
            result.errors.append(ValidationFailure(
                property_name="",
                error_message="A non-null instance must be supplied for validation.",
                error_code="NullInstance",
            ))
            return False
        return True

    def raise_validation_exception(self, context: ValidationContext, result: ValidationResult) -> None:
        """Called by validate_and_throw() for an invalid result."""
        raise ValidationException(result.errors)

    # ── Execution ──

    def validate(
        self,
        instance: Any,
        include_rule_sets: Union[str, Iterable[str], None] = None,
        root_context_data: Optional[dict[str, Any]] = None,
    ) -> ValidationResult:
        """Run every applicable rule against the instance.

        Args:
            instance: Object to validate, or a prepared ValidationContext
            include_rule_sets: Rule sets to run ("A", ["A", "B"], "*"); default rules only if None
            root_context_data: Arbitrary data made available to custom checks

        Returns:
            ValidationResult with failures in rule registration order
        """
        return self._validate_context(self._build_context(instance, include_rule_sets, root_context_data))

    def validate_and_throw(
        self,
        instance: Any,
        include_rule_sets: Union[str, Iterable[str], None] = None,
        root_context_data: Optional[dict[str, Any]] = None,
    ) -> ValidationResult:
        """Like validate(), but an invalid result goes through raise_validation_exception()."""
        context = self._build_context(instance, include_rule_sets, root_context_data)
        result = self._validate_context(context)
        if not result.is_valid:
            self.raise_validation_exception(context, result)
        return result

    def execute_rules(self, context: ValidationContext) -> None:
        """Run this validator's rules into an existing context (used for nested validation)."""
        self._frozen = True
        cascade = self.rule_level_cascade_mode or global_options.default_rule_level_cascade_mode

        # Included validators share the context, so restore the caller's cascade afterwards
        outer_cascade = context.cascade_mode
        context.cascade_mode = cascade
        try:
            for rule in self._rules:
                if not context.selector.can_execute(rule.rule_sets):
                    continue
                self._execute_rule(rule, context, cascade)
        finally:
            context.cascade_mode = outer_cascade

    def _execute_rule(self, rule: Any, context: ValidationContext, cascade: CascadeMode) -> None:
        try:
            rule.validate(context, cascade)
        except FluentCheckError:
            raise
        except Exception as e:
            path = context.build_path(rule.property_name)
            logger.error(
                "validation_engine_fault",
                validator=self.name,
                property=path,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise ValidationEngineError(
                f"{self.name}: rule for '{path}' raised {type(e).__name__}: {e}",
                details={"validator": self.name, "property": path},
            ) from e

    def _build_context(
        self,
        instance: Any,
        include_rule_sets: Union[str, Iterable[str], None],
        root_context_data: Optional[dict[str, Any]],
    ) -> ValidationContext:
        if isinstance(instance, ValidationContext):
            return instance
        return ValidationContext(
            instance,
            selector=RuleSetSelector(include_rule_sets),
            root_context_data=root_context_data,
        )

    def _validate_context(self, context: ValidationContext) -> ValidationResult:
        self._frozen = True
        start_time = time.perf_counter()
        result = ValidationResult(rule_sets_executed=context.selector.executed())

        if not self.pre_validate(context, result):
            logger.debug(
                "validation_short_circuited",
                validator=self.name,
                total_errors=len(result.errors),
            )
            return result

        self.execute_rules(context)
        result.errors.extend(context.failures)

        logger.debug(
            "validation_complete",
            validator=self.name,
            is_valid=result.is_valid,
            total_errors=len(result.errors),
            rule_sets=result.rule_sets_executed,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return result


class InlineValidator(AbstractValidator):
    """A validator configured from outside, used by `child_rules`."""
