"""Rules — ordered check chains bound to one property.

A PropertyRule owns its RuleComponents (a check plus its message, conditions,
error code and severity), its rule-set tags, whole-rule conditions and any
dependent rules. Rules are built during validator construction and only read
afterwards.
"""

from typing import Any, Callable, Iterable, Optional

from fluentcheck.validators.accessors import PropertyAccessor
from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.context import ValidationContext, positional_arity
from fluentcheck.validators.errors import ValidatorConfigurationError
from fluentcheck.validators.messages import COLLECTION_PLACEHOLDERS, STANDARD_PLACEHOLDERS
from fluentcheck.validators.models import (
    DEFAULT_RULE_SET,
    CascadeMode,
    Severity,
    ValidationFailure,
)
from fluentcheck.validators.options import global_options

Condition = Callable[[ValidationContext], bool]


def make_condition(predicate: Callable[..., bool], negate: bool = False) -> Condition:
    """Wrap `(instance)` or `(instance, context)` predicates as a context condition."""
    takes_context = positional_arity(predicate) >= 2

    def condition(context: ValidationContext) -> bool:
        if takes_context:
            outcome = bool(predicate(context.instance_to_validate, context))
        else:
            outcome = bool(predicate(context.instance_to_validate))
        return not outcome if negate else outcome

    return condition


class RuleComponent:
    """One check attached to a rule, with its message and per-check options.

    Attributes are set through RuleBuilder while the owning validator is
    being configured and must be treated as read-only once it has validated.
    """

    def __init__(self, check: PropertyCheck):
        self.check = check
        self.conditions: list[Condition] = []
        self.message: Optional[str] = None
        self.message_factory: Optional[Callable[..., str]] = None
        self.error_code: Optional[str] = None
        self.severity: Severity = Severity.ERROR
        self.custom_state: Any = None

    def applies_to(self, context: ValidationContext) -> bool:
        return all(condition(context) for condition in self.conditions)

    def message_template(self) -> str:
        """Explicit override, else the current catalog entry, else the check's default."""
        if self.message is not None:
            return self.message
        template = global_options.language_manager.get_string(self.check.name)
        if template is None:
            return self.check.default_message_template()
        return template

    def create_failure(self, context: ValidationContext, value: Any) -> ValidationFailure:
        if self.message_factory is not None:
            if positional_arity(self.message_factory) >= 2:
                message = self.message_factory(context.instance_to_validate, value)
            else:
                message = self.message_factory(context.instance_to_validate)
        else:
            message = context.message_formatter.build_message(self.message_template())

        custom_state = self.custom_state
        if callable(custom_state):
            custom_state = custom_state(context.instance_to_validate)

        return ValidationFailure(
            property_name=context.property_path,
            error_message=message,
            attempted_value=value,
            error_code=self.error_code or self.check.name,
            severity=self.severity,
            formatted_message_arguments=dict(context.message_formatter.placeholder_values),
            custom_state=custom_state,
        )


class PropertyRule:
    """A chain of checks against a single property value.

    Mutated only by RuleBuilder and AbstractValidator registration, both of
    which refuse once the validator is frozen. Code holding a rule from
    `AbstractValidator.rules` must not modify it.
    """

    is_collection = False

    def __init__(self, accessor: PropertyAccessor, rule_sets: Iterable[str] = (DEFAULT_RULE_SET,)):
        self.accessor = accessor
        self.property_name = accessor.property_name
        self.display_name_override: Optional[str] = None
        self.components: list[RuleComponent] = []
        self.conditions: list[Condition] = []
        self.rule_sets: set[str] = set(rule_sets)
        self.dependent_rules: list["PropertyRule"] = []
        self.cascade_mode: Optional[CascadeMode] = None

    @property
    def current_component(self) -> RuleComponent:
        if not self.components:
            raise ValidatorConfigurationError(
                f"Rule for '{self.property_name}' has no check to configure yet; "
                f"declare a check before with_message/when/unless",
                details={"property": self.property_name},
            )
        return self.components[-1]

    def get_display_name(self) -> str:
        if self.display_name_override is not None:
            return self.display_name_override
        return self.accessor.display_name

    def add_check(self, check: PropertyCheck) -> RuleComponent:
        component = RuleComponent(check)
        self.components.append(component)
        return component

    def available_placeholders(self, component: RuleComponent) -> set[str]:
        names = set(STANDARD_PLACEHOLDERS) | component.check.available_placeholders()
        if self.is_collection:
            names |= COLLECTION_PLACEHOLDERS
        return names

    def effective_cascade(self, default: CascadeMode) -> CascadeMode:
        return self.cascade_mode or default

    def conditions_hold(self, context: ValidationContext) -> bool:
        return all(condition(context) for condition in self.conditions)

    def validate(self, context: ValidationContext, default_cascade: CascadeMode) -> None:
        if not self.conditions_hold(context):
            return

        value = self.accessor(context.instance_to_validate)
        path = context.build_path(self.property_name)
        failed = self._run_components(context, value, path, None, self.effective_cascade(default_cascade))

        if not failed:
            self._run_dependent_rules(context, default_cascade)

    def _run_components(
        self,
        context: ValidationContext,
        value: Any,
        path: str,
        index: Optional[int],
        cascade: CascadeMode,
    ) -> bool:
        """Run the check chain for one value. Returns True if anything failed."""
        failed = False
        display_name = self.get_display_name()

        for component in self.components:
            if not component.applies_to(context):
                continue

            context.enter_property(path, display_name, value, index)
            before = len(context.failures)
            if not component.check.is_valid(context, value):
                context.failures.append(component.create_failure(context, value))

            if len(context.failures) > before:
                failed = True
                if cascade == CascadeMode.STOP:
                    break

        return failed

    def _run_dependent_rules(self, context: ValidationContext, default_cascade: CascadeMode) -> None:
        for rule in self.dependent_rules:
            if context.selector.can_execute(rule.rule_sets):
                rule.validate(context, default_cascade)


class CollectionPropertyRule(PropertyRule):
    """Runs its check chain against every element of a sequence property.

    Element paths embed the original index ("orders[2]"); elements rejected by
    the `where` filter are skipped but do not shift later indexes.
    """

    is_collection = True

    def __init__(self, accessor: PropertyAccessor, rule_sets: Iterable[str] = (DEFAULT_RULE_SET,)):
        super().__init__(accessor, rule_sets)
        self.filter: Optional[Callable[[Any], bool]] = None

    def validate(self, context: ValidationContext, default_cascade: CascadeMode) -> None:
        if not self.conditions_hold(context):
            return

        collection = self.accessor(context.instance_to_validate)
        self.validate_collection(context, collection, context.build_path(self.property_name), default_cascade)

    def validate_collection(
        self,
        context: ValidationContext,
        collection: Optional[Iterable[Any]],
        base_path: str,
        default_cascade: CascadeMode,
    ) -> bool:
        """Run element checks, then dependent rules if nothing failed, on an already-read collection.

        Callers check `conditions_hold` first. Returns True if any element failed.
        """
        failed = self.validate_elements(context, collection, base_path, self.effective_cascade(default_cascade))
        if not failed:
            self._run_dependent_rules(context, default_cascade)
        return failed

    def validate_elements(
        self,
        context: ValidationContext,
        collection: Optional[Iterable[Any]],
        base_path: str,
        cascade: CascadeMode,
    ) -> bool:
        if collection is None:
            return False

        failed = False
        for index, element in enumerate(collection):
            if self.filter is not None and not self.filter(element):
                continue
            if self._run_components(context, element, f"{base_path}[{index}]", index, cascade):
                failed = True
        return failed


class IncludeRule:
    """Runs another validator's rules against the same instance.

    Read-only after registration, like the property rules beside it.
    """

    def __init__(self, validator: Any, rule_sets: Iterable[str] = (DEFAULT_RULE_SET,)):
        self.validator = validator
        self.property_name = ""
        self.conditions: list[Condition] = []
        self.rule_sets: set[str] = set(rule_sets)

    def validate(self, context: ValidationContext, default_cascade: CascadeMode) -> None:
        if all(condition(context) for condition in self.conditions):
            self.validator.execute_rules(context)
