"""Per-call validation state.

A ValidationContext is created for every validate() call and never shared
between calls, so validators themselves hold only read-only rule definitions.
"""

import inspect
from typing import Any, Callable, Iterable, Optional, Union

from fluentcheck.validators.messages import MessageFormatter
from fluentcheck.validators.models import (
    DEFAULT_RULE_SET,
    WILDCARD_RULE_SET,
    CascadeMode,
    Severity,
    ValidationFailure,
)
from fluentcheck.validators.options import global_options


def positional_arity(func: Callable) -> int:
    """Number of positional parameters a user callback accepts.

    Lets predicates be written as `lambda value: ...` or
    `lambda instance, value: ...` without separate registration methods.
    """
    try:
        params = inspect.signature(func).parameters.values()
    except (TypeError, ValueError):
        return 1
    if any(p.kind == p.VAR_POSITIONAL for p in params):
        return 99
    return sum(1 for p in params if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD))


def parse_rule_sets(rule_sets: Union[str, Iterable[str], None]) -> frozenset[str]:
    """Normalise "A,B" / ["A", "B"] into a set of rule-set names."""
    if rule_sets is None:
        return frozenset()
    if isinstance(rule_sets, str):
        rule_sets = rule_sets.split(",")
    return frozenset(name.strip() for name in rule_sets if name and name.strip())


class RuleSetSelector:
    """Decides which rules a validate() call executes.

    No selection runs only untagged ("default") rules, "*" runs everything,
    otherwise a rule runs if it carries at least one requested name.
    """

    def __init__(self, rule_sets: Union[str, Iterable[str], None] = None):
        self.rule_sets = parse_rule_sets(rule_sets)

    def can_execute(self, rule_sets: Iterable[str]) -> bool:
        tags = set(rule_sets)
        if not self.rule_sets:
            return DEFAULT_RULE_SET in tags
        if WILDCARD_RULE_SET in self.rule_sets:
            return True
        return bool(self.rule_sets & tags)

    def executed(self) -> list[str]:
        if not self.rule_sets:
            return [DEFAULT_RULE_SET]
        return sorted(self.rule_sets)


class ValidationContext:
    """State for validating one instance.

    Child contexts (nested validators, collection elements) share the failure
    list, selector and root context data with their parent and extend the
    property path prefix.
    """

    def __init__(
        self,
        instance_to_validate: Any,
        selector: Optional[RuleSetSelector] = None,
        root_context_data: Optional[dict[str, Any]] = None,
        property_chain: str = "",
        failures: Optional[list[ValidationFailure]] = None,
        parent: Optional["ValidationContext"] = None,
    ):
        self.instance_to_validate = instance_to_validate
        self.selector = selector or RuleSetSelector()
        self.root_context_data = root_context_data if root_context_data is not None else {}
        self.property_chain = property_chain
        self.failures = failures if failures is not None else []
        self.parent = parent
        self.message_formatter = MessageFormatter()

        # Resolved by the validator currently executing its rules
        self.cascade_mode: CascadeMode = (
            parent.cascade_mode if parent is not None else global_options.default_rule_level_cascade_mode
        )

        # Set by the rule currently executing
        self.property_path = property_chain
        self.display_name = ""
        self.property_value: Any = None
        self.collection_index: Optional[int] = None

    @property
    def is_child_context(self) -> bool:
        return self.parent is not None

    def build_path(self, property_name: str) -> str:
        if not self.property_chain:
            return property_name
        if not property_name:
            return self.property_chain
        if property_name.startswith("["):
            return f"{self.property_chain}{property_name}"
        return f"{self.property_chain}.{property_name}"

    def enter_property(
        self,
        property_path: str,
        display_name: str,
        value: Any,
        collection_index: Optional[int] = None,
    ) -> None:
        """Point the context at the property a check is about to evaluate."""
        self.property_path = property_path
        self.display_name = display_name
        self.property_value = value
        self.collection_index = collection_index
        self.message_formatter.reset()
        self.message_formatter.append_property_name(display_name)
        self.message_formatter.append_value(value)
        self.message_formatter.append_argument("PropertyPath", property_path)
        if collection_index is not None:
            self.message_formatter.append_argument("CollectionIndex", collection_index)

    def child(self, instance: Any, property_path: Optional[str] = None) -> "ValidationContext":
        """Context for a nested validator running against `instance`."""
        return ValidationContext(
            instance,
            selector=self.selector,
            root_context_data=self.root_context_data,
            property_chain=self.property_path if property_path is None else property_path,
            failures=self.failures,
            parent=self,
        )

    def add_failure(
        self,
        error_message: Union[str, ValidationFailure],
        property_name: Optional[str] = None,
        error_code: Optional[str] = None,
        severity: Severity = Severity.ERROR,
    ) -> None:
        """Record a failure from a custom action.

        The message is rendered with the current formatter, so custom failures
        may use {PropertyName} and any appended arguments.
        """
        if isinstance(error_message, ValidationFailure):
            self.failures.append(error_message)
            return

        path = self.property_path
        if property_name is not None:
            path = self.build_path(property_name)
        self.failures.append(ValidationFailure(
            property_name=path,
            error_message=self.message_formatter.build_message(error_message),
            attempted_value=self.property_value,
            error_code=error_code,
            severity=severity,
            formatted_message_arguments=dict(self.message_formatter.placeholder_values),
        ))
