"""Nested validation — child validators, polymorphic dispatch and per-element rules.

These checks never produce a failure of their own: the nested rules add
failures to the shared context under the parent's property path
("contact.name", "orders[0].total").
"""

from typing import Any, Callable, Optional, Union

import structlog

from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.context import ValidationContext, positional_arity
from fluentcheck.validators.errors import ValidatorConfigurationError
from fluentcheck.validators.rules import CollectionPropertyRule

logger = structlog.get_logger()

# A validator instance, or a factory returning one: `()` or `(instance, value)`
ValidatorSource = Union[Any, Callable[..., Any]]


def is_validator(obj: Any) -> bool:
    return not isinstance(obj, type) and callable(getattr(obj, "execute_rules", None))


def _check_source(source: ValidatorSource) -> None:
    if not is_validator(source) and not callable(source):
        raise ValidatorConfigurationError(
            f"Expected a validator or a factory returning one, got {type(source).__name__}",
        )


class ChildValidatorAdaptor(PropertyCheck):
    """Runs a complex property (or collection element) through another validator.

    None values are skipped; pair with a NotNull check to require the child.
    """

    def __init__(self, source: ValidatorSource):
        _check_source(source)
        self.source = source

    @property
    def name(self) -> str:
        return "ChildValidatorAdaptor"

    def get_validator(self, context: ValidationContext, value: Any) -> Optional[Any]:
        return _materialize(self.source, context, value)

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if value is None:
            return True

        validator = self.get_validator(context, value)
        if validator is None:
            return True

        validator.execute_rules(context.child(value))
        return True


class PolymorphicValidator(ChildValidatorAdaptor):
    """Dispatches to a sub-validator chosen by the value's exact runtime type.

    Registering never builds or runs anything: factories are called only when
    a value of their type is validated. Values of an unregistered type
    contribute no failures.

    Usage:
        rule.set_inheritance_validator(lambda v: v
            .add(Organisation, OrganisationValidator())
            .add(ContactPerson, lambda: ContactPersonValidator()))
    """

    def __init__(self):
        self._registry: dict[type, ValidatorSource] = {}
        self._frozen = False

    @property
    def name(self) -> str:
        return "PolymorphicValidator"

    def add(self, subtype: type, source: ValidatorSource) -> "PolymorphicValidator":
        if self._frozen:
            raise ValidatorConfigurationError(
                f"Cannot register {getattr(subtype, '__name__', subtype)} after the polymorphic registry is in use",
            )
        if not isinstance(subtype, type):
            raise ValidatorConfigurationError(
                f"Polymorphic registrations are keyed by type, got {subtype!r}",
            )
        _check_source(source)
        self._registry[subtype] = source
        return self

    @property
    def registered_types(self) -> list[type]:
        return list(self._registry)

    def freeze(self) -> None:
        self._frozen = True

    def get_validator(self, context: ValidationContext, value: Any) -> Optional[Any]:
        self._frozen = True
        source = self._registry.get(type(value))
        if source is None:
            logger.debug(
                "polymorphic_type_unregistered",
                property=context.property_path,
                value_type=type(value).__name__,
            )
            return None
        return _materialize(source, context, value)


class ForEachCheck(PropertyCheck):
    """Applies an element rule to each item of the collection held by the property."""

    def __init__(self, item_rule: CollectionPropertyRule):
        self.item_rule = item_rule

    @property
    def name(self) -> str:
        return "ForEachValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if self.item_rule.conditions_hold(context):
            self.item_rule.validate_collection(context, value, context.property_path, context.cascade_mode)
        return True


def _materialize(source: ValidatorSource, context: ValidationContext, value: Any) -> Any:
    if is_validator(source):
        return source
    if positional_arity(source) >= 2:
        return source(context.instance_to_validate, value)
    return source()
