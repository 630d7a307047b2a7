"""User-defined checks: predicates and free-form actions."""

from typing import Any, Callable, Iterable

from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.context import ValidationContext, positional_arity


class PredicateCheck(PropertyCheck):
    """Passes when the predicate returns truthy.

    The predicate may take `(value)`, `(instance, value)` or
    `(instance, value, context)`. The three-argument form can append message
    arguments through `context.message_formatter`; name them in
    `message_arguments` so templates referencing them are accepted.
    """

    def __init__(self, predicate: Callable[..., bool], message_arguments: Iterable[str] = ()):
        self.predicate = predicate
        self.message_arguments = tuple(message_arguments)
        self._arity = positional_arity(predicate)

    @property
    def name(self) -> str:
        return "PredicateValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if self._arity >= 3:
            return bool(self.predicate(context.instance_to_validate, value, context))
        if self._arity == 2:
            return bool(self.predicate(context.instance_to_validate, value))
        return bool(self.predicate(value))


class CustomCheck(PropertyCheck):
    """Runs an action `(value, context)` that records failures with `context.add_failure`."""

    def __init__(self, action: Callable[[Any, ValidationContext], None], message_arguments: Iterable[str] = ()):
        self.action = action
        self.message_arguments = tuple(message_arguments)

    @property
    def name(self) -> str:
        return "CustomValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        self.action(value, context)
        return True
