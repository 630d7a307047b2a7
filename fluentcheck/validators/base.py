"""Base check — abstract class implementing the Strategy Pattern.

Each check is a standalone, independently testable unit bound to one
property by a rule. New checks are added without modifying the engine.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sized
from typing import Any

from fluentcheck.validators.context import ValidationContext
from fluentcheck.validators.messages import DEFAULT_MESSAGES


class PropertyCheck(ABC):
    """Abstract base for all property checks.

    Contract:
        - is_valid() is deterministic for a given instance and value
        - is_valid() returns False to produce the rule's standard failure
        - checks that record their own failures (custom actions, child
          validators) add them to the context and return True
        - checks hold no per-call state; anything call-specific goes on
          the context or its message formatter
    """

    # Placeholders this check appends to the formatter, beyond the standard ones
    message_arguments: tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Catalog key and default error code, e.g. "NotNullValidator"."""
        ...

    @abstractmethod
    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        """Evaluate the check against a property value.

        Args:
            context: Context pointing at the property being validated
            value: The property value

        Returns:
            True if the value passes
        """
        ...

    def default_message_template(self) -> str:
        """Fallback template when the catalog has no entry for this check."""
        return DEFAULT_MESSAGES.get(self.name, "'{PropertyName}' is not valid.")

    def available_placeholders(self) -> set[str]:
        return set(self.message_arguments)

    # ── Helper Methods ──

    @staticmethod
    def _is_empty(value: Any) -> bool:
        """None, blank strings, empty collections and default scalars count as empty."""
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        if isinstance(value, (Sized, Mapping)):
            return len(value) == 0
        if isinstance(value, (bool, int, float, complex)):
            return value == type(value)()
        return False

    @staticmethod
    def _length(value: Any) -> int:
        """Length of a string or collection."""
        return len(value)
