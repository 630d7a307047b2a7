"""Presence checks — distinguish a missing value from an empty one."""

from typing import Any

from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.context import ValidationContext


class NotNullCheck(PropertyCheck):
    """Fails only when the value is None; "" and [] pass."""

    @property
    def name(self) -> str:
        return "NotNullValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        return value is not None


class NullCheck(PropertyCheck):
    """Fails unless the value is None."""

    @property
    def name(self) -> str:
        return "NullValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        return value is None


class NotEmptyCheck(PropertyCheck):
    """Fails on None, blank strings, empty collections and default scalars (0, False)."""

    @property
    def name(self) -> str:
        return "NotEmptyValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        return not self._is_empty(value)


class EmptyCheck(PropertyCheck):
    """Passes only on None, blank strings, empty collections and default scalars."""

    @property
    def name(self) -> str:
        return "EmptyValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        return self._is_empty(value)
