"""Length and pattern checks for strings and other sized values."""

import re
from typing import Any, Pattern, Union

from fluentcheck.validators.base import PropertyCheck
from fluentcheck.validators.context import ValidationContext
from fluentcheck.validators.errors import ValidatorConfigurationError


class LengthCheck(PropertyCheck):
    """min_length <= len(value) <= max_length. A max_length of -1 means unbounded.

    None passes; pair with a NotNull check to require a value.
    """

    message_arguments = ("MinLength", "MaxLength", "TotalLength")

    def __init__(self, min_length: int, max_length: int):
        for bound in (min_length, max_length):
            if not isinstance(bound, int) or isinstance(bound, bool):
                raise ValidatorConfigurationError(
                    f"Length bounds must be integers, got {bound!r}",
                    details={"check": self.name},
                )
        if min_length < 0:
            raise ValidatorConfigurationError(
                f"Minimum length {min_length} must not be negative",
                details={"check": self.name},
            )
        if max_length != -1 and max_length < min_length:
            raise ValidatorConfigurationError(
                f"Maximum length {max_length} is less than minimum length {min_length}",
                details={"check": self.name},
            )
        self.min_length = min_length
        self.max_length = max_length

    @property
    def name(self) -> str:
        return "LengthValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if value is None:
            return True

        length = self._length(value)
        context.message_formatter.append_argument("MinLength", self.min_length)
        context.message_formatter.append_argument("MaxLength", self.max_length)
        context.message_formatter.append_argument("TotalLength", length)

        if length < self.min_length:
            return False
        return self.max_length == -1 or length <= self.max_length


class MinimumLengthCheck(LengthCheck):

    def __init__(self, min_length: int):
        super().__init__(min_length, -1)

    @property
    def name(self) -> str:
        return "MinimumLengthValidator"


class MaximumLengthCheck(LengthCheck):

    def __init__(self, max_length: int):
        super().__init__(0, max_length)

    @property
    def name(self) -> str:
        return "MaximumLengthValidator"


class ExactLengthCheck(LengthCheck):

    def __init__(self, length: int):
        super().__init__(length, length)

    @property
    def name(self) -> str:
        return "ExactLengthValidator"


class RegularExpressionCheck(PropertyCheck):
    """Passes when the pattern is found anywhere in the value (re.search)."""

    message_arguments = ("RegularExpression",)

    def __init__(self, pattern: Union[str, Pattern[str]], flags: int = 0):
        if isinstance(pattern, str):
            try:
                pattern = re.compile(pattern, flags)
            except re.error as e:
                raise ValidatorConfigurationError(
                    f"Invalid regular expression {pattern!r}: {e}",
                    details={"check": "RegularExpressionValidator", "pattern": pattern},
                ) from e
        self.regex = pattern

    @property
    def name(self) -> str:
        return "RegularExpressionValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if value is None:
            return True
        context.message_formatter.append_argument("RegularExpression", self.regex.pattern)
        return self.regex.search(str(value)) is not None
