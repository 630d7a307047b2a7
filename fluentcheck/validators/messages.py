"""Message catalog and template formatting.

Templates use named placeholders in braces, e.g. "'{PropertyName}' must not be
empty.". A placeholder may carry a format spec after a colon: "{Total:.2f}".
"""

import re
from typing import Any, Iterable, Optional

from fluentcheck.validators.errors import ValidatorConfigurationError

PLACEHOLDER_PATTERN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)(?::([^}]*))?\}")

# Supplied by the engine for every check
STANDARD_PLACEHOLDERS = frozenset({"PropertyName", "PropertyValue", "PropertyPath"})

# Supplied only while validating collection elements
COLLECTION_PLACEHOLDERS = frozenset({"CollectionIndex"})

DEFAULT_CULTURE = "en"

# Default English templates, keyed by check name
DEFAULT_MESSAGES = {
    "NotNullValidator": "'{PropertyName}' must not be empty.",
    "NullValidator": "'{PropertyName}' must be empty.",
    "NotEmptyValidator": "'{PropertyName}' must not be empty.",
    "EmptyValidator": "'{PropertyName}' must be empty.",
    "EqualValidator": "'{PropertyName}' must be equal to '{ComparisonValue}'.",
    "NotEqualValidator": "'{PropertyName}' must not be equal to '{ComparisonValue}'.",
    "GreaterThanValidator": "'{PropertyName}' must be greater than '{ComparisonValue}'.",
    "GreaterThanOrEqualValidator": "'{PropertyName}' must be greater than or equal to '{ComparisonValue}'.",
    "LessThanValidator": "'{PropertyName}' must be less than '{ComparisonValue}'.",
    "LessThanOrEqualValidator": "'{PropertyName}' must be less than or equal to '{ComparisonValue}'.",
    "InclusiveBetweenValidator": "'{PropertyName}' must be between {From} and {To}. You entered {PropertyValue}.",
    "LengthValidator": (
        "'{PropertyName}' must be between {MinLength} and {MaxLength} characters. "
        "You entered {TotalLength} characters."
    ),
    "MinimumLengthValidator": (
        "The length of '{PropertyName}' must be at least {MinLength} characters. "
        "You entered {TotalLength} characters."
    ),
    "MaximumLengthValidator": (
        "The length of '{PropertyName}' must be {MaxLength} characters or fewer. "
        "You entered {TotalLength} characters."
    ),
    "ExactLengthValidator": (
        "'{PropertyName}' must be {MaxLength} characters in length. "
        "You entered {TotalLength} characters."
    ),
    "RegularExpressionValidator": "'{PropertyName}' is not in the correct format.",
    "PredicateValidator": "The specified condition was not met for '{PropertyName}'.",
}


def template_placeholders(template: str) -> set[str]:
    """Names of every placeholder referenced by a template."""
    return {m.group(1) for m in PLACEHOLDER_PATTERN.finditer(template)}


def check_template(template: str, available: Iterable[str], check_name: str) -> None:
    """Raise if the template references a placeholder nothing will supply."""
    unknown = template_placeholders(template) - set(available)
    if unknown:
        raise ValidatorConfigurationError(
            f"Message template for {check_name} references unknown placeholder(s): "
            f"{', '.join('{' + name + '}' for name in sorted(unknown))}",
            details={"check": check_name, "template": template, "unknown": sorted(unknown)},
        )


def split_property_name(name: str) -> str:
    """Turn an attribute name into a display name.

    "customer_discount" -> "Customer Discount", "PasswordConfirmation" -> "Password Confirmation".
    """
    if not name:
        return name
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name.replace("_", " "))
    return " ".join(word[0].upper() + word[1:] for word in spaced.split())


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


class MessageFormatter:
    """Collects placeholder values for one failure and renders templates."""

    def __init__(self):
        self.placeholder_values: dict[str, Any] = {}

    def append_argument(self, name: str, value: Any) -> "MessageFormatter":
        self.placeholder_values[name] = value
        return self

    def append_property_name(self, name: str) -> "MessageFormatter":
        return self.append_argument("PropertyName", name)

    def append_value(self, value: Any) -> "MessageFormatter":
        return self.append_argument("PropertyValue", value)

    def reset(self) -> None:
        self.placeholder_values = {}

    def build_message(self, template: str) -> str:
        """Substitute known placeholders; unknown ones are left as written.

        A format spec ("{PropertyValue:>5}") that does not suit the value, such
        as a numeric spec on a string, falls back to the plain rendering.
        """

        def replace(match: re.Match) -> str:
            name, spec = match.group(1), match.group(2)
            if name not in self.placeholder_values:
                return match.group(0)
            value = self.placeholder_values[name]
            if not spec:
                return _stringify(value)
            # None renders as "", so padding and alignment specs still apply
            if value is None:
                value = ""
            try:
                return format(value, spec)
            except (TypeError, ValueError):
                return _stringify(value)

        return PLACEHOLDER_PATTERN.sub(replace, template)


class LanguageManager:
    """In-memory message catalog keyed by (culture, check name).

    Lookups fall back from a specific culture ("en-GB") to its neutral language
    ("en") and finally to the default culture. With `enabled` off, only the
    built-in English defaults are returned.
    """

    def __init__(self, culture: str = DEFAULT_CULTURE):
        self.culture = culture
        self.enabled = True
        self._translations: dict[str, dict[str, str]] = {DEFAULT_CULTURE: dict(DEFAULT_MESSAGES)}

    def add_translation(self, culture: str, key: str, message: str) -> None:
        self._translations.setdefault(culture, {})[key] = message

    def get_string(self, key: str, culture: Optional[str] = None) -> Optional[str]:
        """Template for a check name, or None if no culture in the fallback chain has one."""
        if not self.enabled:
            return DEFAULT_MESSAGES.get(key)

        for candidate in self._fallback_chain(culture or self.culture):
            message = self._translations.get(candidate, {}).get(key)
            if message is not None:
                return message
        return None

    @staticmethod
    def _fallback_chain(culture: str) -> list[str]:
        chain = [culture]
        if "-" in culture:
            chain.append(culture.split("-", 1)[0])
        if DEFAULT_CULTURE not in chain:
            chain.append(DEFAULT_CULTURE)
        return chain
