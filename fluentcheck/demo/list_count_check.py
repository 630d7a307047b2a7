"""A reusable, class-based check limiting how many items a list may hold."""

from typing import Any

from fluentcheck.validators import PropertyCheck, ValidationContext


class ListCountCheck(PropertyCheck):
    """Fails when the list holds `max_elements` items or more. None passes.

    Usage:
        self.rule_for("nicknames").set_validator(ListCountCheck(3))
    """

    message_arguments = ("MaxElements",)

    def __init__(self, max_elements: int):
        self.max_elements = max_elements

    @property
    def name(self) -> str:
        return "ListCountValidator"

    def is_valid(self, context: ValidationContext, value: Any) -> bool:
        if value is not None and len(value) >= self.max_elements:
            context.message_formatter.append_argument("MaxElements", self.max_elements)
            return False
        return True

    def default_message_template(self) -> str:
        return "{PropertyName} must contain fewer than {MaxElements} items."
