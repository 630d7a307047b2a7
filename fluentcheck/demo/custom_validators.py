"""Reusable rule extensions.

Python has no extension methods, so reusable rules are plain functions that
take a rule builder and return it for further chaining:

    list_must_contain_fewer_than(self.rule_for("numbers"), 5)
"""

from fluentcheck.validators import RuleBuilder


def list_must_contain_fewer_than(rule: RuleBuilder, num: int) -> RuleBuilder:
    """The list must hold fewer than `num` items; the message reports both counts."""

    def predicate(instance, items, context) -> bool:
        context.message_formatter.append_argument("MaxElements", num).append_argument("TotalElements", len(items))
        return len(items) < num

    return rule.must(predicate, message_arguments=("MaxElements", "TotalElements")).with_message(
        "{PropertyName} must contain fewer than {MaxElements} items. The list contains {TotalElements} elements."
    )
