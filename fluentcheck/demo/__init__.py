"""Demo validators — worked examples of every rule kind, run by the test suite.

Usage:
    from fluentcheck.demo import DemoValidator
    from fluentcheck.models import Person

    result = DemoValidator().validate(Person(surname=None), include_rule_sets="Names")
"""

from fluentcheck.demo.contact_request_validator import ContactRequestValidator
from fluentcheck.demo.contact_validators import (
    ContactPersonValidator,
    OrganisationValidator,
    PersonValidatorForInheritance,
)
from fluentcheck.demo.custom_language_manager import CustomLanguageManager
from fluentcheck.demo.custom_validators import list_must_contain_fewer_than
from fluentcheck.demo.demo_validator import DemoValidator
from fluentcheck.demo.list_count_check import ListCountCheck
from fluentcheck.demo.order_validator import OrderValidator

__all__ = [
    "DemoValidator",
    "OrderValidator",
    "ContactPersonValidator",
    "OrganisationValidator",
    "PersonValidatorForInheritance",
    "ContactRequestValidator",
    "ListCountCheck",
    "list_must_contain_fewer_than",
    "CustomLanguageManager",
]
