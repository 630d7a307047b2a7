"""Shared fixtures for the test suite.

DemoValidator installs a custom message catalog on the process-wide options
when it is constructed, so every test starts and ends with default options.
"""

import pytest

from fluentcheck.demo import (
    ContactPersonValidator,
    ContactRequestValidator,
    DemoValidator,
    OrganisationValidator,
)
from fluentcheck.models import Order, Pet, Person
from fluentcheck.validators import global_options


@pytest.fixture(autouse=True)
def reset_global_options():
    global_options.reset()
    yield
    global_options.reset()


@pytest.fixture
def demo_validator():
    return DemoValidator()


@pytest.fixture
def contact_request_validator():
    return ContactRequestValidator()


@pytest.fixture
def reset_instance_counts():
    """Zero the construction counters of the contact validators."""
    OrganisationValidator.instance_count = 0
    ContactPersonValidator.instance_count = 0


@pytest.fixture
def make_person():
    """Factory for a Person that passes every default DemoValidator rule.

    The photo rule needs a URL for preferred customers and nothing otherwise,
    and the discount rules need a positive discount for preferred customers
    and zero otherwise, so the baseline is a preferred customer.
    """

    def factory(**overrides) -> Person:
        fields = dict(
            surname="Doe",
            forename="John",
            id=1,
            password="pass",
            password_confirmation="pass",
            postcode="12345",
            is_preferred_customer=True,
            is_preferred=True,
            customer_discount=5,
            credit_card_number="4111111111111111",
            photo="https://www.photos.io/1.png",
            address_lines=["Line1", "Line2"],
            pets=[Pet(name="Rex")],
            orders=[Order(total=10, cost=5)],
        )
        fields.update(overrides)
        return Person(**fields)

    return factory
