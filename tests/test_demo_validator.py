"""Tests for DemoValidator.

One class per section of the demo validator; each test builds a Person that
trips (or avoids) one rule and checks the failure it produces.
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pytest

from fluentcheck.demo import ContactPersonValidator, OrganisationValidator
from fluentcheck.models import ContactPerson, Order, Organisation, Person, Pet
from fluentcheck.testing import validate_for_test
from fluentcheck.validators import ValidationContext


def _paths(result) -> list[str]:
    return [f.property_name for f in result.errors]


def _messages_for(result, path: str) -> list[str]:
    return [f.error_message for f in result.errors if f.property_name == path]


class TestBasicChecks:

    def test_surname_not_null(self, demo_validator):
        result = validate_for_test(demo_validator, Person(surname=None))
        result.should_have_validation_error_for("surname").with_error_message("Surname cannot be null.")

    def test_forename_not_empty(self, demo_validator):
        result = validate_for_test(demo_validator, Person(forename=""))
        result.should_have_validation_error_for("forename").with_error_message("Forename cannot be empty.")

    def test_passwords_must_match(self, demo_validator):
        result = validate_for_test(demo_validator, Person(password="pass", password_confirmation="different"))
        result.should_have_validation_error_for("password").with_error_message("Passwords must match.")

    def test_postcode_length(self, demo_validator):
        result = validate_for_test(demo_validator, Person(postcode="toolongpostcode"))
        result.should_have_validation_error_for("postcode").with_error_message(
            "Postcode must be between 5 and 10 characters."
        )

    def test_id_not_zero(self, demo_validator):
        result = validate_for_test(demo_validator, Person(id=0))
        result.should_have_validation_error_for("id").with_error_message("Id must not be 0.")

    def test_valid_basic_fields(self, demo_validator):
        person = Person(
            surname="Doe",
            forename="John",
            id=1,
            password="pass",
            password_confirmation="pass",
            postcode="12345",
        )
        result = validate_for_test(demo_validator, person)
        for path in ("surname", "forename", "id", "password", "postcode"):
            result.should_not_have_validation_error_for(path)

    def test_fully_valid_person(self, demo_validator, make_person):
        result = validate_for_test(demo_validator, make_person())
        result.should_not_have_any_validation_errors()
        assert result.is_valid


class TestConditions:

    def test_when_preferred_customer_without_discount(self, demo_validator):
        result = validate_for_test(demo_validator, Person(is_preferred_customer=True, customer_discount=0))
        result.should_have_validation_error_for("customer_discount").with_error_message(
            "Preferred customers must have a discount greater than 0."
        )

    def test_when_and_unless_agree(self, demo_validator):
        # The same rule is declared once with when() and once with unless()
        result = validate_for_test(demo_validator, Person(is_preferred_customer=True, customer_discount=0))
        messages = _messages_for(result, "customer_discount")
        assert messages.count("Preferred customers must have a discount greater than 0.") == 2

    def test_when_skipped_for_non_preferred_customer(self, demo_validator):
        result = validate_for_test(demo_validator, Person(is_preferred_customer=False, customer_discount=0))
        result.should_not_have_validation_error_for("customer_discount")

    def test_top_level_when(self, demo_validator):
        result = validate_for_test(
            demo_validator,
            Person(is_preferred=True, customer_discount=0, credit_card_number=None),
        )
        result.should_have_validation_error_for("customer_discount").with_error_message(
            "Preferred customers need a positive discount."
        )
        result.should_have_validation_error_for("credit_card_number").with_error_message(
            "Preferred customers need a credit card."
        )

    def test_top_level_when_skipped(self, demo_validator):
        result = validate_for_test(
            demo_validator,
            Person(is_preferred=False, customer_discount=0, credit_card_number=None),
        )
        result.should_not_have_validation_error_for("customer_discount")
        result.should_not_have_validation_error_for("credit_card_number")

    def test_otherwise(self, demo_validator):
        result = validate_for_test(demo_validator, Person(is_preferred=False, customer_discount=5))
        result.should_have_validation_error_for("customer_discount").with_error_message(
            "Non-preferred customers must have zero discount."
        )

    def test_current_validator_condition_preferred(self, demo_validator):
        result = validate_for_test(demo_validator, Person(is_preferred_customer=True, photo="invalid"))
        result.should_have_validation_error_for("photo").with_error_message(
            "Photo must be a valid URL for preferred customers."
        ).only()

    def test_current_validator_condition_not_preferred(self, demo_validator):
        result = validate_for_test(demo_validator, Person(is_preferred_customer=False, photo="valid"))
        result.should_have_validation_error_for("photo").with_error_message(
            "Photo must be empty for non-preferred customers."
        ).only()
        assert "Photo must be a valid URL for preferred customers." not in _messages_for(result, "photo")

    def test_unconditioned_check_still_runs(self, demo_validator):
        result = validate_for_test(demo_validator, Person(is_preferred_customer=True, photo=""))
        result.should_have_validation_error_for("photo").with_error_message("'Photo' must not be empty.")


class TestCustomChecks:

    @pytest.fixture
    def eleven_pets(self):
        return Person(pets=[Pet() for _ in range(11)])

    def test_must(self, demo_validator, eleven_pets):
        result = validate_for_test(demo_validator, eleven_pets)
        result.should_have_validation_error_for("pets").with_error_message(
            "Pets list must contain fewer than 10 items."
        )

    def test_custom_action(self, demo_validator, eleven_pets):
        result = validate_for_test(demo_validator, eleven_pets)
        result.should_have_validation_error_for("pets").with_error_message(
            "Pets list must contain 10 items or fewer."
        )

    def test_reusable_extension(self, demo_validator, eleven_pets):
        result = validate_for_test(demo_validator, eleven_pets)
        result.should_have_validation_error_for("pets").with_error_message(
            "Pets must contain fewer than 10 items. The list contains 11 elements."
        )

    def test_reusable_check_class(self, demo_validator, eleven_pets):
        result = validate_for_test(demo_validator, eleven_pets)
        failure = result.should_have_validation_error_for("pets").with_error_message(
            "Pets must contain fewer than 10 items."
        ).only()
        assert failure.error_code == "ListCountValidator"

    def test_pets_within_limit(self, demo_validator):
        result = validate_for_test(demo_validator, Person(pets=[Pet(), Pet()]))
        result.should_not_have_validation_error_for("pets")

    def test_custom_action_only_at_limit(self, demo_validator):
        # Ten pets break the "fewer than 10" rules but not "10 or fewer"
        result = validate_for_test(demo_validator, Person(pets=[Pet() for _ in range(10)]))
        messages = _messages_for(result, "pets")
        assert "Pets list must contain fewer than 10 items." in messages
        assert "Pets list must contain 10 items or fewer." not in messages


class TestRuleSets:

    def test_names_rule_set_runs_only_name_rules(self, demo_validator):
        person = Person(surname=None, forename=None, id=0)
        result = demo_validator.validate(person, include_rule_sets="Names")

        assert not result.is_valid
        assert result.rule_sets_executed == ["Names"]
        assert _messages_for(result, "surname") == ["Surname is required in Names RuleSet."]
        assert _messages_for(result, "forename") == ["Forename is required in Names RuleSet."]
        assert "id" not in _paths(result)

    def test_default_run_excludes_rule_set(self, demo_validator):
        result = validate_for_test(demo_validator, Person(surname=None, forename=None))
        assert "Surname is required in Names RuleSet." not in _messages_for(result, "surname")

    def test_wildcard_runs_everything(self, demo_validator):
        result = demo_validator.validate(Person(surname=None, id=0), include_rule_sets="*")
        assert "Surname is required in Names RuleSet." in _messages_for(result, "surname")
        assert "Id must not be 0." in _messages_for(result, "id")


class TestCollections:

    def test_each_simple_value(self, demo_validator):
        result = validate_for_test(demo_validator, Person(address_lines=[None]))
        result.should_have_validation_error_for("address_lines[0]").with_error_message(
            "Address line cannot be null."
        )

    def test_collection_index_placeholder(self, demo_validator):
        result = validate_for_test(demo_validator, Person(address_lines=["Line1", None]))
        result.should_have_validation_error_for("address_lines[1]").with_error_message("Address 1 is required.")
        result.should_not_have_validation_error_for("address_lines[0]")

    def test_each_with_child_validator(self, demo_validator):
        result = validate_for_test(demo_validator, Person(orders=[Order(total=0)]))
        result.should_have_validation_error_for("orders[0].total").with_error_message(
            "'Total' must be greater than '0'."
        )

    def test_child_rules(self, demo_validator):
        result = validate_for_test(demo_validator, Person(orders=[Order(total=0)]))
        result.should_have_validation_error_for("orders[0].total").with_error_message(
            "Order total must be positive."
        )

    def test_where_filters_elements(self, demo_validator):
        person = Person(orders=[Order(total=0, cost=None), Order(total=0, cost=5)])
        result = validate_for_test(demo_validator, person)

        # set_validator and child_rules hit both orders; the filtered rule only the priced one
        assert len(result.errors_for("orders[0].total")) == 2
        assert len(result.errors_for("orders[1].total")) == 3

    def test_for_each_inside_rule_for(self, demo_validator):
        person = Person(orders=[Order(total=0) for _ in range(11)])
        result = validate_for_test(demo_validator, person)
        result.should_have_validation_error_for("orders").with_error_message("No more than 10 orders are allowed.")
        result.should_have_validation_error_for("orders[0]").with_error_message(
            "Orders must have a total greater than 0."
        )
        result.should_have_validation_error_for("orders[10]")

    def test_element_failures_in_index_order(self, demo_validator):
        person = Person(orders=[Order(total=0), Order(total=5), Order(total=0)])
        result = validate_for_test(demo_validator, person)
        element_paths = [p for p in _paths(result) if p in ("orders[0]", "orders[1]", "orders[2]")]
        assert element_paths == ["orders[0]", "orders[2]"]

    def test_valid_collections(self, demo_validator):
        person = Person(address_lines=["Line1", "Line2"], orders=[Order(total=10, cost=5)])
        result = validate_for_test(demo_validator, person)
        assert not [p for p in _paths(result) if p.startswith(("address_lines", "orders"))]


class TestDependentRules:

    def test_not_run_when_parent_fails(self, demo_validator):
        result = validate_for_test(demo_validator, Person(surname=None, forename=None))
        result.should_have_validation_error_for("surname")
        assert "Forename is required if Surname is provided." not in _messages_for(result, "forename")

    def test_run_when_parent_passes(self, demo_validator):
        result = validate_for_test(demo_validator, Person(surname="Doe", forename=None))
        result.should_have_validation_error_for("forename").with_error_message(
            "Forename is required if Surname is provided."
        )


class TestInheritanceValidation:

    def test_organisation_contact(self, demo_validator):
        result = validate_for_test(demo_validator, Person(contact=Organisation(name=None)))
        result.should_have_validation_error_for("contact.name").with_error_message("Organisation name is required.")
        result.should_not_have_validation_error_for("contact.email")

    def test_contact_person_contact(self, demo_validator):
        person = Person(contact=ContactPerson(name="Jane", email="jane@example.com", date_of_birth=datetime.min))
        result = validate_for_test(demo_validator, person)
        result.should_have_validation_error_for("contact.date_of_birth").with_error_message("Invalid date of birth.")
        assert "Organisation name is required." not in _messages_for(result, "contact.name")

    def test_collection_of_contacts(self, demo_validator):
        person = Person(contacts=[Organisation(name=None), ContactPerson(date_of_birth=datetime.min)])
        result = validate_for_test(demo_validator, person)
        result.should_have_validation_error_for("contacts[0].name").with_error_message(
            "Organisation name is required."
        )
        result.should_have_validation_error_for("contacts[1].date_of_birth").with_error_message(
            "Invalid date of birth."
        )

    def test_lazy_construction(self, demo_validator, reset_instance_counts):
        result = validate_for_test(demo_validator, Person(contact=ContactPerson(name=None)))
        result.should_have_validation_error_for("contact.name").with_error_message(
            "Contact person name is required."
        )
        assert ContactPersonValidator.instance_count == 1
        assert OrganisationValidator.instance_count == 0

        result = validate_for_test(demo_validator, Person(contact=Organisation(name=None)))
        result.should_have_validation_error_for("contact.name").with_error_message("Organisation name is required.")
        assert ContactPersonValidator.instance_count == 1
        assert OrganisationValidator.instance_count == 1

    def test_valid_contacts(self, demo_validator):
        person = Person(
            contact=ContactPerson(name="John", email="john@example.com", date_of_birth=datetime.now()),
            contacts=[Organisation(name="Org", email="org@example.com", headquarters="HQ")],
        )
        result = validate_for_test(demo_validator, person)
        assert not [p for p in _paths(result) if p.startswith(("contact", "contacts"))]


class TestLocalisation:

    def test_message_factory(self, demo_validator):
        result = validate_for_test(demo_validator, Person(surname=None))
        result.should_have_validation_error_for("surname").with_error_message("Surname is required (localized).")

    def test_custom_catalog_replaces_default_message(self, demo_validator):
        result = validate_for_test(demo_validator, Person(surname=None))
        result.should_have_validation_error_for("surname").with_error_message("'Surname' is required.")


class TestAdvanced:

    def test_pre_validate_rejects_missing_model(self, demo_validator):
        result = demo_validator.validate(None)
        assert not result.is_valid
        assert len(result.errors) == 1
        assert "Please ensure a model was supplied." in result.errors[0].error_message

    def test_root_context_data(self, demo_validator):
        result = validate_for_test(demo_validator, Person(), root_context_data={"MyCustomData": "Test"})
        result.should_have_validation_error_for("surname").with_error_message(
            "Custom data detected, adding failure for demo."
        )

    def test_root_context_data_on_prebuilt_context(self, demo_validator):
        context = ValidationContext(Person())
        context.root_context_data["MyCustomData"] = "Test"
        result = demo_validator.validate(context)
        assert "Custom data detected, adding failure for demo." in _messages_for(result, "surname")

    def test_no_root_context_data(self, demo_validator, make_person):
        result = validate_for_test(demo_validator, make_person())
        result.should_not_have_validation_error_for("surname")

    def test_custom_exception(self, demo_validator):
        with pytest.raises(ValueError, match="Custom validation exception"):
            demo_validator.validate_and_throw(Person(surname=None))

    def test_no_exception_when_valid(self, demo_validator, make_person):
        result = demo_validator.validate_and_throw(make_person())
        assert result.is_valid


class TestConcurrency:

    def test_shared_validator_across_threads(self, demo_validator, make_person):
        people = [
            make_person(),
            Person(surname=None),
            Person(),
            make_person(pets=[Pet(name=None)], orders=[Order(total=0, cost=5)] * 3),
            make_person(address_lines=[], password_confirmation="different"),
            make_person(contact=Organisation(name=None)),
            make_person(contact=ContactPerson(name=None)),
            make_person(is_preferred_customer=False),
        ]
        rule_sets = [None, "*"]
        cases = [(index, selection) for index in range(len(people)) for selection in rule_sets] * 25

        # The first run freezes the validator; later runs only read its rules
        expected = {
            (index, selection): demo_validator.validate(person, include_rule_sets=selection).errors
            for index, person in enumerate(people)
            for selection in rule_sets
        }

        def run(case):
            index, selection = case
            return index, selection, demo_validator.validate(people[index], include_rule_sets=selection)

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(run, cases))

        assert len(results) == len(cases)
        for index, selection, result in results:
            assert result.errors == expected[(index, selection)]
