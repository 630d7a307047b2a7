"""Tests for polymorphic (inheritance) dispatch and the contact request demo."""

from datetime import datetime

import pytest

from fluentcheck.demo import OrganisationValidator, PersonValidatorForInheritance
from fluentcheck.models import Contact, ContactPerson, ContactRequest, Organisation
from fluentcheck.testing import validate_for_test
from fluentcheck.validators import InlineValidator, PolymorphicValidator, ValidatorConfigurationError


class Supplier(Organisation):
    """A subtype with no validator of its own."""


class TestPolymorphicValidator:

    def _validator(self, registry):
        validator = InlineValidator()
        validator.rule_for("contact").set_inheritance_validator(registry)
        return validator

    def test_registered_type_uses_only_its_validator(self):
        validator = self._validator(lambda v: v
            .add(Organisation, OrganisationValidator())
            .add(ContactPerson, PersonValidatorForInheritance()))
        result = validator.validate(ContactRequest(contact=Organisation(name=None, email=None)))
        assert [f.error_message for f in result.errors] == [
            "Organisation name is required.",
            "Organisation email is required.",
        ]

    def test_unregistered_type_contributes_nothing(self):
        validator = self._validator(lambda v: v.add(ContactPerson, PersonValidatorForInheritance()))
        assert validator.validate(ContactRequest(contact=Organisation(name=None))).is_valid

    def test_dispatch_uses_exact_type(self):
        validator = self._validator(lambda v: v.add(Organisation, OrganisationValidator()))
        assert validator.validate(ContactRequest(contact=Supplier(name=None))).is_valid

    def test_base_type_instance(self):
        validator = self._validator(lambda v: v.add(ContactPerson, PersonValidatorForInheritance()))
        assert validator.validate(ContactRequest(contact=Contact())).is_valid

    def test_factories_are_lazy(self):
        calls = []

        def organisation_factory():
            calls.append("organisation")
            return OrganisationValidator()

        def person_factory(request, contact):
            calls.append(("person", contact.name))
            return PersonValidatorForInheritance()

        validator = self._validator(lambda v: v
            .add(Organisation, organisation_factory)
            .add(ContactPerson, person_factory))
        assert calls == []

        validator.validate(ContactRequest(contact=ContactPerson(name="Ann", date_of_birth=datetime(1990, 1, 1))))
        assert calls == [("person", "Ann")]

    def test_registered_types(self):
        polymorphic = PolymorphicValidator().add(Organisation, OrganisationValidator)
        assert polymorphic.registered_types == [Organisation]

    def test_add_requires_type(self):
        with pytest.raises(ValidatorConfigurationError):
            PolymorphicValidator().add("Organisation", OrganisationValidator())

    def test_add_requires_validator_or_factory(self):
        with pytest.raises(ValidatorConfigurationError):
            PolymorphicValidator().add(Organisation, 42)

    def test_registry_frozen_after_configuration(self):
        registries = []
        validator = self._validator(lambda v: registries.append(v.add(Organisation, OrganisationValidator())))
        request = ContactRequest(contact=ContactPerson(name=None))
        before = validator.validate(request)

        with pytest.raises(ValidatorConfigurationError, match="registry is in use"):
            registries[0].add(ContactPerson, PersonValidatorForInheritance())

        assert registries[0].registered_types == [Organisation]
        assert validator.validate(request).errors == before.errors

    def test_registry_frozen_on_first_dispatch(self):
        polymorphic = PolymorphicValidator().add(Organisation, OrganisationValidator())
        validator = InlineValidator()
        validator.rule_for("contact").set_validator(polymorphic)
        validator.validate(ContactRequest(contact=Organisation(name="Acme", email="a@acme.test")))

        with pytest.raises(ValidatorConfigurationError):
            polymorphic.add(ContactPerson, PersonValidatorForInheritance())


class TestContactRequestValidator:

    def test_valid(self, contact_request_validator):
        request = ContactRequest(
            message_to_send="Hello",
            contact=ContactPerson(name="Ann", email="ann@example.com", date_of_birth=datetime(1990, 1, 1)),
            contacts=[Organisation(name="Org", email="org@example.com", headquarters="HQ")],
        )
        validate_for_test(contact_request_validator, request).should_not_have_any_validation_errors()

    def test_message_and_contact_required(self, contact_request_validator):
        result = validate_for_test(contact_request_validator, ContactRequest(message_to_send="", contact=None))
        result.should_have_validation_error_for("message_to_send").with_error_message(
            "'Message To Send' must not be empty."
        )
        result.should_have_validation_error_for("contact").with_error_message("'Contact' must not be empty.")

    def test_contact_person_default_messages(self, contact_request_validator):
        request = ContactRequest(message_to_send="Hi", contact=ContactPerson(name=None, date_of_birth=datetime.min))
        result = validate_for_test(contact_request_validator, request)
        result.should_have_validation_error_for("contact.name").with_error_message("'Name' must not be empty.")
        result.should_have_validation_error_for("contact.date_of_birth").with_message_containing(
            "'Date Of Birth' must be greater than"
        )

    def test_organisation_built_from_class(self, contact_request_validator):
        request = ContactRequest(message_to_send="Hi", contacts=[Organisation(headquarters=None)])
        result = validate_for_test(contact_request_validator, request)
        result.should_have_validation_error_for("contacts[0].headquarters").with_error_message(
            "Headquarters is required."
        )
