"""Validators for the concrete contact types, selected at runtime by polymorphic rules."""

from datetime import datetime

from fluentcheck.models import ContactPerson, Organisation
from fluentcheck.validators import AbstractValidator


class OrganisationValidator(AbstractValidator):
    """Name, email and headquarters are all required."""

    validated_type = Organisation

    # Counts constructions so lazy registration can be observed
    instance_count = 0

    def __init__(self):
        super().__init__()
        OrganisationValidator.instance_count += 1
        self.rule_for("name").not_null().with_message("Organisation name is required.")
        self.rule_for("email").not_null().with_message("Organisation email is required.")
        self.rule_for("headquarters").not_null().with_message("Headquarters is required.")


class ContactPersonValidator(AbstractValidator):
    """Name and email are required; the date of birth must be set."""

    validated_type = ContactPerson

    # Counts constructions so lazy registration can be observed
    instance_count = 0

    def __init__(self):
        super().__init__()
        ContactPersonValidator.instance_count += 1
        self.rule_for("name").not_null().with_message("Contact person name is required.")
        self.rule_for("email").not_null().with_message("Contact person email is required.")
        self.rule_for("date_of_birth").greater_than(datetime.min).with_message("Invalid date of birth.")


class PersonValidatorForInheritance(AbstractValidator):
    """Same rules as ContactPersonValidator, relying on the default messages."""

    validated_type = ContactPerson

    def __init__(self):
        super().__init__()
        self.rule_for("name").not_null()
        self.rule_for("email").not_null()
        self.rule_for("date_of_birth").greater_than(datetime.min)
