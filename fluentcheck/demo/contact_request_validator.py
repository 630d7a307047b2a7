"""Contact request validator — polymorphic rules on a single contact and a contact list."""

from fluentcheck.demo.contact_validators import OrganisationValidator, PersonValidatorForInheritance
from fluentcheck.models import ContactPerson, ContactRequest, Organisation
from fluentcheck.validators import AbstractValidator


class ContactRequestValidator(AbstractValidator):

    validated_type = ContactRequest

    def __init__(self):
        super().__init__()
        self.rule_for("message_to_send").not_empty()

        self.rule_for("contact").not_null().set_inheritance_validator(lambda v: v
            .add(ContactPerson, PersonValidatorForInheritance())
            .add(Organisation, OrganisationValidator))

        self.rule_for_each("contacts").set_inheritance_validator(lambda v: v
            .add(ContactPerson, PersonValidatorForInheritance())
            .add(Organisation, OrganisationValidator))
