"""Domain models validated by the demo validators."""

from fluentcheck.models.contacts import Contact, ContactPerson, ContactRequest, Organisation
from fluentcheck.models.person import Order, Person, Pet

__all__ = [
    "Contact",
    "ContactPerson",
    "ContactRequest",
    "Organisation",
    "Order",
    "Person",
    "Pet",
]
