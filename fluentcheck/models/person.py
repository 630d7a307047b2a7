"""Person, pet and order models validated by the demo validators."""

from pydantic import BaseModel, Field
from typing import Optional

from fluentcheck.models.contacts import Contact


class Pet(BaseModel):
    """A pet owned by a person."""

    name: Optional[str] = None


class Order(BaseModel):
    """A customer order. `cost` is unset until the order is priced."""

    total: float = 0
    cost: Optional[float] = None


class Person(BaseModel):
    """A customer record exercising every kind of demo rule."""

    surname: Optional[str] = ""
    forename: Optional[str] = ""
    id: int = 0
    has_discount: bool = False
    customer_discount: float = 0
    postcode: Optional[str] = ""
    password: Optional[str] = ""
    password_confirmation: Optional[str] = ""
    is_preferred_customer: bool = False
    is_preferred: bool = False
    credit_card_number: Optional[str] = ""
    photo: Optional[str] = ""
    address_lines: list[Optional[str]] = Field(default_factory=list)
    pets: list[Pet] = Field(default_factory=list)
    orders: list[Order] = Field(default_factory=list)
    contact: Optional[Contact] = None
    contacts: list[Contact] = Field(default_factory=list)
