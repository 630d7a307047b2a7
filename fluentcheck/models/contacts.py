"""Contact models — a base type with concrete variants for polymorphic validation."""

from datetime import datetime
from pydantic import BaseModel, Field
from typing import Optional


class Contact(BaseModel):
    """Base type for anything that can be contacted."""


class ContactPerson(Contact):
    """An individual contact."""

    name: Optional[str] = ""
    email: Optional[str] = ""
    date_of_birth: datetime = datetime.min


class Organisation(Contact):
    """A company or other organisation."""

    name: Optional[str] = ""
    email: Optional[str] = ""
    headquarters: Optional[str] = ""


class ContactRequest(BaseModel):
    """A message to send to one primary contact and any number of others."""

    contact: Optional[Contact] = None
    contacts: list[Contact] = Field(default_factory=list)
    message_to_send: Optional[str] = ""
