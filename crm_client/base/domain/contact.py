# (c) Nelen & Schuurmans

from datetime import datetime

from .filter import ContactStatus
from .repository import Repository
from .root_entity import RootEntity

__all__ = ["Contact", "ContactRepository"]


class Contact(RootEntity):
    name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None
    status: ContactStatus = ContactStatus.LEAD
    notes: str | None = None
    updated_at: datetime | None = None


class ContactRepository(Repository[Contact]):
    pass
