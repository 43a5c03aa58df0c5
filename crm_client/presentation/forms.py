# (c) Nelen & Schuurmans

import re

from pydantic import ConfigDict
from pydantic import field_validator
from pydantic import ValidationInfo

from crm_client.base.domain import Contact
from crm_client.base.domain import ContactStatus
from crm_client.base.domain import Json
from crm_client.base.domain import ValueObject

__all__ = ["ContactForm", "LoginForm", "SignupForm"]

EMAIL_REGEX = re.compile(r"\S+@\S+\.\S+")
USERNAME_REGEX = re.compile(r"^[a-zA-Z0-9_]+$")


def check_email(v: str, required: bool) -> str:
    if not v:
        if required:
            raise ValueError("Email is required")
        return v
    if not EMAIL_REGEX.search(v):
        raise ValueError("Email is invalid")
    return v


class Form(ValueObject):
    # empty defaults must pass the validators too (e.g. "Name is required")
    model_config = ConfigDict(frozen=True, validate_default=True)


class ContactForm(Form):
    """The input of the contact create / edit form.

    Use ``ContactForm.create(**data)``; it raises BadRequest with one error per
    invalid field (see ``BadRequest.field_errors``).
    """

    name: str = ""
    email: str = ""
    phone: str = ""
    company: str = ""
    status: ContactStatus = ContactStatus.LEAD
    notes: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Name is required")
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v, required=False)

    @classmethod
    def for_contact(cls, contact: Contact) -> "ContactForm":
        return cls(
            name=contact.name,
            email=contact.email or "",
            phone=contact.phone or "",
            company=contact.company or "",
            status=contact.status,
            notes=contact.notes or "",
        )

    def to_values(self) -> Json:
        return self.model_dump(mode="json")


class LoginForm(Form):
    email: str = ""
    password: str = ""

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v, required=True)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class SignupForm(Form):
    username: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v:
            raise ValueError("Username is required")
        if len(v) < 3:
            raise ValueError("Username must be at least 3 characters")
        if not USERNAME_REGEX.match(v):
            raise ValueError(
                "Username can only contain letters, numbers, and underscores"
            )
        return v

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return check_email(v, required=True)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters")
        if not (
            re.search(r"[a-z]", v) and re.search(r"[A-Z]", v) and re.search(r"\d", v)
        ):
            raise ValueError(
                "Password must contain at least one uppercase letter, "
                "one lowercase letter, and one number"
            )
        return v

    @field_validator("confirm_password")
    @classmethod
    def validate_confirm_password(cls, v: str, info: ValidationInfo) -> str:
        if not v:
            raise ValueError("Please confirm your password")
        # only comparable if the password itself is valid
        password = info.data.get("password")
        if password is not None and password != v:
            raise ValueError("Passwords do not match")
        return v
