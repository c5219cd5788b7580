import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import ContactStatus

PHONE_PATTERN = re.compile(r"\+?[0-9]{10,15}")
EMAIL_MAX_LENGTH = 255


def _check_phone(value: Optional[str]) -> Optional[str]:
    if value and not PHONE_PATTERN.fullmatch(value):
        raise ValueError(
            "Phone number must be between 10 and 15 digits "
            "and can optionally start with a '+'"
        )
    return value


def _check_email_length(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value) > EMAIL_MAX_LENGTH:
        raise ValueError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
    return value


class ContactSchema(BaseModel):
    """Base for contact payloads: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ContactBase(ContactSchema):
    """Shared fields for contact schemas."""

    name: str = Field(min_length=3, max_length=50)
    title: Optional[str] = Field(None, min_length=3, max_length=50)
    phone: Optional[str] = None
    email: EmailStr
    address: Optional[str] = Field(None, max_length=255)
    status: ContactStatus = ContactStatus.ACTIVE

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Name cannot be blank")
        return value

    @field_validator("phone")
    @classmethod
    def phone_format(cls, value: Optional[str]) -> Optional[str]:
        return _check_phone(value)

    @field_validator("email")
    @classmethod
    def email_length(cls, value: str) -> str:
        return _check_email_length(value)


class ContactCreate(ContactBase):
    """Schema for creating new contact."""

    pass


class ContactUpdate(ContactSchema):
    """Schema for updating contact (all fields optional).

    Blank strings count as "not provided", so an update can never clear
    a field; only non-empty values overwrite the stored ones.
    """

    name: Optional[str] = Field(None, min_length=3, max_length=50)
    title: Optional[str] = Field(None, min_length=3, max_length=50)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    address: Optional[str] = Field(None, max_length=255)
    status: Optional[ContactStatus] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_absent(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("phone")
    @classmethod
    def phone_format(cls, value: Optional[str]) -> Optional[str]:
        return _check_phone(value)

    @field_validator("email")
    @classmethod
    def email_length(cls, value: Optional[str]) -> Optional[str]:
        return _check_email_length(value)

    def changes(self) -> dict:
        """Return only the fields that carry a value."""
        return self.model_dump(exclude_none=True)


class ContactOut(ContactBase):
    """Schema for returning contact with ID."""

    id: int
    photo_url: Optional[str] = None


class ContactPage(ContactSchema):
    """One page of contacts sorted by name, with paging metadata."""

    content: List[ContactOut]
    page: int
    size: int
    total_elements: int
    total_pages: int
