"""Database models for the Contacts API.

This module defines the single SQLAlchemy ORM model used by the application.
"""

import enum

from sqlalchemy import Column, Enum, Integer, String

from .database import Base


class ContactStatus(str, enum.Enum):
    """Lifecycle status of a contact."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class Contact(Base):
    """
    SQLAlchemy model representing a contact entry.

    The email address is unique across all contacts; the database
    enforces it, so a duplicate insert or update fails at commit time.
    ``photo_url`` is only ever written by a photo upload.
    """

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False, index=True)
    title = Column(String(50), nullable=True)
    phone = Column(String(16), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    address = Column(String(255), nullable=True)
    status = Column(
        Enum(ContactStatus, name="contact_status"),
        default=ContactStatus.ACTIVE,
        nullable=False,
    )
    photo_url = Column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Contact id={self.id} name={self.name!r} email={self.email!r}>"
