"""CRUD operations for contacts.

This module contains database interaction logic for the contact
entity, isolated from the service layer and FastAPI route handlers.
Database failures are translated into the API error kinds here.
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from . import models
from .core import MAX_DB_INTEGER
from .errors import (
    ConflictError,
    ContactValidationError,
    NotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)


def list_page(db: Session, page: int = 0, size: int = 10):
    """
    Retrieve one page of contacts sorted by name.

    Args:
        db (Session): Database session.
        page (int): Zero-based page index.
        size (int): Maximum number of records on the page.

    Raises:
        ContactValidationError: If the page offset or size is beyond the
            largest integer the database accepts.

    Returns:
        tuple[list[Contact], int]: Contacts on the page and the total
        number of contacts.
    """
    offset = page * size
    if offset > MAX_DB_INTEGER or size > MAX_DB_INTEGER:
        raise ContactValidationError(f"Page {page} of size {size} is out of range")
    stmt = (
        select(models.Contact)
        .order_by(models.Contact.name.asc(), models.Contact.id.asc())
        .offset(offset)
        .limit(size)
    )
    try:
        items = db.scalars(stmt).all()
        total = db.scalar(select(func.count()).select_from(models.Contact))
    except SQLAlchemyError as exc:
        logger.exception("Failed to list contacts")
        raise StorageError("Failed to list contacts") from exc
    return items, total or 0


def get_contact(db: Session, contact_id: int) -> models.Contact | None:
    """
    Retrieve a contact by primary key.

    Args:
        db (Session): Database session.
        contact_id (int): Contact identifier.

    Returns:
        Contact | None: Contact if found, otherwise ``None``.
    """
    if abs(contact_id) > MAX_DB_INTEGER:
        return None
    return db.get(models.Contact, contact_id)


def find_by_id(db: Session, contact_id: int) -> models.Contact:
    """
    Retrieve a contact by primary key or fail.

    Raises:
        NotFoundError: If no contact has this ID.
    """
    contact = get_contact(db, contact_id)
    if contact is None:
        raise NotFoundError(f"Contact not found with ID: {contact_id}")
    return contact


def save(db: Session, contact: models.Contact) -> models.Contact:
    """
    Insert a new contact or update an existing one.

    A contact without an ``id`` is inserted and receives one; otherwise
    the existing row is updated.

    Args:
        db (Session): Database session.
        contact (Contact): Contact to persist.

    Raises:
        ConflictError: If another contact already uses the same email.
        StorageError: On any other database failure.

    Returns:
        Contact: The persisted contact, refreshed from the database.
    """
    email = contact.email
    try:
        db.add(contact)
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConflictError(f"A contact with email {email} already exists") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to save contact")
        raise StorageError("Failed to save contact") from exc
    db.refresh(contact)
    return contact


def delete_by_id(db: Session, contact_id: int) -> None:
    """
    Delete a contact from the database.

    Args:
        db (Session): Database session.
        contact_id (int): Contact identifier.

    Raises:
        NotFoundError: If no contact has this ID.
        StorageError: On database failure.
    """
    contact = find_by_id(db, contact_id)
    try:
        db.delete(contact)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to delete contact %s", contact_id)
        raise StorageError(f"Failed to delete contact {contact_id}") from exc
