"""Contact service: validation, field-merge updates and the photo workflow.

Route handlers call into ``ContactService``; it is the only layer that
combines the contact store (``crud``) with the photo store.
"""

import logging
import math
import re
import uuid

from fastapi import Depends
from sqlalchemy.orm import Session

from . import crud, models, schemas
from .core import Settings, get_settings
from .database import get_db
from .errors import ContactValidationError, NotFoundError
from .photos import PhotoStore, get_photo_store

logger = logging.getLogger(__name__)

UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9]")


def photo_extension(file_name: str | None) -> str:
    """
    Return the extension of ``file_name`` including the leading dot.

    Raises:
        ContactValidationError: If the name has no extension.
    """
    if not file_name or "." not in file_name:
        raise ContactValidationError("Invalid file extension!")
    return file_name[file_name.rindex(".") :]


def photo_file_name(contact_name: str, extension: str) -> str:
    """Build a unique photo file name for a contact."""
    safe_name = UNSAFE_NAME_CHARS.sub("_", contact_name)
    return f"{safe_name}_photo_{uuid.uuid4()}{extension}"


class ContactService:
    """
    Contact operations over a database session and a photo store.

    Args:
        db (Session): Request-scoped database session.
        photos (PhotoStore): Where uploaded photos are written.
        settings (Settings | None): Upload limits and URL prefix; the
            cached application settings when omitted.
    """

    def __init__(
        self, db: Session, photos: PhotoStore, settings: Settings | None = None
    ):
        self.db = db
        self.photos = photos
        self.settings = settings or get_settings()

    def get_all_contacts(self, page: int = 0, size: int | None = None):
        """
        Return one page of contacts sorted by name.

        Args:
            page (int): Zero-based page index.
            size (int | None): Page size, ``DEFAULT_PAGE_SIZE`` when omitted.

        Returns:
            ContactPage: Contacts on the page plus paging metadata.
        """
        if size is None:
            size = self.settings.DEFAULT_PAGE_SIZE
        logger.info("Fetching all contacts - page: %s, size: %s", page, size)
        items, total = crud.list_page(self.db, page, size)
        return schemas.ContactPage(
            content=[schemas.ContactOut.model_validate(c) for c in items],
            page=page,
            size=size,
            total_elements=total,
            total_pages=math.ceil(total / size) if size else 0,
        )

    def get_contact_by_id(self, contact_id: int) -> models.Contact:
        logger.info("Fetching contact with ID: %s", contact_id)
        return crud.find_by_id(self.db, contact_id)

    def add_contact(self, contact_in: schemas.ContactCreate) -> models.Contact:
        """Persist a validated contact and return it with its new ID."""
        logger.info("Adding new contact: %s", contact_in.email)
        contact = models.Contact(**contact_in.model_dump())
        return crud.save(self.db, contact)

    def update_contact(
        self, contact_id: int, updates: schemas.ContactUpdate
    ) -> models.Contact:
        """
        Merge non-empty fields from ``updates`` into an existing contact.

        Fields missing, null or blank in ``updates`` keep their stored value.

        Raises:
            NotFoundError: If the contact does not exist.
            ConflictError: If the new email belongs to another contact.
        """
        logger.info("Updating contact with ID: %s", contact_id)
        contact = self.get_contact_by_id(contact_id)
        for key, value in updates.changes().items():
            setattr(contact, key, value)
        return crud.save(self.db, contact)

    def delete_contact(self, contact_id: int) -> None:
        """Delete a contact. Its photo file, if any, stays on disk."""
        logger.info("Deleting contact with ID: %s", contact_id)
        crud.delete_by_id(self.db, contact_id)

    def validate_photo(self, data: bytes, file_name: str | None) -> str:
        """
        Check an uploaded photo and return its extension.

        Raises:
            ContactValidationError: If the file is empty, too large, or
                not one of the allowed image types.
        """
        if not data:
            raise ContactValidationError("Photo file is empty!")
        if len(data) > self.settings.MAX_PHOTO_SIZE:
            limit_mb = self.settings.MAX_PHOTO_SIZE // (1024 * 1024)
            raise ContactValidationError(
                f"Photo file size exceeds the maximum allowed size of {limit_mb} MB!"
            )
        extension = photo_extension(file_name)
        if extension.lower() not in self.settings.ALLOWED_PHOTO_EXTENSIONS:
            raise ContactValidationError(
                "Invalid file extension! Only JPG, JPEG, and PNG files are allowed."
            )
        return extension

    def upload_photo(
        self, contact_id: int, data: bytes, original_file_name: str | None
    ) -> models.Contact:
        """
        Store a photo for a contact and record its URL.

        The file is saved as ``{name}_photo_{uuid}{ext}`` in the photo
        store; a previously uploaded photo file is left in place.

        Args:
            contact_id (int): Contact identifier.
            data (bytes): Uploaded file content.
            original_file_name (str | None): Client-side file name, used
                only for its extension.

        Returns:
            Contact: The contact with ``photo_url`` set.
        """
        logger.info("Uploading photo for contact ID: %s", contact_id)
        contact = self.get_contact_by_id(contact_id)
        extension = self.validate_photo(data, original_file_name)

        file_name = photo_file_name(contact.name, extension)
        stored_path = self.photos.write(file_name, data)

        contact.photo_url = self.settings.PHOTO_BASE_URL + stored_path
        return crud.save(self.db, contact)

    def get_photo(self, file_name: str) -> bytes:
        logger.info("Loading photo %s", file_name)
        return self.photos.read(file_name)

    def get_photo_by_contact_id(self, contact_id: int) -> tuple[str, bytes]:
        """
        Return the file name and content of a contact's photo.

        Raises:
            NotFoundError: If the contact does not exist, has no photo,
                or the photo file is missing.
        """
        logger.info("Retrieving photo for contact ID: %s", contact_id)
        contact = self.get_contact_by_id(contact_id)
        photo_url = contact.photo_url
        if not photo_url:
            raise NotFoundError(f"No photo available for contact ID: {contact_id}")

        file_name = photo_url[photo_url.rfind("/") + 1 :]
        logger.info("Photo file name extracted: %s", file_name)
        return file_name, self.get_photo(file_name)


def get_contact_service(
    db: Session = Depends(get_db),
    photos: PhotoStore = Depends(get_photo_store),
) -> ContactService:
    """FastAPI dependency wiring a ``ContactService`` for one request."""
    return ContactService(db, photos)
