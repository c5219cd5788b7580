"""Contact management routes for the Contacts API."""

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status

from . import schemas
from .service import ContactService, get_contact_service

router = APIRouter(prefix="/contacts", tags=["contacts"])

MEDIA_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".pdf": "application/pdf",
}


def media_type_for(file_name: str) -> str:
    """Pick a Content-Type from the file extension, ignoring case."""
    lowered = file_name.lower()
    for extension, media_type in MEDIA_TYPES.items():
        if lowered.endswith(extension):
            return media_type
    return "application/octet-stream"


def read_upload(upload: UploadFile, limit: int) -> bytes:
    """
    Read at most ``limit + 1`` bytes of an uploaded file.

    One byte past the limit is enough for the size check to reject the
    file without loading the rest of it.
    """
    return upload.file.read(limit + 1)


@router.get("", response_model=schemas.ContactPage)
def list_contacts(
    page: int = Query(0, ge=0),
    size: int | None = Query(None, ge=1),
    service: ContactService = Depends(get_contact_service),
):
    """
    Retrieve a page of contacts sorted by name.

    Args:
        page (int): Zero-based page index.
        size (int | None): Number of contacts per page, the configured
            default when omitted.
        service (ContactService): Contact service.

    Returns:
        ContactPage: Contacts and paging metadata.
    """
    return service.get_all_contacts(page, size)


@router.post("", response_model=schemas.ContactOut, status_code=201)
def create_contact(
    contact_in: schemas.ContactCreate,
    response: Response,
    service: ContactService = Depends(get_contact_service),
):
    """
    Create a new contact.

    The ``Location`` header of the response points at the new contact.

    Raises:
        ConflictError: If the email is already used by another contact.

    Returns:
        ContactOut: Created contact.
    """
    contact = service.add_contact(contact_in)
    response.headers["Location"] = f"{router.prefix}/{contact.id}"
    return contact


@router.get("/uploads/photos/{file_name}")
def get_photo(
    file_name: str,
    service: ContactService = Depends(get_contact_service),
):
    """Serve a stored photo file by name."""
    data = service.get_photo(file_name)
    return Response(content=data, media_type=media_type_for(file_name))


@router.get("/{contact_id}", response_model=schemas.ContactOut)
def get_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
):
    """
    Retrieve a single contact by ID.

    Raises:
        NotFoundError: If contact is not found.

    Returns:
        ContactOut: Contact data.
    """
    return service.get_contact_by_id(contact_id)


@router.put("/{contact_id}", response_model=schemas.ContactOut)
def update_contact(
    contact_id: int,
    changes: schemas.ContactUpdate,
    service: ContactService = Depends(get_contact_service),
):
    """
    Update an existing contact.

    Only fields provided with a non-empty value are changed.

    Args:
        contact_id (int): Contact identifier.
        changes (ContactUpdate): Fields to update.
        service (ContactService): Contact service.

    Returns:
        ContactOut: Updated contact.
    """
    return service.update_contact(contact_id, changes)


@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_contact(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
):
    """Delete a contact. Responds with 204 and no body."""
    service.delete_contact(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{contact_id}/photo", response_model=schemas.ContactOut)
def upload_photo(
    contact_id: int,
    photo: UploadFile = File(...),
    service: ContactService = Depends(get_contact_service),
):
    """
    Upload a photo for a contact from the multipart field ``photo``.

    Raises:
        NotFoundError: If contact is not found.
        ContactValidationError: If the file is empty, larger than the
            configured limit, or not a JPG/JPEG/PNG image.

    Returns:
        ContactOut: Contact with its new ``photoUrl``.
    """
    data = read_upload(photo, service.settings.MAX_PHOTO_SIZE)
    return service.upload_photo(contact_id, data, photo.filename)


@router.get("/{contact_id}/photo")
def get_contact_photo(
    contact_id: int,
    service: ContactService = Depends(get_contact_service),
):
    """Serve the photo of a contact."""
    file_name, data = service.get_photo_by_contact_id(contact_id)
    return Response(content=data, media_type=media_type_for(file_name))
