"""Local filesystem storage for contact photos."""

import logging
from pathlib import Path, PurePosixPath

from .core import get_settings
from .errors import ContactValidationError, NotFoundError, StorageError

logger = logging.getLogger(__name__)


class PhotoStore:
    """
    Directory of uploaded photo files addressed by bare file names.

    File names are opaque, but each must be a single path segment that
    stays inside the photo directory once resolved.

    Args:
        root: Directory the photo directory is resolved against.
        directory: Photo directory, relative to ``root``.
    """

    def __init__(self, root: str | Path = ".", directory: str = "uploads/photos"):
        self.root = Path(root)
        self.directory = PurePosixPath(directory)
        self.path = self.root / self.directory

    def resolve(self, name: str) -> Path:
        """
        Map a file name to its location inside the photo directory.

        Raises:
            ContactValidationError: If the name is empty, contains a path
                separator, or escapes the photo directory.
        """
        if not name or name in (".", "..") or "/" in name or "\\" in name:
            raise ContactValidationError(f"Invalid photo file name: {name!r}")
        base = self.path.resolve()
        target = (base / name).resolve()
        if target.parent != base:
            raise ContactValidationError(f"Invalid photo file name: {name!r}")
        return target

    def write(self, name: str, data: bytes) -> str:
        """
        Store ``data`` under ``name``, creating the directory if needed.

        Returns:
            str: Stored path relative to the store root, in posix form.
        """
        target = self.resolve(name)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.exception("Failed to save photo file %s", name)
            raise StorageError("Failed to save photo file") from exc
        return str(self.directory / name)

    def read(self, name: str) -> bytes:
        """
        Return the bytes stored under ``name``.

        Raises:
            NotFoundError: If no such file exists.
        """
        target = self.resolve(name)
        if not target.is_file():
            raise NotFoundError(f"File not found: {name}")
        try:
            return target.read_bytes()
        except OSError as exc:
            logger.exception("Failed to load photo %s", name)
            raise StorageError("Failed to load photo") from exc


def get_photo_store() -> PhotoStore:
    """FastAPI dependency returning the configured photo store."""
    settings = get_settings()
    return PhotoStore(settings.MEDIA_ROOT, settings.UPLOAD_DIR)
