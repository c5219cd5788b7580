import pytest

from contact_api.errors import ContactValidationError, NotFoundError
from contact_api.photos import PhotoStore


def test_write_creates_directory_and_returns_relative_path(tmp_path):
    store = PhotoStore(tmp_path, "uploads/photos")
    stored = store.write("a.png", b"data")
    assert stored == "uploads/photos/a.png"
    assert (tmp_path / "uploads" / "photos" / "a.png").read_bytes() == b"data"
    assert store.read("a.png") == b"data"


def test_read_missing_file(tmp_path):
    store = PhotoStore(tmp_path)
    with pytest.raises(NotFoundError):
        store.read("missing.png")


@pytest.mark.parametrize(
    "name", ["", ".", "..", "../secret.txt", "sub/a.png", "..\\secret.txt"]
)
def test_rejects_names_outside_directory(tmp_path, name):
    (tmp_path / "secret.txt").write_text("secret")
    store = PhotoStore(tmp_path)
    with pytest.raises(ContactValidationError):
        store.read(name)
    with pytest.raises(ContactValidationError):
        store.write(name, b"x")
