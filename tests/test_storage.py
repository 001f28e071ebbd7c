import pytest

from app.infrastructure.storage import LocalFileStorage


def test_save_and_delete(tmp_path):
    storage = LocalFileStorage(str(tmp_path / "uploads"))

    reference = storage.save(b"data", ".pdf")

    assert reference.endswith(".pdf")
    assert storage.exists(reference)
    with open(storage.path_for(reference), "rb") as stream:
        assert stream.read() == b"data"

    assert storage.delete(reference) is True
    assert not storage.exists(reference)
    assert storage.delete(reference) is False


def test_references_are_unique(tmp_path):
    storage = LocalFileStorage(str(tmp_path))

    assert storage.save(b"a", ".docx") != storage.save(b"a", ".docx")


@pytest.mark.parametrize("reference", ["../etc/passwd", "nested/file.pdf", ""])
def test_reference_cannot_leave_upload_dir(tmp_path, reference):
    storage = LocalFileStorage(str(tmp_path))

    with pytest.raises(ValueError):
        storage.path_for(reference)
