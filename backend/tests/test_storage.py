from io import BytesIO

import pytest
from fastapi import HTTPException
from PIL import Image

from vitrina.services.storage import process_uploaded_image


def png_bytes(size=(40, 20), mode="RGBA"):
    buffer = BytesIO()
    Image.new(mode, size, (255, 0, 0, 128) if mode == "RGBA" else (255, 0, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


def test_process_image_converts_to_jpeg_and_limits_size():
    content, ext = process_uploaded_image(png_bytes((400, 100)), "foto.png", max_size=200)
    assert ext == ".jpg"
    image = Image.open(BytesIO(content))
    assert image.format == "JPEG"
    assert image.size == (200, 50)


def test_process_image_keeps_unreadable_content():
    content, ext = process_uploaded_image(b"not an image", "manual.pdf")
    assert content == b"not an image"
    assert ext == ".pdf"


def test_upload_generates_unique_public_name(storage):
    stored = storage.upload("Mi foto.png", png_bytes())
    assert stored.name.endswith("-Mi_foto.jpg")
    assert stored.url == f"/storage/products/{stored.name}"
    assert storage.name_from_url(stored.url) == stored.name
    assert storage.read(stored.name)[:2] == b"\xff\xd8"


def test_list_and_remove(storage):
    first = storage.upload("a.txt", b"a", process_image=False)
    second = storage.upload("b.txt", b"bb", process_image=False)
    names = {obj.name for obj in storage.list()}
    assert names == {first.name, second.name}
    assert len(storage.list(limit=1)) == 1

    assert storage.remove([first.name, "missing.txt"]) == 1
    assert [obj.name for obj in storage.list()] == [second.name]


def test_rejects_path_traversal(storage):
    with pytest.raises(HTTPException) as exc:
        storage.read("../secret")
    assert exc.value.status_code == 400


def test_name_from_foreign_url(storage):
    assert storage.name_from_url("https://cdn.example.com/x.jpg") is None
