from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image

from aspectframe.services.image_service import ImageService


def _encode(size, color=(200, 30, 30, 255), fmt="PNG") -> bytes:
    mode = "RGB" if fmt == "JPEG" else "RGBA"
    img = Image.new(mode, size, color[:3] if mode == "RGB" else color)
    buf = BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def encode_image():
    return _encode


@pytest.fixture
def image_service() -> ImageService:
    return ImageService()


@pytest.fixture
def make_source(image_service):
    def _make(width, height, color=(200, 30, 30, 255)):
        return image_service.decode(_encode((width, height), color), "image/png", "src.png")
    return _make


@pytest.fixture
def write_image(tmp_path):
    def _write(name, size=(40, 20), fmt="PNG"):
        path = tmp_path / name
        path.write_bytes(_encode(size, fmt=fmt))
        return path
    return _write
