"""
Pytest configuration and shared fixtures for Multi Crop tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

from io import BytesIO

import pytest
from PIL import Image

from MC_Libs.ImageEditingLib.image_models import EncodedImage, RawFile


def encode_test_image(size=(40, 20), color=(255, 0, 0), format="PNG") -> bytes:
    """Encode a solid-color image of the given size into bytes."""
    mode = "RGB" if format.upper() in ("JPEG", "JPG") else "RGBA"
    buffer = BytesIO()
    Image.new(mode, size, color).save(buffer, format=format)
    return buffer.getvalue()


@pytest.fixture
def make_raw_file():
    """
    Provide a factory for RawFile objects backed by real image bytes.

    Returns:
        Callable accepting name, media_type, size, image_size, color, format
    """
    def factory(name="photo.png", media_type="image/png", size=None,
                image_size=(40, 20), color=(255, 0, 0), format="PNG"):
        data = encode_test_image(image_size, color, format)
        return RawFile(name=name, media_type=media_type, data=data, size=size)

    return factory


@pytest.fixture
def make_encoded():
    """
    Provide a factory for small opaque EncodedImage payloads.

    The payloads are not valid images; they only need to be distinguishable.
    """
    def factory(label):
        return EncodedImage(data=f"image-{label}".encode("ascii"), media_type="image/png")

    return factory


@pytest.fixture
def png_image():
    """Provide a real 40x20 red PNG as an EncodedImage."""
    return EncodedImage(data=encode_test_image((40, 20)), media_type="image/png")


class RecordingConsumer:
    """Consumer callback that records every list it is handed."""

    def __init__(self):
        self.calls = []

    def __call__(self, images):
        self.calls.append(images)

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def consumer():
    return RecordingConsumer()
