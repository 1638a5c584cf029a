"""
Image data models for Multi Crop.

This module defines the core data structures passed between the intake,
session and editing layers.

Classes:
    RawFile: One entry of a raw file selection (payload + declared media type + size)
    EncodedImage: An immutable, self-contained encoded image payload

Type Aliases:
    CropBox: A (left, top, right, bottom) tuple in source pixels
    OutputSize: A (width, height) tuple in output pixels
"""

import base64
import binascii
import mimetypes
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Tuple

from MC_Libs.constants import (
    DATA_URL_BASE64_MARKER,
    DATA_URL_PREFIX,
    DEFAULT_OUTPUT_FORMAT,
    FALLBACK_MEDIA_TYPE,
    IMAGE_MEDIA_TYPE_PREFIX,
)
from MC_Libs.pillow_compat import Image

CropBox = Tuple[float, float, float, float]
OutputSize = Tuple[int, int]


@dataclass
class RawFile:
    """A file as handed over by the platform's file picker.

    Attributes:
        name: Display name of the file
        media_type: Declared media type (e.g. 'image/png'), may be empty
        data: Raw file bytes
        size: Declared byte size (defaults to len(data))
    """

    name: str
    media_type: str
    data: bytes
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.data)

    @property
    def is_image(self) -> bool:
        return (self.media_type or "").lower().startswith(IMAGE_MEDIA_TYPE_PREFIX)

    @classmethod
    def from_path(cls, path: Path) -> "RawFile":
        """
        Read a file from disk, guessing its media type from the extension.

        Args:
            path: Path to the file

        Returns:
            RawFile with the file's bytes and guessed media type

        Raises:
            OSError: If the file cannot be read
        """
        path = Path(path)
        media_type, _ = mimetypes.guess_type(path.name)
        data = path.read_bytes()
        return cls(name=path.name, media_type=media_type or "", data=data)


@dataclass(frozen=True)
class EncodedImage:
    """An encoded image payload. Never mutated; edits produce new instances."""

    data: bytes
    media_type: str = FALLBACK_MEDIA_TYPE

    def __repr__(self) -> str:
        return f"EncodedImage(media_type={self.media_type!r}, bytes={len(self.data)})"

    def open(self) -> Any:
        """Open the payload as a PIL Image (fully loaded)."""
        img = Image.open(BytesIO(self.data))
        img.load()
        return img

    def to_data_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"{DATA_URL_PREFIX}{self.media_type}{DATA_URL_BASE64_MARKER}{encoded}"

    @classmethod
    def from_data_url(cls, url: str) -> "EncodedImage":
        """
        Parse a base64 `data:` URL.

        Raises:
            ValueError: If the URL is not a base64 data URL
        """
        if not url.startswith(DATA_URL_PREFIX) or DATA_URL_BASE64_MARKER not in url:
            raise ValueError("Not a base64 data URL")

        header, payload = url[len(DATA_URL_PREFIX):].split(DATA_URL_BASE64_MARKER, 1)
        try:
            data = base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid base64 payload in data URL: {e}") from e
        return cls(data=data, media_type=header or FALLBACK_MEDIA_TYPE)

    @classmethod
    def from_pil(cls, image: Any, format: str = DEFAULT_OUTPUT_FORMAT) -> "EncodedImage":
        buffer = BytesIO()
        image.save(buffer, format=format)
        media_type = Image.MIME.get(format.upper(), FALLBACK_MEDIA_TYPE)
        return cls(data=buffer.getvalue(), media_type=media_type)
