"""
Core image editing operations for Multi Crop.

This module provides the Pillow-backed crop and edit capabilities the upload
session drives. Both take and return EncodedImage payloads; Pillow images
never leave this module.

Functions:
    fit_box_to_aspect: Clamp a selection box into an image and shrink it to an aspect ratio
    crop_to_aspect: Crop a PIL image to an aspect ratio and resize it to an output size
    rotate_image: Rotate by a multiple of 90 degrees
    flip_image: Mirror horizontally or flip vertically
    adjust_brightness: Scale image brightness

Classes:
    PillowCropper: Crop capability used for crop confirmation
    PillowImageEditor: Edit capability used for post-crop edits
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from MC_Libs.ImageEditingLib.image_models import CropBox, EncodedImage, OutputSize
from MC_Libs.constants import DEFAULT_OUTPUT_FORMAT
from MC_Libs.pillow_compat import LANCZOS, ImageEnhance, ImageOps

logger = logging.getLogger(__name__)

FLIP_DIRECTIONS = ("horizontal", "vertical")


def fit_box_to_aspect(
    box: Optional[CropBox],
    image_size: Tuple[int, int],
    aspect_ratio: float,
) -> Tuple[int, int, int, int]:
    """
    Clamp a selection box into the image and shrink it about its centre
    until width / height equals the aspect ratio.

    Args:
        box: (left, top, right, bottom) in source pixels, or None for the whole image
        image_size: (width, height) of the source image
        aspect_ratio: Target width / height ratio (must be > 0)

    Returns:
        Integer (left, top, right, bottom) box, at least 1x1 pixels

    Raises:
        ValueError: If aspect_ratio is not positive
    """
    if aspect_ratio <= 0:
        raise ValueError(f"aspect_ratio must be > 0, got {aspect_ratio}")

    width, height = image_size
    if box is None:
        box = (0, 0, width, height)

    left = min(max(float(box[0]), 0.0), float(width))
    top = min(max(float(box[1]), 0.0), float(height))
    right = min(max(float(box[2]), 0.0), float(width))
    bottom = min(max(float(box[3]), 0.0), float(height))

    # Degenerate selections fall back to the whole image
    if right - left < 1 or bottom - top < 1:
        left, top, right, bottom = 0.0, 0.0, float(width), float(height)

    box_width = right - left
    box_height = bottom - top
    if box_width / box_height > aspect_ratio:
        new_width = box_height * aspect_ratio
        new_height = box_height
    else:
        new_width = box_width
        new_height = box_width / aspect_ratio

    center_x = left + box_width / 2
    center_y = top + box_height / 2
    new_left = int(round(center_x - new_width / 2))
    new_top = int(round(center_y - new_height / 2))
    new_right = max(new_left + 1, int(round(center_x + new_width / 2)))
    new_bottom = max(new_top + 1, int(round(center_y + new_height / 2)))

    return new_left, new_top, min(new_right, width), min(new_bottom, height)


def crop_to_aspect(
    image: Any,
    aspect_ratio: float,
    output_size: OutputSize,
    box: Optional[CropBox] = None,
) -> Any:
    """
    Crop a PIL image to the aspect ratio and resize to the output size.

    Args:
        image: Source PIL Image
        aspect_ratio: Target width / height ratio
        output_size: (width, height) of the result
        box: Optional user selection in source pixels

    Returns:
        A new RGBA PIL Image of exactly output_size
    """
    if output_size[0] <= 0 or output_size[1] <= 0:
        raise ValueError(f"output_size must be positive, got {output_size}")

    img = image if image.mode == "RGBA" else image.convert("RGBA")
    crop_box = fit_box_to_aspect(box, img.size, aspect_ratio)
    return img.crop(crop_box).resize(tuple(output_size), LANCZOS)


def rotate_image(image: Any, degrees: int = 90) -> Any:
    """Rotate counter-clockwise by a multiple of 90 degrees."""
    if degrees % 90 != 0:
        raise ValueError(f"degrees must be a multiple of 90, got {degrees}")
    return image.rotate(degrees % 360, expand=True)


def flip_image(image: Any, direction: str = "horizontal") -> Any:
    if direction not in FLIP_DIRECTIONS:
        raise ValueError(f"direction must be one of {FLIP_DIRECTIONS}, got {direction!r}")
    if direction == "horizontal":
        return ImageOps.mirror(image)
    return ImageOps.flip(image)


def adjust_brightness(image: Any, factor: float = 1.0) -> Any:
    """
    Scale image brightness.

    Args:
        image: A PIL Image
        factor: 1.0 leaves the image unchanged, 0.0 gives black

    Returns:
        A new PIL Image
    """
    if factor < 0:
        raise ValueError(f"factor must be >= 0, got {factor}")
    return ImageEnhance.Brightness(image).enhance(factor)


class PillowCropper:
    """Crop capability: one EncodedImage in, one PNG EncodedImage out."""

    def __init__(self, output_format: str = DEFAULT_OUTPUT_FORMAT):
        self.output_format = output_format

    def crop(
        self,
        image: EncodedImage,
        aspect_ratio: float,
        output_size: OutputSize,
        box: Optional[CropBox] = None,
    ) -> EncodedImage:
        cropped = crop_to_aspect(image.open(), aspect_ratio, output_size, box=box)
        logger.debug(f"Cropped image to {output_size} at aspect ratio {aspect_ratio:.4f}")
        return EncodedImage.from_pil(cropped, format=self.output_format)


class PillowImageEditor:
    """
    Edit capability applied to an already-finalized image.

    Operations:
        rotate: degrees (multiple of 90)
        flip: direction ('horizontal' or 'vertical')
        brightness: factor (>= 0)
        recrop: aspect_ratio, output_size, box - re-crops from the original
    """

    def __init__(self, output_format: str = DEFAULT_OUTPUT_FORMAT):
        self.output_format = output_format
        self._operations: Dict[str, Callable[..., Any]] = {
            "rotate": rotate_image,
            "flip": flip_image,
            "brightness": adjust_brightness,
        }

    def list_operations(self):
        return sorted(list(self._operations) + ["recrop"])

    def apply(
        self,
        image: EncodedImage,
        original: EncodedImage,
        operation: str,
        **kwargs: Any,
    ) -> EncodedImage:
        """
        Apply one edit operation and return the edited image.

        Args:
            image: The slot's current finalized image
            original: The slot's original upload (used by 'recrop')
            operation: Name of the operation
            **kwargs: Operation parameters

        Returns:
            A new EncodedImage

        Raises:
            ValueError: If the operation is unknown or its parameters are invalid
        """
        if operation == "recrop":
            result = crop_to_aspect(
                original.open(),
                kwargs["aspect_ratio"],
                kwargs["output_size"],
                box=kwargs.get("box"),
            )
        elif operation in self._operations:
            result = self._operations[operation](image.open(), **kwargs)
        else:
            available = ", ".join(self.list_operations())
            raise ValueError(f"Unknown edit operation '{operation}'. Available: {available}")

        logger.debug(f"Applied edit operation: {operation}")
        return EncodedImage.from_pil(result, format=self.output_format)
