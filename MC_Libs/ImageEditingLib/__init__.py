"""
ImageEditingLib - Image payloads and the Pillow crop/edit capabilities

This module provides the image models and the crop and edit operations
for the Multi Crop project.
"""

from MC_Libs.ImageEditingLib.image_models import CropBox, EncodedImage, OutputSize, RawFile
from MC_Libs.ImageEditingLib.image_editing_ops import (
    PillowCropper,
    PillowImageEditor,
    adjust_brightness,
    crop_to_aspect,
    fit_box_to_aspect,
    flip_image,
    rotate_image,
)

__all__ = [
    "CropBox",
    "EncodedImage",
    "OutputSize",
    "RawFile",
    "PillowCropper",
    "PillowImageEditor",
    "adjust_brightness",
    "crop_to_aspect",
    "fit_box_to_aspect",
    "flip_image",
    "rotate_image",
]
