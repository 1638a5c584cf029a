"""
Compatibility wrapper to import Pillow (which provides the `PIL` namespace)
and expose the handful of symbols Multi Crop needs from one place.

This module loads the Pillow-provided modules via importlib and re-exports
`Image`, `ImageOps` and `ImageEnhance`, plus the LANCZOS resampling filter
under a name that works on both older and current Pillow releases.
"""
from importlib import import_module
from types import ModuleType
from typing import Optional


def _import(name: str) -> Optional[ModuleType]:
    try:
        return import_module(name)
    except ImportError:
        return None


_pil_image = _import("PIL.Image")

if _pil_image is None:
    raise ImportError("pillow (PIL) is required: install with 'pip install Pillow'")

Image = _pil_image
ImageOps = import_module("PIL.ImageOps")
ImageEnhance = import_module("PIL.ImageEnhance")

# Pillow >= 9.1 moved filters into the Image.Resampling enum
_resampling = getattr(Image, "Resampling", Image)
LANCZOS = _resampling.LANCZOS
