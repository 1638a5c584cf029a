"""
UploaderLib - PyQt5 front end for an upload session

This module provides the window that lets a user upload, crop, edit
and remove images for the Multi Crop project.
"""

from MC_Libs.UploaderLib.uploader_window import MultiCropWindow

__all__ = [
    "MultiCropWindow",
]
