"""
MC_Libs - Multi Crop Library Modules

This package contains core functionality for the Multi Crop uploader,
organized into specialized sub-packages:

- ImageEditingLib: Image payload models and the Pillow crop/edit capabilities
- IntakeLib: File selection validation and batch decoding
- SessionLib: The paired image session, crop driver and parent notification
- UploaderLib: PyQt5 window driving an upload session
"""

__version__ = "0.1.0"
