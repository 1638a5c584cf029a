"""
Constants and configuration values for Multi Crop.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Intake limits
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
IMAGE_MEDIA_TYPE_PREFIX = "image/"
OVERSIZED_FILES_WARNING = "Some files are too large. Please upload files smaller than 10MB."

# Crop output
DEFAULT_OUTPUT_WIDTH = 141
DEFAULT_OUTPUT_HEIGHT = 141
DEFAULT_OUTPUT_FORMAT = "PNG"

# Decoding
FALLBACK_MEDIA_TYPE = "application/octet-stream"
DATA_URL_PREFIX = "data:"
DATA_URL_BASE64_MARKER = ";base64,"

# UI constants
DEFAULT_WINDOW_WIDTH = 1100
DEFAULT_WINDOW_HEIGHT = 760
CROP_PREVIEW_HEIGHT = 400
THUMBNAIL_SIZE = 141
FILE_DIALOG_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)"

# Config field names
FIELD_MAX_WIDTH = "max_width"
FIELD_MAX_HEIGHT = "max_height"
FIELD_MAX_IMAGES = "max_images"
