"""
Uploader configuration for Multi Crop.

Classes:
    UploaderConfig: Target geometry, capacity and intake limits

Functions:
    load_uploader_config: Load a config from a JSON file
    save_uploader_config: Save a config to a JSON file
"""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from MC_Libs.constants import (
    DEFAULT_OUTPUT_HEIGHT,
    DEFAULT_OUTPUT_WIDTH,
    FIELD_MAX_HEIGHT,
    FIELD_MAX_IMAGES,
    FIELD_MAX_WIDTH,
    MAX_FILE_SIZE_BYTES,
)


@dataclass
class UploaderConfig:
    """Configuration for one upload session.

    Attributes:
        max_width: Target width; with max_height defines the crop aspect ratio
        max_height: Target height
        max_images: Session capacity
        size_limit_bytes: Per-file size ceiling (default: 10 MiB)
        output_width: Pixel width of each crop (default: 141)
        output_height: Pixel height of each crop (default: 141)
        decode_workers: Decoder thread count (default: None = executor default)
    """

    max_width: float
    max_height: float
    max_images: int = 1
    size_limit_bytes: int = MAX_FILE_SIZE_BYTES
    output_width: int = DEFAULT_OUTPUT_WIDTH
    output_height: int = DEFAULT_OUTPUT_HEIGHT
    decode_workers: Optional[int] = None

    def __post_init__(self):
        """Validate input parameters."""
        if self.max_width <= 0 or self.max_height <= 0:
            raise ValueError(f"max_width and max_height must be > 0, got {self.max_width}x{self.max_height}")

        if self.max_images < 0:
            raise ValueError(f"max_images must be >= 0, got {self.max_images}")

        if self.size_limit_bytes <= 0:
            raise ValueError(f"size_limit_bytes must be > 0, got {self.size_limit_bytes}")

        if self.output_width <= 0 or self.output_height <= 0:
            raise ValueError(f"output size must be positive, got {self.output_width}x{self.output_height}")

        if self.decode_workers is not None and self.decode_workers < 1:
            raise ValueError(f"decode_workers must be >= 1, got {self.decode_workers}")

    @property
    def aspect_ratio(self) -> float:
        return self.max_width / self.max_height

    @property
    def output_size(self) -> Tuple[int, int]:
        return self.output_width, self.output_height

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UploaderConfig":
        """
        Create from dictionary. Unknown keys are ignored.

        Raises:
            KeyError: If max_width or max_height is missing
        """
        for required in (FIELD_MAX_WIDTH, FIELD_MAX_HEIGHT):
            if required not in data:
                raise KeyError(f"Uploader config missing required '{required}' field")

        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        filtered.setdefault(FIELD_MAX_IMAGES, 1)
        return cls(**filtered)


def load_uploader_config(config_path: Path) -> UploaderConfig:
    """
    Load an uploader config from a JSON file.

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a JSON object or holds invalid values
        KeyError: If required fields are missing
    """
    payload = json.loads(Path(config_path).read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise ValueError(f"Uploader config must be a JSON object: {config_path}")
    return UploaderConfig.from_dict(payload)


def save_uploader_config(config_path: Path, config: UploaderConfig) -> None:
    Path(config_path).write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
