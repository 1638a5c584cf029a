"""
File intake validation for Multi Crop.

Filters a raw file selection down to the image files that fit the
remaining slot budget and the per-file size ceiling. Nothing here raises
for rejected input: excluded files are reported on the IntakeResult.

Classes:
    IntakeResult: Outcome of filtering one selection

Functions:
    remaining_slots: Compute the slot budget for a new selection
    validate_selection: Filter a raw selection
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from MC_Libs.ImageEditingLib.image_models import RawFile
from MC_Libs.constants import MAX_FILE_SIZE_BYTES, OVERSIZED_FILES_WARNING

logger = logging.getLogger(__name__)


@dataclass
class IntakeResult:
    """Result of filtering one raw selection.

    Attributes:
        accepted: Files that passed every check, in selection order
        over_capacity: Files beyond the remaining slot budget (silently ignored)
        wrong_type: Files whose declared media type is not an image type
        oversized: Files larger than the size ceiling
    """

    accepted: List[RawFile] = field(default_factory=list)
    over_capacity: List[RawFile] = field(default_factory=list)
    wrong_type: List[RawFile] = field(default_factory=list)
    oversized: List[RawFile] = field(default_factory=list)

    @property
    def warning(self) -> Optional[str]:
        """The single aggregate warning to show, or None."""
        if self.oversized:
            return OVERSIZED_FILES_WARNING
        return None


def remaining_slots(capacity: int, finalized_count: int) -> int:
    return max(0, int(capacity) - int(finalized_count))


def validate_selection(
    files: Sequence[RawFile],
    finalized_count: int,
    capacity: int,
    size_limit_bytes: int = MAX_FILE_SIZE_BYTES,
) -> IntakeResult:
    """
    Filter a raw selection against the slot budget, media type and size.

    The budget is applied first, in selection order, so a file that is later
    dropped for its type or size still uses up one of the remaining slots.

    Args:
        files: Raw selection in the order the picker returned it
        finalized_count: Number of slots that already hold a finalized image
        capacity: Maximum number of images in the session
        size_limit_bytes: Per-file size ceiling (inclusive)

    Returns:
        IntakeResult with the accepted files and every exclusion
    """
    budget = remaining_slots(capacity, finalized_count)
    selected = list(files[:budget])
    result = IntakeResult(over_capacity=list(files[budget:]))

    for raw in selected:
        if not raw.is_image:
            result.wrong_type.append(raw)
        elif raw.size > size_limit_bytes:
            result.oversized.append(raw)
        else:
            result.accepted.append(raw)

    if result.over_capacity:
        logger.debug(f"Ignored {len(result.over_capacity)} file(s) beyond the remaining {budget} slot(s)")
    if result.wrong_type:
        logger.debug(f"Ignored {len(result.wrong_type)} non-image file(s)")
    if result.oversized:
        names = ", ".join(raw.name for raw in result.oversized)
        logger.warning(f"Rejected {len(result.oversized)} oversized file(s): {names}")

    return result
