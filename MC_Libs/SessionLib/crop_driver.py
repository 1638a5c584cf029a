"""
Sequential crop driver for Multi Crop.

Two states, carried on Session.active_slot_id:
    Idle         - active_slot_id is None
    Cropping(id) - slot `id` is shown to the user for its initial crop

A new batch starts cropping at its first slot unless a crop is already in
progress. After each confirmation the driver scans forward (higher positions
only) for the next slot with no finalized image. Earlier empty slots are not
revisited automatically; resume_cropping() is the explicit way back to them.
"""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from MC_Libs.ImageEditingLib.image_models import EncodedImage
from MC_Libs.SessionLib.session_store import (
    NoActiveCropError,
    Session,
    StaleSlotError,
    set_finalized,
)

logger = logging.getLogger(__name__)


def next_uncropped_after(session: Session, position: int) -> Optional[int]:
    """Id of the first slot after `position` whose finalized image is empty."""
    for slot in session.slots[position + 1:]:
        if not slot.is_finalized:
            return slot.slot_id
    return None


def _transition(session: Session, slot_id: Optional[int]) -> Session:
    if slot_id is None:
        logger.debug("Crop driver idle")
    else:
        logger.debug(f"Crop driver cropping slot {slot_id}")
    return replace(session, active_slot_id=slot_id)


def begin_batch(session: Session, new_ids: Sequence[int]) -> Session:
    """Start cropping the first slot of a freshly appended batch, if idle."""
    if not new_ids or session.is_cropping:
        return session
    return _transition(session, new_ids[0])


def confirm_crop(session: Session, slot_id: int, image: EncodedImage) -> Session:
    """
    Commit the crop for the active slot and move to the next uncropped one.

    Args:
        session: Current session
        slot_id: Slot the crop was made for; must be the active slot
        image: Output of the crop capability

    Returns:
        Session with the slot finalized and the driver advanced

    Raises:
        NoActiveCropError: If no slot is being cropped
        StaleSlotError: If slot_id is not the active slot
    """
    if session.active_slot_id is None:
        raise NoActiveCropError("No slot is being cropped")
    if slot_id != session.active_slot_id:
        raise StaleSlotError(f"Slot {slot_id} is not being cropped (active slot is {session.active_slot_id})")

    position = session.position_of(slot_id)
    updated = set_finalized(session, slot_id, image)
    return _transition(updated, next_uncropped_after(updated, position))


def advance_after_removal(session: Session, removed_position: int) -> Session:
    """
    Move off a slot that was removed while being cropped.

    The slot that slid into removed_position is the first candidate; the scan
    is forward-only like after a confirmation.
    """
    return _transition(session, next_uncropped_after(session, removed_position - 1))


def resume_cropping(session: Session) -> Session:
    """When idle, start cropping the first empty slot anywhere in the session."""
    if session.is_cropping:
        return session
    return _transition(session, next_uncropped_after(session, -1))
