"""
Edit relay and removal handler for Multi Crop.

Functions:
    relay_edit: Store an edited image as a slot's finalized image
    remove_slot: Delete a slot and keep the crop driver consistent
"""

import logging

from MC_Libs.ImageEditingLib.image_models import EncodedImage
from MC_Libs.SessionLib.crop_driver import advance_after_removal, confirm_crop
from MC_Libs.SessionLib.session_store import Session, delete_slot, set_finalized

logger = logging.getLogger(__name__)


def relay_edit(session: Session, slot_id: int, image: EncodedImage) -> Session:
    """
    Overwrite a slot's finalized image with the editor's output.

    An edit that lands on the slot being cropped counts as its confirmation,
    so the driver moves on instead of pointing at a filled slot.

    Raises:
        StaleSlotError: If no slot has this id
    """
    if slot_id == session.active_slot_id:
        return confirm_crop(session, slot_id, image)

    updated = set_finalized(session, slot_id, image)
    logger.debug(f"Relayed edit to slot {slot_id}")
    return updated


def remove_slot(session: Session, slot_id: int) -> Session:
    """
    Delete one logical image, original and finalized together.

    Raises:
        StaleSlotError: If no slot has this id
    """
    updated, position = delete_slot(session, slot_id)
    logger.debug(f"Removed slot {slot_id} from position {position}")

    if slot_id == session.active_slot_id:
        updated = advance_after_removal(updated, position)
    return updated
