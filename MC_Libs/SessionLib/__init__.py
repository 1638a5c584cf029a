"""
SessionLib - The paired image session and its handlers

This module holds the upload session state, the sequential crop driver,
the edit relay and removal handler, parent notification, and the
controller that owns a session.
"""

from MC_Libs.SessionLib.session_store import (
    ImageSlot,
    NoActiveCropError,
    Session,
    StaleSlotError,
    append_originals,
    delete_slot,
    new_session,
    set_finalized,
)
from MC_Libs.SessionLib.crop_driver import (
    advance_after_removal,
    begin_batch,
    confirm_crop,
    next_uncropped_after,
    resume_cropping,
)
from MC_Libs.SessionLib.slot_handlers import relay_edit, remove_slot
from MC_Libs.SessionLib.notifier import ParentNotifier, finalized_images
from MC_Libs.SessionLib.uploader_config import (
    UploaderConfig,
    load_uploader_config,
    save_uploader_config,
)
from MC_Libs.SessionLib.session_controller import UploadSessionController

__all__ = [
    "ImageSlot",
    "NoActiveCropError",
    "Session",
    "StaleSlotError",
    "append_originals",
    "delete_slot",
    "new_session",
    "set_finalized",
    "advance_after_removal",
    "begin_batch",
    "confirm_crop",
    "next_uncropped_after",
    "resume_cropping",
    "relay_edit",
    "remove_slot",
    "ParentNotifier",
    "finalized_images",
    "UploaderConfig",
    "load_uploader_config",
    "save_uploader_config",
    "UploadSessionController",
]
