"""
Upload session controller for Multi Crop.

The controller owns the current Session and is the single writer to it.
Each public operation validates, computes the next Session with the pure
functions from session_store, crop_driver and slot_handlers, swaps it in
under a lock, and then notifies consumers with that post-mutation session.

Batch decoding runs outside the lock; only the append that follows the
join is serialized, so two overlapping selections are applied one after
the other and capacity is re-checked when each one lands.

Classes:
    UploadSessionController: Stateful owner of one upload session
"""

import logging
import threading
from typing import Any, Callable, List, Optional, Sequence

from MC_Libs.ImageEditingLib.image_editing_ops import PillowCropper, PillowImageEditor
from MC_Libs.ImageEditingLib.image_models import CropBox, EncodedImage, RawFile
from MC_Libs.IntakeLib.async_decoder import decode_batch
from MC_Libs.IntakeLib.file_intake import IntakeResult, remaining_slots, validate_selection
from MC_Libs.SessionLib import crop_driver
from MC_Libs.SessionLib.notifier import ImagesCallback, ParentNotifier, finalized_images
from MC_Libs.SessionLib.session_store import NoActiveCropError, Session, append_originals, new_session
from MC_Libs.SessionLib.slot_handlers import relay_edit, remove_slot
from MC_Libs.SessionLib.uploader_config import UploaderConfig

logger = logging.getLogger(__name__)

WarningCallback = Callable[[str], None]


class UploadSessionController:
    """
    Drives one multi-image upload: intake, sequential cropping, edits and
    removals, keeping the consumer informed of the finalized images.

    Example:
        >>> controller = UploadSessionController(config, on_images_update=print)
        >>> controller.add_files(files)
        >>> controller.confirm_crop()
        >>> controller.finalized_images
    """

    def __init__(
        self,
        config: UploaderConfig,
        on_images_update: Optional[ImagesCallback] = None,
        on_warning: Optional[WarningCallback] = None,
        cropper: Optional[Any] = None,
        editor: Optional[Any] = None,
    ):
        self.config = config
        self.notifier = ParentNotifier(on_images_update)
        self.on_warning = on_warning
        self.cropper = cropper if cropper is not None else PillowCropper()
        self.editor = editor if editor is not None else PillowImageEditor()
        self._lock = threading.RLock()
        self._session = new_session(config.max_images)

    @property
    def session(self) -> Session:
        return self._session

    @property
    def finalized_images(self) -> List[EncodedImage]:
        return finalized_images(self._session)

    @property
    def remaining_slots(self) -> int:
        return remaining_slots(self._session.capacity, self._session.finalized_count)

    @property
    def can_upload(self) -> bool:
        return self.remaining_slots > 0 and not self._session.is_cropping

    @property
    def is_complete(self) -> bool:
        return self._session.finalized_count == self._session.capacity

    @property
    def progress_text(self) -> str:
        position = self._session.active_position
        if position is None:
            return ""
        return f"Image {position + 1} of {len(self._session)}"

    def _commit(self, session: Session) -> List[EncodedImage]:
        self._session = session
        return self.notifier.emit(session)

    def add_files(self, files: Sequence[RawFile]) -> IntakeResult:
        """
        Validate, decode and append one file selection.

        Args:
            files: Raw selection in picker order

        Returns:
            IntakeResult describing which files were accepted and excluded
        """
        intake = validate_selection(
            files,
            finalized_count=self._session.finalized_count,
            capacity=self._session.capacity,
            size_limit_bytes=self.config.size_limit_bytes,
        )
        if intake.warning and self.on_warning is not None:
            self.on_warning(intake.warning)

        if not intake.accepted:
            return intake

        batch = decode_batch(intake.accepted, max_workers=self.config.decode_workers)

        with self._lock:
            session, new_ids = append_originals(self._session, batch.images)
            session = crop_driver.begin_batch(session, new_ids)
            self._commit(session)

        logger.info(f"Appended {len(new_ids)} image(s); session holds {len(self._session)}")
        return intake

    def confirm_crop(self, box: Optional[CropBox] = None) -> EncodedImage:
        """
        Crop the active slot's original and commit it as the slot's finalized image.

        Args:
            box: Optional user selection in source pixels; the centred
                 largest box of the target aspect ratio is used otherwise

        Returns:
            The cropped image

        Raises:
            NoActiveCropError: If no slot is being cropped
        """
        with self._lock:
            slot_id = self._session.active_slot_id
            if slot_id is None:
                raise NoActiveCropError("No slot is being cropped")

            original = self._session.get_slot(slot_id).original
            cropped = self.cropper.crop(
                original,
                self.config.aspect_ratio,
                self.config.output_size,
                box=box,
            )
            self._commit(crop_driver.confirm_crop(self._session, slot_id, cropped))

        logger.info(f"Confirmed crop for slot {slot_id}")
        return cropped

    def apply_edit(self, slot_id: int, image: EncodedImage) -> List[EncodedImage]:
        """
        Store an edited image for a slot and notify.

        Raises:
            StaleSlotError: If no slot has this id
        """
        with self._lock:
            return self._commit(relay_edit(self._session, slot_id, image))

    def edit_slot(self, slot_id: int, operation: str, **kwargs: Any) -> EncodedImage:
        """
        Run the edit capability on a finalized slot and relay its result.

        Raises:
            StaleSlotError: If no slot has this id
            ValueError: If the slot has no finalized image or the operation is invalid
        """
        with self._lock:
            slot = self._session.get_slot(slot_id)
            if slot.finalized is None:
                raise ValueError(f"Slot {slot_id} has not been cropped yet")

            if operation == "recrop":
                kwargs.setdefault("aspect_ratio", self.config.aspect_ratio)
                kwargs.setdefault("output_size", self.config.output_size)

            edited = self.editor.apply(slot.finalized, slot.original, operation, **kwargs)
            self._commit(relay_edit(self._session, slot_id, edited))
        return edited

    def remove(self, slot_id: int) -> List[EncodedImage]:
        """
        Remove one image and notify.

        Raises:
            StaleSlotError: If no slot has this id
        """
        with self._lock:
            return self._commit(remove_slot(self._session, slot_id))

    def remove_at(self, position: int) -> List[EncodedImage]:
        with self._lock:
            return self.remove(self._session.slot_id_at(position))

    def resume_cropping(self) -> Optional[int]:
        """Start cropping the first uncropped slot, if idle. Returns the active slot id."""
        with self._lock:
            self._session = crop_driver.resume_cropping(self._session)
            return self._session.active_slot_id
