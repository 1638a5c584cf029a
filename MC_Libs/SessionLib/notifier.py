"""
Parent notification for Multi Crop.

The consuming workflow only ever sees the ordered list of finalized images
with empty slots left out. ParentNotifier is always handed the session as it
is after the mutation, never a list built before it.
"""

import logging
from typing import Callable, List, Optional

from MC_Libs.ImageEditingLib.image_models import EncodedImage
from MC_Libs.SessionLib.session_store import Session

logger = logging.getLogger(__name__)

ImagesCallback = Callable[[List[EncodedImage]], None]


def finalized_images(session: Session) -> List[EncodedImage]:
    return [slot.finalized for slot in session.slots if slot.finalized is not None]


class ParentNotifier:
    """Delivers the finalized image list to registered consumers."""

    def __init__(self, callback: Optional[ImagesCallback] = None):
        self._callbacks: List[ImagesCallback] = []
        if callback is not None:
            self.subscribe(callback)

    def subscribe(self, callback: ImagesCallback) -> None:
        if not callable(callback):
            raise ValueError(f"callback must be callable, got {type(callback)}")
        self._callbacks.append(callback)

    def unsubscribe(self, callback: ImagesCallback) -> bool:
        if callback in self._callbacks:
            self._callbacks.remove(callback)
            return True
        return False

    def emit(self, session: Session) -> List[EncodedImage]:
        images = finalized_images(session)
        logger.debug(f"Notifying {len(self._callbacks)} consumer(s) of {len(images)} finalized image(s)")
        for callback in list(self._callbacks):
            callback(list(images))
        return images
