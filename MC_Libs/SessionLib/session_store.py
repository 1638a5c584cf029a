"""
Paired image store for Multi Crop.

A Session is an immutable value: an ordered tuple of ImageSlots, each pairing
an original upload with its (possibly still empty) finalized image, plus the
id of the slot currently being cropped. Every operation returns a new Session.

Slots are addressed by a stable slot_id handed out from a per-session counter.
Positions are only derived when scanning or presenting, so removing a slot
never makes another handler point at the wrong image.

Invariants:
    - originals and finalized always have the same length (one pair per slot)
    - len(slots) <= capacity
    - active_slot_id, when set, names a slot whose finalized is still empty

Classes:
    StaleSlotError: A slot id or position no longer refers to a slot
    NoActiveCropError: A crop was confirmed while no slot is being cropped
    ImageSlot: One logical image
    Session: The whole upload session

Functions:
    new_session: Create an empty session
    append_originals: Append one decoded batch
    set_finalized: Overwrite a slot's finalized image
    delete_slot: Remove a slot and close the gap
"""

import logging
from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from MC_Libs.ImageEditingLib.image_models import EncodedImage

logger = logging.getLogger(__name__)


class StaleSlotError(KeyError):
    """Raised when a slot id or position does not refer to a live slot."""


class NoActiveCropError(RuntimeError):
    """Raised when a crop is confirmed while the session is idle."""


@dataclass(frozen=True)
class ImageSlot:
    slot_id: int
    original: EncodedImage
    finalized: Optional[EncodedImage] = None

    @property
    def is_finalized(self) -> bool:
        return self.finalized is not None


@dataclass(frozen=True)
class Session:
    """Immutable upload session state.

    Attributes:
        capacity: Maximum number of slots
        slots: Slots in display order
        active_slot_id: Slot currently being cropped, or None when idle
        next_slot_id: Next id to hand out
    """

    capacity: int
    slots: Tuple[ImageSlot, ...] = ()
    active_slot_id: Optional[int] = None
    next_slot_id: int = 0

    def __post_init__(self):
        if self.capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {self.capacity}")

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def originals(self) -> Tuple[EncodedImage, ...]:
        return tuple(slot.original for slot in self.slots)

    @property
    def finalized(self) -> Tuple[Optional[EncodedImage], ...]:
        return tuple(slot.finalized for slot in self.slots)

    @property
    def slot_ids(self) -> Tuple[int, ...]:
        return tuple(slot.slot_id for slot in self.slots)

    @property
    def finalized_count(self) -> int:
        return sum(1 for slot in self.slots if slot.is_finalized)

    @property
    def free_capacity(self) -> int:
        return max(0, self.capacity - len(self.slots))

    @property
    def is_cropping(self) -> bool:
        return self.active_slot_id is not None

    @property
    def active_position(self) -> Optional[int]:
        if self.active_slot_id is None:
            return None
        return self.position_of(self.active_slot_id)

    def position_of(self, slot_id: int) -> int:
        """
        Translate a slot id into its current position.

        Raises:
            StaleSlotError: If no slot has this id
        """
        for position, slot in enumerate(self.slots):
            if slot.slot_id == slot_id:
                return position
        raise StaleSlotError(f"No slot with id {slot_id}. Live ids: {list(self.slot_ids)}")

    def slot_id_at(self, position: int) -> int:
        """
        Translate a position into the id of the slot currently there.

        Raises:
            StaleSlotError: If the position is out of range
        """
        if not 0 <= position < len(self.slots):
            raise StaleSlotError(f"Position {position} out of range for {len(self.slots)} slot(s)")
        return self.slots[position].slot_id

    def get_slot(self, slot_id: int) -> ImageSlot:
        return self.slots[self.position_of(slot_id)]


def new_session(capacity: int) -> Session:
    return Session(capacity=int(capacity))


def append_originals(session: Session, images: Sequence[EncodedImage]) -> Tuple[Session, List[int]]:
    """
    Append one decoded batch, every new slot with an empty finalized image.

    Images beyond the session's free capacity are dropped so the slot count
    never exceeds capacity.

    Args:
        session: Current session
        images: Decoded originals in selection order

    Returns:
        (new session, ids of the appended slots in order)
    """
    fitting = list(images[:session.free_capacity])
    if len(fitting) < len(images):
        logger.debug(f"Dropped {len(images) - len(fitting)} decoded image(s) beyond capacity {session.capacity}")

    new_slots = tuple(
        ImageSlot(slot_id=session.next_slot_id + offset, original=image)
        for offset, image in enumerate(fitting)
    )
    new_ids = [slot.slot_id for slot in new_slots]
    updated = replace(
        session,
        slots=session.slots + new_slots,
        next_slot_id=session.next_slot_id + len(new_slots),
    )
    return updated, new_ids


def set_finalized(session: Session, slot_id: int, image: EncodedImage) -> Session:
    """
    Overwrite one slot's finalized image. The original is never touched.

    Raises:
        StaleSlotError: If no slot has this id
    """
    position = session.position_of(slot_id)
    slots = list(session.slots)
    slots[position] = replace(slots[position], finalized=image)
    return replace(session, slots=tuple(slots))


def delete_slot(session: Session, slot_id: int) -> Tuple[Session, int]:
    """
    Remove a slot (original and finalized together); later slots move up one.

    Leaves active_slot_id as it was; the crop driver decides what happens
    when the active slot is the one removed.

    Returns:
        (new session, position the slot occupied)

    Raises:
        StaleSlotError: If no slot has this id
    """
    position = session.position_of(slot_id)
    slots = session.slots[:position] + session.slots[position + 1:]
    return replace(session, slots=slots), position
