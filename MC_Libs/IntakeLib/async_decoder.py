"""
Batch decoding for Multi Crop.

Every accepted file of a selection is decoded concurrently on a thread pool
and the batch is joined before anything touches the session, so a batch is
appended exactly once with all of its originals at the same time.

Decode failures are soft: a file Pillow cannot read is logged, reported in
DecodedBatch.failed and left out of the batch; the other files still go in.

Classes:
    DecodedBatch: The joined result of one batch

Functions:
    decode_file: Decode one raw file into an EncodedImage
    decode_batch: Decode a whole selection concurrently and join
"""

import concurrent.futures
import logging
from dataclasses import dataclass, field
from io import BytesIO
from typing import Dict, List, Optional, Sequence, Tuple

from MC_Libs.ImageEditingLib.image_models import EncodedImage, RawFile
from MC_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)

DECODE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


@dataclass
class DecodedBatch:
    """Decoded images in selection order, plus (name, reason) for each failure."""

    images: List[EncodedImage] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)


def decode_file(raw: RawFile) -> EncodedImage:
    """
    Decode one raw file into a self-contained EncodedImage.

    The payload keeps the file's own bytes; decoding only proves Pillow can
    read them and pins down the real media type.

    Args:
        raw: File from the selection

    Returns:
        EncodedImage holding the file's bytes

    Raises:
        OSError: If Pillow cannot identify or load the image
    """
    with Image.open(BytesIO(raw.data)) as img:
        img.load()
        media_type = Image.MIME.get(img.format or "", "") or raw.media_type
    return EncodedImage(data=bytes(raw.data), media_type=media_type)


def decode_batch(
    files: Sequence[RawFile],
    max_workers: Optional[int] = None,
    use_threading: bool = True,
) -> DecodedBatch:
    """
    Decode every file concurrently and return once all of them finished.

    Args:
        files: Validated files, in selection order
        max_workers: Maximum number of threads (default: None = executor default)
        use_threading: Decode on a thread pool (default: True)

    Returns:
        DecodedBatch with images in selection order
    """
    outcomes: Dict[int, EncodedImage] = {}
    failed: Dict[int, Tuple[str, str]] = {}

    if use_threading and len(files) > 1:
        with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures: Dict[concurrent.futures.Future, int] = {}
            for position, raw in enumerate(files):
                futures[executor.submit(decode_file, raw)] = position

            for future in concurrent.futures.as_completed(futures):
                position = futures[future]
                try:
                    outcomes[position] = future.result()
                except DECODE_ERRORS as e:
                    failed[position] = (files[position].name, str(e))
    else:
        for position, raw in enumerate(files):
            try:
                outcomes[position] = decode_file(raw)
            except DECODE_ERRORS as e:
                failed[position] = (raw.name, str(e))

    for name, reason in (failed[position] for position in sorted(failed)):
        logger.warning(f"Could not decode {name}, dropping it from the batch: {reason}")

    batch = DecodedBatch(
        images=[outcomes[position] for position in sorted(outcomes)],
        failed=[failed[position] for position in sorted(failed)],
    )
    logger.info(f"Decoded {len(batch.images)} of {len(files)} file(s)")
    return batch
