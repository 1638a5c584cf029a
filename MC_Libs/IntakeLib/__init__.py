"""
IntakeLib - File selection validation and batch decoding

This module turns a raw file selection into decoded images ready to be
appended to an upload session.
"""

from MC_Libs.IntakeLib.file_intake import IntakeResult, remaining_slots, validate_selection
from MC_Libs.IntakeLib.async_decoder import DecodedBatch, decode_batch, decode_file

__all__ = [
    "IntakeResult",
    "remaining_slots",
    "validate_selection",
    "DecodedBatch",
    "decode_batch",
    "decode_file",
]
