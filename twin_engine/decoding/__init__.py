"""
Field Decoder: raw ledger object payloads -> TwinRecord.

Pure functions; no state, no I/O.
"""
from .bytes_field import (
    ByteSequence,
    Hex,
    PlainText,
    RawBytesField,
    Unrecognized,
    WrappedHex,
    classify_bytes_field,
    decode_bytes_like_field,
    decode_raw_bytes_field,
)
from .record import DecodeReport, DecodeViolation, decode_twin_record, decode_twin_record_report

__all__ = [
    "ByteSequence",
    "Hex",
    "PlainText",
    "RawBytesField",
    "Unrecognized",
    "WrappedHex",
    "classify_bytes_field",
    "decode_bytes_like_field",
    "decode_raw_bytes_field",
    "DecodeReport",
    "DecodeViolation",
    "decode_twin_record",
    "decode_twin_record_report",
]
