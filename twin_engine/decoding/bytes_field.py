"""
Byte-vector field decoding.

Ledger queries return `vector<u8>` fields in several shapes depending on the
serialization path. Classification picks exactly one variant; decoding each
variant is total and never raises.

    "Serial ABC123"                   -> PlainText
    "0x53657269616c"                  -> Hex
    [83, 101, 114, 105, 97, 108]      -> ByteSequence
    {"bytes": "0x53657269616c"}       -> WrappedHex
    anything else / None              -> Unrecognized
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Tuple, Union

logger = logging.getLogger(__name__)

HEX_PREFIX = "0x"
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Hex:
    # digits without the 0x prefix
    digits: str


@dataclass(frozen=True)
class ByteSequence:
    values: Tuple[Any, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WrappedHex:
    digits: str


@dataclass(frozen=True)
class Unrecognized:
    type_name: str = "NoneType"


RawBytesField = Union[PlainText, Hex, ByteSequence, WrappedHex, Unrecognized]


def _strip_prefix(s: str) -> str:
    return s[len(HEX_PREFIX):] if s.startswith(HEX_PREFIX) else s


def classify_bytes_field(raw: Any) -> RawBytesField:
    """
    Single classification step; precedence follows the docstring order above.
    """
    if raw is None:
        return Unrecognized()

    if isinstance(raw, str):
        if raw.startswith(HEX_PREFIX):
            return Hex(digits=raw[len(HEX_PREFIX):])
        return PlainText(text=raw)

    if isinstance(raw, (bytes, bytearray)):
        return ByteSequence(values=tuple(raw))

    if isinstance(raw, Mapping):
        inner = raw.get("bytes")
        if isinstance(inner, str):
            return WrappedHex(digits=_strip_prefix(inner))
        return Unrecognized(type_name=type(raw).__name__)

    if isinstance(raw, Sequence):
        return ByteSequence(values=tuple(raw))

    return Unrecognized(type_name=type(raw).__name__)


def hex_to_bytes(digits: str) -> bytes:
    """
    Parse two characters at a time; chunks that are not valid hex are skipped.
    """
    out = bytearray()
    for i in range(0, len(digits), 2):
        chunk = digits[i:i + 2]
        if chunk and all(c in _HEX_DIGITS for c in chunk):
            out.append(int(chunk, 16))
    return bytes(out)


def _as_byte(value: Any) -> int:
    # typed-array semantics: wrap modulo 256, non-integers become 0
    if isinstance(value, bool) or not isinstance(value, int):
        return 0
    return value & 0xFF


def _utf8(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def decode_raw_bytes_field(raw_field: RawBytesField) -> str:
    if isinstance(raw_field, PlainText):
        return raw_field.text
    if isinstance(raw_field, (Hex, WrappedHex)):
        return _utf8(hex_to_bytes(raw_field.digits))
    if isinstance(raw_field, ByteSequence):
        return _utf8(bytes(_as_byte(v) for v in raw_field.values))
    return ""


def decode_bytes_like_field(raw: Any) -> str:
    """
    Decode a weakly-typed byte field to text. Always returns a string.
    """
    raw_field = classify_bytes_field(raw)
    if isinstance(raw_field, Unrecognized):
        logger.debug("bytes field unrecognized (type=%s); decoding to empty string", raw_field.type_name)
        return ""
    return decode_raw_bytes_field(raw_field)
