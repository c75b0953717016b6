from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Tuple

from twin_engine.models.record import LifecycleEvent, TwinRecord
from twin_engine.models.types import EventType

from .bytes_field import decode_bytes_like_field

logger = logging.getLogger(__name__)

MOVE_OBJECT_KIND = "moveObject"

# ASCII digits only; int() alone would also take "5_0" and non-ASCII digits
_INTEGER_TEXT = re.compile(r"\s*[+-]?[0-9]+\s*")



@dataclass(frozen=True)
class DecodeViolation:
    rule: str
    message: str


@dataclass(frozen=True)
class DecodeReport:
    """
    Outcome of decoding one object payload. All-or-nothing:
    `record` is set only when there are no violations.
    """
    record: Optional[TwinRecord] = None
    violations: Sequence[DecodeViolation] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.record is not None and not self.violations

    def summary(self) -> str:
        return "; ".join(f"[{v.rule}] {v.message}" for v in self.violations)


def _fail(rule: str, message: str) -> DecodeReport:
    logger.debug("twin payload rejected: [%s] %s", rule, message)
    return DecodeReport(record=None, violations=(DecodeViolation(rule=rule, message=message),))


# ---------------------------
# Scalar coercion
# ---------------------------

def parse_trust_score(value: Any) -> Optional[int]:
    """
    Numbers and strictly numeric strings only. bool is not a number here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return None
        return int(value)
    if isinstance(value, str):
        if not _INTEGER_TEXT.fullmatch(value):
            return None
        return int(value.strip(), 10)
    return None


def coerce_event_code(value: Any) -> int:
    """
    Lenient: anything that is not an integer (or integer string) becomes CREATED.
    """
    if isinstance(value, bool):
        return int(EventType.CREATED)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value):
        return int(value)
    if isinstance(value, str) and _INTEGER_TEXT.fullmatch(value):
        return int(value.strip(), 10)
    return int(EventType.CREATED)


# ---------------------------
# Structure
# ---------------------------

def _decode_event(entry: Any) -> LifecycleEvent:
    if not isinstance(entry, Mapping):
        return LifecycleEvent(code=int(EventType.CREATED), description="")

    # Struct values arrive as {"type": ..., "fields": {...}}; flat dicts also occur.
    inner = entry.get("fields")
    if not isinstance(inner, Mapping):
        inner = entry

    raw_code = inner.get("event_type", entry.get("event_type"))
    raw_desc = inner.get("description", entry.get("description"))

    return LifecycleEvent(
        code=coerce_event_code(raw_code),
        description=decode_bytes_like_field(raw_desc),
    )


def _decode_logs(raw_logs: Any) -> Tuple[LifecycleEvent, ...]:
    if isinstance(raw_logs, (str, bytes, bytearray, Mapping)) or not isinstance(raw_logs, Sequence):
        return ()
    return tuple(_decode_event(entry) for entry in raw_logs)


def decode_twin_record_report(raw: Any) -> DecodeReport:
    if not isinstance(raw, Mapping):
        return _fail("payload_kind", f"payload is not a mapping: {type(raw).__name__}")

    content = raw.get("content")
    kind = content.get("dataType") if isinstance(content, Mapping) else None
    if kind != MOVE_OBJECT_KIND:
        return _fail("content_kind", f"content dataType is {kind!r}, expected {MOVE_OBJECT_KIND!r}")

    fields = content.get("fields")
    if not isinstance(fields, Mapping) or not fields:
        return _fail("fields_missing", "structured fields container is absent")

    owner = fields.get("owner")
    if not owner:
        return _fail("owner_missing", "owner field is absent")

    raw_score = fields.get("trust_score")
    trust_score = parse_trust_score(raw_score)
    if trust_score is None:
        return _fail("trust_score_invalid", f"trust_score is not an integer: {raw_score!r}")

    record = TwinRecord(
        owner=str(owner),
        metadata=decode_bytes_like_field(fields.get("metadata")),
        trust_score=trust_score,
        logs=_decode_logs(fields.get("logs")),
    )
    logger.debug("decoded twin: owner=%s trust_score=%d events=%d", record.owner, record.trust_score, len(record.logs))
    return DecodeReport(record=record)


def decode_twin_record(raw: Any) -> Optional[TwinRecord]:
    """
    Decode an object payload into a TwinRecord, or None on a structural violation.
    """
    return decode_twin_record_report(raw).record
