from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .types import EventType, TrustGrade, TwinStatus, normalize_address


@dataclass(frozen=True)
class LifecycleEvent:
    """
    One entry of a twin's append-only history.

    `code` is the raw on-chain value; `event_type` is its classification
    (unknown codes classify as CREATED).
    """
    code: int
    description: str = ""

    @property
    def event_type(self) -> EventType:
        return EventType.from_code(self.code)

    @property
    def is_lost_marker(self) -> bool:
        return self.event_type is EventType.REPORTED_LOST


@dataclass(frozen=True)
class TwinRecord:
    """
    Canonical decoded view of one on-chain twin object.

    Only the Field Decoder constructs these (twin_engine.decoding.record).
    """
    owner: str
    metadata: str
    trust_score: int
    logs: Sequence[LifecycleEvent] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "logs", tuple(self.logs))

    @property
    def creation_event(self) -> Optional[LifecycleEvent]:
        return self.logs[0] if self.logs else None

    @property
    def last_event(self) -> Optional[LifecycleEvent]:
        return self.logs[-1] if self.logs else None

    @property
    def is_lost(self) -> bool:
        return any(e.is_lost_marker for e in self.logs)

    def is_owned_by(self, address: str | None) -> bool:
        if not address:
            return False
        return normalize_address(self.owner) == normalize_address(address)


def trust_grade(score: int) -> TrustGrade:
    if score >= 90:
        return TrustGrade.EXCELLENT
    if score >= 75:
        return TrustGrade.GOOD
    if score >= 50:
        return TrustGrade.FAIR
    if score >= 25:
        return TrustGrade.POOR
    return TrustGrade.CRITICAL


def twin_status(record: Optional[TwinRecord]) -> TwinStatus:
    """
    Headline status: only the most recent event decides "Lost";
    otherwise the trust score bands apply.
    """
    if record is None:
        return TwinStatus.UNKNOWN

    last = record.last_event
    if last is not None and last.is_lost_marker:
        return TwinStatus.LOST

    if record.trust_score >= 75:
        return TwinStatus.ACTIVE
    if record.trust_score >= 40:
        return TwinStatus.NEEDS_ATTENTION
    return TwinStatus.AT_RISK


def event_history(record: TwinRecord) -> Tuple[Tuple[int, EventType, str], ...]:
    # (position, classification, description), oldest first
    return tuple((i, e.event_type, e.description) for i, e in enumerate(record.logs))
