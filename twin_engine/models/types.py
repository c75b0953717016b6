from __future__ import annotations

from enum import Enum
from typing import Tuple


# ============================================================
# types.py (kernel scalars + taxonomies)
# ============================================================

TRUST_SCORE_MIN = 0
TRUST_SCORE_MAX = 100
TRUST_SCORE_INITIAL = 50


class EventType(int, Enum):
    """
    Lifecycle event codes as stored on-chain (u8).

    The trust delta is applied by the contract, not by this kernel;
    it is carried here for display and simulation only.
    """
    CREATED = 0
    MAINTENANCE = 1
    DAMAGE = 2
    INSPECTION = 3
    REPORTED_LOST = 4
    VERIFICATION = 5

    @property
    def label(self) -> str:
        return _EVENT_LABELS[self]

    @property
    def trust_delta(self) -> int:
        return _EVENT_TRUST_DELTAS[self]

    @classmethod
    def from_code(cls, code: int) -> "EventType":
        # Unknown codes degrade to CREATED rather than failing the record.
        try:
            return cls(code)
        except ValueError:
            return cls.CREATED

    @classmethod
    def user_selectable(cls) -> Tuple["EventType", ...]:
        return tuple(e for e in cls if e not in (cls.CREATED, cls.REPORTED_LOST))


_EVENT_LABELS = {
    EventType.CREATED: "Created",
    EventType.MAINTENANCE: "Maintenance",
    EventType.DAMAGE: "Damage",
    EventType.INSPECTION: "Inspection",
    EventType.REPORTED_LOST: "Reported Lost",
    EventType.VERIFICATION: "Verification",
}

_EVENT_TRUST_DELTAS = {
    EventType.CREATED: 0,
    EventType.MAINTENANCE: 5,
    EventType.DAMAGE: -3,
    EventType.INSPECTION: 2,
    EventType.REPORTED_LOST: -50,
    EventType.VERIFICATION: 10,
}


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUBMITTING = "submitting"
    AWAITING_FINALITY = "awaiting_finality"
    READY = "ready"
    FAILED = "failed"


class TrustGrade(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"
    CRITICAL = "Critical"


class TwinStatus(str, Enum):
    UNKNOWN = "Unknown"
    LOST = "Lost"
    ACTIVE = "Active"
    NEEDS_ATTENTION = "Needs Attention"
    AT_RISK = "At Risk"


def normalize_address(address: str | None) -> str:
    return (address or "").strip().lower()
