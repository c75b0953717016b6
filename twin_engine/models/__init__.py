"""
Core twin models.

Decode → Select → Submit → Await finality → Refresh
"""

from .types import (
    EventType,
    Phase,
    TrustGrade,
    TwinStatus,
    TRUST_SCORE_INITIAL,
    TRUST_SCORE_MAX,
    TRUST_SCORE_MIN,
    normalize_address,
)

from .record import LifecycleEvent, TwinRecord, event_history, trust_grade, twin_status
from .session import OperationResult, SessionState, TransactionEffects
from .errors import (
    TwinError,
    ValidationError,
    NotFoundError,
    InvalidStructureError,
    LedgerUnavailableError,
    SubmissionError,
    FinalityError,
    SessionBusyError,
)
from .intent import (
    IntentArg,
    MoveCallIntent,
    ObjectArg,
    PureArg,
    add_event_intent,
    mint_intent,
    report_lost_intent,
    transfer_intent,
)

__all__ = [
    "EventType",
    "Phase",
    "TrustGrade",
    "TwinStatus",
    "TRUST_SCORE_INITIAL",
    "TRUST_SCORE_MAX",
    "TRUST_SCORE_MIN",
    "normalize_address",
    "LifecycleEvent",
    "TwinRecord",
    "event_history",
    "trust_grade",
    "twin_status",
    "OperationResult",
    "SessionState",
    "TransactionEffects",
    "TwinError",
    "ValidationError",
    "NotFoundError",
    "InvalidStructureError",
    "LedgerUnavailableError",
    "SubmissionError",
    "FinalityError",
    "SessionBusyError",
    "IntentArg",
    "MoveCallIntent",
    "ObjectArg",
    "PureArg",
    "add_event_intent",
    "mint_intent",
    "report_lost_intent",
    "transfer_intent",
]
