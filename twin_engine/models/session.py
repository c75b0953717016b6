from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .errors import TwinError
from .types import Phase


@dataclass(frozen=True)
class SessionState:
    """
    Process-local state of one twin session.

    Snapshots are immutable; the orchestrator publishes a new one on every change.
    """
    object_identifier: Optional[str] = None
    phase: Phase = Phase.IDLE
    last_transaction_hash: Optional[str] = None
    last_error: Optional[TwinError] = None

    @property
    def is_pending(self) -> bool:
        return self.phase in (Phase.SUBMITTING, Phase.AWAITING_FINALITY)


@dataclass(frozen=True)
class TransactionEffects:
    """
    Finalized effects of one transaction, reduced to what the session needs.
    """
    digest: str
    success: bool = True
    created_object_ids: Tuple[str, ...] = field(default_factory=tuple)
    failure_reason: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "created_object_ids", tuple(self.created_object_ids))

    @property
    def first_created_object_id(self) -> Optional[str]:
        return self.created_object_ids[0] if self.created_object_ids else None


@dataclass(frozen=True)
class OperationResult:
    """
    What a public session operation resolves to. Operations never raise.

    `abandoned` is set when clear()/select() replaced the session context
    while the operation was suspended.
    """
    ok: bool
    error: Optional[TwinError] = None
    transaction_hash: Optional[str] = None
    abandoned: bool = False
