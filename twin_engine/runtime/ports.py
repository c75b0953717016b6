"""Port definitions for the collaborators a TwinSession depends on.

Responsibilities:
  - Define interface contracts for ledger reads, transaction execution,
    caller identity and identifier persistence.
Must not:
  - Implement logic; interfaces only.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, runtime_checkable

from twin_engine.models.intent import MoveCallIntent
from twin_engine.models.session import TransactionEffects

from .result import SubmitResult


@runtime_checkable
class LedgerQueryService(Protocol):
    async def get_object(self, identifier: str) -> Optional[Mapping[str, Any]]:
        """
        Return the raw object payload, or None when the object does not exist.
        Transport failures raise (LedgerUnavailableError preferred).
        """
        ...


@runtime_checkable
class TransactionExecutor(Protocol):
    async def sign_and_submit(self, intent: MoveCallIntent) -> SubmitResult:
        """
        Ok(transaction_hash) once the network accepted the transaction,
        Err(SubmissionError) when signing or submission was refused.
        """
        ...

    async def await_finality(self, transaction_hash: str) -> TransactionEffects:
        ...


@runtime_checkable
class IdentityProvider(Protocol):
    def current_address(self) -> Optional[str]:
        ...


@runtime_checkable
class IdentifierStore(Protocol):
    """
    Persists "which twin are we viewing" across reloads (URL fragment,
    file, keyring...). The session only ever calls these two hooks.
    """

    def load_persisted_identifier(self) -> Optional[str]:
        ...

    def save_persisted_identifier(self, identifier: Optional[str]) -> None:
        ...
