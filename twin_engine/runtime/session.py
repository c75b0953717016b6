"""Twin session orchestration.

Responsibilities:
  - Own SessionState and the last-fetched TwinRecord snapshot.
  - Drive every mutation through validate -> submit -> await finality -> refresh.
  - Capture every failure into SessionState.last_error; operations never raise.

Invariants:
  - At most one mutating operation is in flight per session.
  - The TwinRecord snapshot only ever changes through a successful decode.
  - clear()/select() abandon local tracking of suspended work; late results
    from abandoned work are discarded.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Mapping, Optional, Tuple

from twin_engine.config import SessionConfig
from twin_engine.decoding.record import decode_twin_record_report
from twin_engine.models.errors import (
    FinalityError,
    InvalidStructureError,
    LedgerUnavailableError,
    NotFoundError,
    SessionBusyError,
    SubmissionError,
    TwinError,
    ValidationError,
)
from twin_engine.models.intent import (
    MoveCallIntent,
    add_event_intent,
    mint_intent,
    report_lost_intent,
    transfer_intent,
)
from twin_engine.models.record import TwinRecord
from twin_engine.models.session import OperationResult, SessionState, TransactionEffects
from twin_engine.models.types import Phase

from .identifier_store import InMemoryIdentifierStore
from .ports import IdentifierStore, IdentityProvider, LedgerQueryService, TransactionExecutor
from .result import Err, Ok, SubmitResult
from .transitions import is_allowed

logger = logging.getLogger(__name__)

Listener = Callable[[SessionState], None]
FinalizedHook = Callable[[TransactionEffects], Optional[TwinError]]


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


class TwinSession:
    """
    Orchestrates reads and writes against one selected on-chain twin.

    Collaborators are injected; the session performs no I/O of its own.
    """

    def __init__(
        self,
        *,
        query: LedgerQueryService,
        executor: TransactionExecutor,
        identity: Optional[IdentityProvider] = None,
        identifier_store: Optional[IdentifierStore] = None,
        config: Optional[SessionConfig] = None,
    ) -> None:
        self.query = query
        self.executor = executor
        self.identity = identity
        self.identifier_store = identifier_store or InMemoryIdentifierStore()
        self.config = config or SessionConfig()

        self._state = SessionState()
        self._record: Optional[TwinRecord] = None
        self._object_exists = False
        self._decoded_ok = False
        self._listeners: list[Listener] = []

        # clear()/select() bump the epoch; phase-driving reads bump read_seq.
        self._epoch = 0
        self._read_seq = 0
        self._inflight_epoch: Optional[int] = None

    # -----------------------
    # Observation
    # -----------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def record(self) -> Optional[TwinRecord]:
        return self._record

    @property
    def object_identifier(self) -> Optional[str]:
        return self._state.object_identifier

    @property
    def object_exists(self) -> bool:
        return self._object_exists

    @property
    def has_valid_data(self) -> bool:
        return self._decoded_ok

    @property
    def is_owner(self) -> bool:
        if self._record is None or self.identity is None:
            return False
        return self._record.is_owned_by(self.identity.current_address())

    @property
    def is_pending(self) -> bool:
        return self._busy or self._state.is_pending

    @property
    def is_loading(self) -> bool:
        return self._state.phase is Phase.LOADING

    @property
    def is_confirmed(self) -> bool:
        return self._state.last_transaction_hash is not None and self._state.phase is Phase.READY

    @property
    def is_lost(self) -> bool:
        return self._record is not None and self._record.is_lost

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -----------------------
    # Identifier selection
    # -----------------------

    async def restore(self) -> bool:
        """
        Select the persisted identifier, if any. Returns True when it loaded cleanly.
        """
        identifier = self.identifier_store.load_persisted_identifier()
        if _is_blank(identifier):
            return False
        return await self.select(identifier)  # type: ignore[arg-type]

    async def select(self, identifier: str) -> bool:
        identifier = (identifier or "").strip()
        if not identifier:
            self.clear()
            return False

        if self._busy:
            logger.info("selecting %s abandons tracking of the in-flight operation", identifier)

        self._begin_new_context()
        self._persist(identifier)
        self._publish(
            replace(
                self._state,
                object_identifier=identifier,
                last_transaction_hash=None,
                last_error=None,
            )
        )
        return await self._read(self._epoch)

    async def refresh(self) -> bool:
        """
        Re-read the selected twin. While a mutation is in flight only the
        snapshot is updated; the mutation keeps ownership of the phase.
        """
        if self._state.object_identifier is None:
            return False
        return await self._read(self._epoch, drive_phase=not self._busy)

    def clear(self) -> None:
        """
        Back to IDLE from any phase. Nothing on-chain is affected; a submitted
        transaction simply stops being tracked.
        """
        if self._busy:
            logger.info("clear() abandons tracking of the in-flight operation")
        self._begin_new_context()
        self._persist(None)
        self._transition(
            Phase.IDLE,
            object_identifier=None,
            last_transaction_hash=None,
            last_error=None,
        )

    # -----------------------
    # Mutations
    # -----------------------

    async def mint(self, metadata: str) -> OperationResult:
        busy = self._busy_rejection("mint")
        if busy is not None:
            return busy
        if _is_blank(metadata):
            return self._reject(ValidationError("Metadata cannot be empty"))

        return await self._execute(
            "mint",
            mint_intent(self.config.contract, metadata),
            on_finalized=self._adopt_minted_object,
        )

    async def add_event(self, event_type: int, description: str) -> OperationResult:
        busy = self._busy_rejection("add_event")
        if busy is not None:
            return busy
        object_id = self._state.object_identifier
        if object_id is None:
            return self._reject(ValidationError("No twin selected"))
        if _is_blank(description):
            return self._reject(ValidationError("Description cannot be empty"))
        if isinstance(event_type, bool) or not isinstance(event_type, int):
            return self._reject(ValidationError(f"Event type must be an integer code, got {event_type!r}"))

        return await self._execute(
            "add_event",
            add_event_intent(self.config.contract, object_id, event_type, description),
        )

    async def report_lost(self) -> OperationResult:
        busy = self._busy_rejection("report_lost")
        if busy is not None:
            return busy
        object_id = self._state.object_identifier
        if object_id is None:
            return self._reject(ValidationError("No twin selected"))

        return await self._execute(
            "report_lost",
            report_lost_intent(self.config.contract, object_id),
        )

    async def transfer(self, recipient: str) -> OperationResult:
        busy = self._busy_rejection("transfer")
        if busy is not None:
            return busy
        object_id = self._state.object_identifier
        if object_id is None:
            return self._reject(ValidationError("No twin selected"))
        if _is_blank(recipient):
            return self._reject(ValidationError("Recipient address cannot be empty"))

        # address format is checked by the network, not here
        return await self._execute(
            "transfer",
            transfer_intent(self.config.contract, object_id, recipient),
        )

    # -----------------------
    # Internals: state publication
    # -----------------------

    @property
    def _busy(self) -> bool:
        return self._inflight_epoch is not None and self._inflight_epoch == self._epoch

    def _publish(self, state: SessionState) -> None:
        self._state = state
        for listener in tuple(self._listeners):
            listener(state)

    def _transition(self, phase: Phase, **changes: Any) -> None:
        current = self._state.phase
        if not is_allowed(current, phase):
            raise RuntimeError(f"Illegal session transition {current.value} -> {phase.value}")
        if current is not phase:
            logger.info(
                "session %s: %s -> %s",
                changes.get("object_identifier", self._state.object_identifier),
                current.value,
                phase.value,
            )
        self._publish(replace(self._state, phase=phase, **changes))

    def _fail(self, error: TwinError) -> None:
        logger.warning("session %s failed: %r", self._state.object_identifier, error)
        self._transition(Phase.FAILED, last_error=error)

    def _reject(self, error: TwinError) -> OperationResult:
        self._fail(error)
        return OperationResult(ok=False, error=error)

    def _busy_rejection(self, name: str) -> Optional[OperationResult]:
        if not self._busy:
            return None
        # last_error belongs to the in-flight operation; leave it alone
        error = SessionBusyError(f"{name} rejected: another operation is in flight")
        logger.warning("%s", error.message)
        return OperationResult(ok=False, error=error)

    def _begin_new_context(self) -> None:
        self._epoch += 1
        self._read_seq += 1
        self._inflight_epoch = None
        self._record = None
        self._object_exists = False
        self._decoded_ok = False

    def _persist(self, identifier: Optional[str]) -> None:
        if not self.config.persist_identifier:
            return
        try:
            self.identifier_store.save_persisted_identifier(identifier)
        except Exception as exc:
            logger.warning("could not persist twin identifier %r: %s", identifier, exc)

    # -----------------------
    # Internals: read path
    # -----------------------

    async def _fetch(self, identifier: str) -> Tuple[Optional[Mapping[str, Any]], Optional[TwinError]]:
        try:
            payload = await self.query.get_object(identifier)
        except TwinError as exc:
            return None, exc
        except Exception as exc:
            return None, LedgerUnavailableError(f"Ledger query failed for {identifier}: {exc}", cause=exc)

        if payload is None:
            return None, NotFoundError(f"No object found for {identifier}")
        return payload, None

    async def _read(self, epoch: int, *, drive_phase: bool = True) -> bool:
        identifier = self._state.object_identifier
        if identifier is None:
            return False

        if drive_phase:
            self._read_seq += 1
            self._transition(Phase.LOADING)
        seq = self._read_seq

        payload, error = await self._fetch(identifier)

        if epoch != self._epoch or seq != self._read_seq:
            logger.warning("discarding stale read of %s", identifier)
            return False

        if error is None:
            self._object_exists = True
            report = decode_twin_record_report(payload)
            if report.ok:
                self._record = report.record
                self._decoded_ok = True
            else:
                self._decoded_ok = False
                error = InvalidStructureError(f"Object {identifier} is not a valid twin: {report.summary()}")
        elif isinstance(error, NotFoundError):
            self._object_exists = False
            self._decoded_ok = False

        if not drive_phase:
            if error is not None:
                logger.warning("background refresh of %s failed: %r", identifier, error)
                return False
            self._publish(self._state)
            return True

        if error is not None:
            self._fail(error)
            return False

        self._transition(Phase.READY)
        return True

    # -----------------------
    # Internals: write path
    # -----------------------

    async def _submit(self, intent: MoveCallIntent) -> SubmitResult:
        try:
            result = await self.executor.sign_and_submit(intent)
        except SubmissionError as exc:
            return Err(exc)
        except Exception as exc:
            return Err(SubmissionError(f"Submission failed: {exc}", cause=exc))

        if isinstance(result, Ok):
            if _is_blank(result.value):
                return Err(SubmissionError("Executor accepted the transaction without a hash"))
            return result
        if isinstance(result, Err):
            if isinstance(result.error, SubmissionError):
                return result
            return Err(SubmissionError(f"Submission failed: {result.error}", cause=result.error))
        return Err(SubmissionError(f"Executor returned an unexpected result: {result!r}"))

    async def _await_finality(self, tx_hash: str) -> Tuple[Optional[TransactionEffects], Optional[TwinError]]:
        try:
            effects = await self.executor.await_finality(tx_hash)
        except FinalityError as exc:
            if exc.transaction_hash is None:
                exc.transaction_hash = tx_hash
            return None, exc
        except Exception as exc:
            return None, FinalityError(
                f"Could not confirm transaction {tx_hash}: {exc}",
                transaction_hash=tx_hash,
                cause=exc,
            )
        if not isinstance(effects, TransactionEffects):
            return None, FinalityError(
                f"Executor returned no effects for transaction {tx_hash}: {effects!r}",
                transaction_hash=tx_hash,
            )
        return effects, None

    def _abandoned(self, name: str, tx_hash: Optional[str] = None) -> OperationResult:
        logger.info("%s abandoned after the session context changed (tx=%s)", name, tx_hash)
        return OperationResult(ok=False, transaction_hash=tx_hash, abandoned=True)

    def _failed(self, error: TwinError, tx_hash: Optional[str] = None) -> OperationResult:
        self._fail(error)
        return OperationResult(ok=False, error=error, transaction_hash=tx_hash)

    def _adopt_minted_object(self, effects: TransactionEffects) -> Optional[TwinError]:
        new_id = effects.first_created_object_id
        if new_id is None:
            return FinalityError(
                "Mint finalized but no created object was reported",
                transaction_hash=effects.digest,
            )
        logger.info("twin minted: %s (tx=%s)", new_id, effects.digest)
        self._record = None
        self._object_exists = False
        self._decoded_ok = False
        self._persist(new_id)
        self._publish(replace(self._state, object_identifier=new_id))
        return None

    async def _execute(
        self,
        name: str,
        intent: MoveCallIntent,
        *,
        on_finalized: Optional[FinalizedHook] = None,
    ) -> OperationResult:
        epoch = self._epoch
        self._inflight_epoch = epoch
        # reads already in flight must not move the phase under this operation
        self._read_seq += 1
        try:
            self._transition(Phase.SUBMITTING, last_error=None)
            logger.info("%s: submitting %s", name, intent.target)

            submitted = await self._submit(intent)
            if epoch != self._epoch:
                return self._abandoned(name)
            if isinstance(submitted, Err):
                return self._failed(submitted.error)

            tx_hash = submitted.value
            self._transition(Phase.AWAITING_FINALITY, last_transaction_hash=tx_hash)

            effects, error = await self._await_finality(tx_hash)
            if epoch != self._epoch:
                return self._abandoned(name, tx_hash)
            if error is not None:
                return self._failed(error, tx_hash)
            if not effects.success:
                reason = effects.failure_reason or "transaction aborted"
                return self._failed(
                    SubmissionError(f"{name} failed on-chain: {reason}", transaction_hash=tx_hash),
                    tx_hash,
                )

            if on_finalized is not None:
                hook_error = on_finalized(effects)
                if hook_error is not None:
                    return self._failed(hook_error, tx_hash)

            ok = await self._read(epoch)
            if epoch != self._epoch:
                return self._abandoned(name, tx_hash)
            if not ok:
                return OperationResult(ok=False, error=self._state.last_error, transaction_hash=tx_hash)

            logger.info("%s confirmed (tx=%s)", name, tx_hash)
            return OperationResult(ok=True, transaction_hash=tx_hash)
        finally:
            if self._inflight_epoch == epoch:
                self._inflight_epoch = None
