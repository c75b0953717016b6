from __future__ import annotations

from typing import Optional


class TwinError(Exception):
    """
    Base of the session error taxonomy.

    Errors are captured into SessionState.last_error by the orchestrator;
    they are raised only by collaborators and internal helpers.
    """
    code = "twin_error"

    def __init__(
        self,
        message: str,
        *,
        transaction_hash: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.transaction_hash = transaction_hash
        self.cause = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(TwinError):
    """Local precondition failure. Never reaches the network."""
    code = "validation"


class NotFoundError(TwinError):
    """The selected identifier has no object on the ledger."""
    code = "not_found"


class InvalidStructureError(TwinError):
    """The object exists but is not a well-formed twin."""
    code = "invalid_structure"


class LedgerUnavailableError(TwinError):
    """The read path failed on transport; the object may or may not exist."""
    code = "ledger_unavailable"


class SubmissionError(TwinError):
    """Signing declined or the transaction was rejected."""
    code = "submission"


class FinalityError(TwinError):
    """
    Accepted by the network but confirmation could not be observed.
    The outcome is ambiguous: the mutation may have happened.
    """
    code = "finality"


class SessionBusyError(TwinError):
    """Another mutating operation is still in flight."""
    code = "busy"
