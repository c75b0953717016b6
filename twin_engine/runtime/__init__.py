"""
Runtime layer (orchestration, ports, session wiring).

Kernel models live in twin_engine.models.
"""
from .identifier_store import InMemoryIdentifierStore
from .ports import IdentifierStore, IdentityProvider, LedgerQueryService, TransactionExecutor
from .result import Err, Ok, SubmitResult
from .session import TwinSession
from .transitions import ALLOWED_TRANSITIONS

__all__ = [
    "InMemoryIdentifierStore",
    "IdentifierStore",
    "IdentityProvider",
    "LedgerQueryService",
    "TransactionExecutor",
    "Err",
    "Ok",
    "SubmitResult",
    "TwinSession",
    "ALLOWED_TRANSITIONS",
]
