# twin_providers/protocol.py
from __future__ import annotations

from typing import Protocol, runtime_checkable

from twin_engine.models.intent import MoveCallIntent


@runtime_checkable
class TransactionSigner(Protocol):
    """
    A wallet (or any key holder) living OUTSIDE the kernel.

    Constraints:
    - Builds, signs and submits the transaction described by the intent.
    - Returns the transaction digest once the network accepted it.
    - Raises when the user declines or the network rejects the transaction.
    """

    async def sign_and_execute(self, intent: MoveCallIntent) -> str:
        ...
