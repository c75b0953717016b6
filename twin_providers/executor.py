# twin_providers/executor.py
from __future__ import annotations

import logging

from twin_engine.models.errors import SubmissionError
from twin_engine.models.intent import MoveCallIntent
from twin_engine.models.session import TransactionEffects
from twin_engine.runtime.result import Err, Ok, SubmitResult

from .protocol import TransactionSigner
from .rpc.finality import RpcFinalityWaiter

logger = logging.getLogger(__name__)


class SignerTransactionExecutor:
    """
    TransactionExecutor composed from an external signer (submission) and a
    finality waiter (confirmation).
    """

    def __init__(self, signer: TransactionSigner, waiter: RpcFinalityWaiter) -> None:
        self.signer = signer
        self.waiter = waiter

    async def sign_and_submit(self, intent: MoveCallIntent) -> SubmitResult:
        try:
            digest = await self.signer.sign_and_execute(intent)
        except SubmissionError as e:
            return Err(e)
        except Exception as e:
            logger.warning("signer refused %s: %s", intent.method, e)
            return Err(SubmissionError(f"{intent.method} was not submitted: {e}", cause=e))

        if not digest:
            return Err(SubmissionError(f"{intent.method}: signer returned no transaction digest"))
        return Ok(str(digest))

    async def await_finality(self, transaction_hash: str) -> TransactionEffects:
        return await self.waiter.await_finality(transaction_hash)
