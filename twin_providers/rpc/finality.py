# twin_providers/rpc/finality.py
from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Mapping, Optional

from twin_engine.models.errors import FinalityError
from twin_engine.models.session import TransactionEffects

from ..networks import RpcConfig
from .client import JsonRpcClient, RpcError, RpcTransportError

logger = logging.getLogger(__name__)


def parse_effects(digest: str, block: Mapping[str, Any]) -> TransactionEffects:
    """
    Reduce an iota_getTransactionBlock result (showEffects) to TransactionEffects.
    """
    effects = block.get("effects") or {}
    status = effects.get("status") or {}
    success = status.get("status", "success") == "success"

    created: list[str] = []
    for item in effects.get("created") or ():
        ref = item.get("reference") if isinstance(item, Mapping) else None
        object_id = ref.get("objectId") if isinstance(ref, Mapping) else None
        if object_id:
            created.append(str(object_id))

    return TransactionEffects(
        digest=digest,
        success=success,
        created_object_ids=tuple(created),
        failure_reason=None if success else str(status.get("error") or "transaction failed"),
    )


class RpcFinalityWaiter:
    """
    Polls iota_getTransactionBlock until the transaction is queryable.

    Polling stops at finality_timeout_s; the transaction itself is never resubmitted.
    """

    def __init__(
        self,
        client: JsonRpcClient,
        *,
        config: Optional[RpcConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.client = client
        self.config = config or RpcConfig()
        self._clock = clock

    async def await_finality(self, transaction_hash: str) -> TransactionEffects:
        deadline = self._clock() + self.config.finality_timeout_s
        params = [transaction_hash, {"showEffects": True}]
        last_error: Optional[Exception] = None

        while True:
            try:
                block = await asyncio.to_thread(self.client.call, "iota_getTransactionBlock", params)
                if isinstance(block, Mapping) and block.get("effects"):
                    return parse_effects(transaction_hash, block)
            except (RpcError, RpcTransportError) as e:
                # not indexed yet, or the node blinked
                last_error = e
                logger.debug("transaction %s not final yet: %s", transaction_hash, e)

            if self._clock() >= deadline:
                raise FinalityError(
                    f"Transaction {transaction_hash} not confirmed within {self.config.finality_timeout_s}s",
                    transaction_hash=transaction_hash,
                    cause=last_error,
                )
            await asyncio.sleep(self.config.poll_interval_s)
