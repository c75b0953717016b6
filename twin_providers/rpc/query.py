# twin_providers/rpc/query.py
from __future__ import annotations

import asyncio
import logging
from typing import Any, Mapping, Optional

from twin_engine.models.errors import LedgerUnavailableError

from .client import JsonRpcClient, RpcError, RpcTransportError

logger = logging.getLogger(__name__)

# iota_getObject reports these as an "error" entry inside a successful result
_MISSING_OBJECT_CODES = frozenset({"notExists", "deleted"})


class RpcLedgerQueryService:
    """
    LedgerQueryService backed by a fullnode's iota_getObject.
    The blocking HTTP call runs in a worker thread.
    """

    def __init__(self, client: JsonRpcClient) -> None:
        self.client = client

    async def get_object(self, identifier: str) -> Optional[Mapping[str, Any]]:
        params = [identifier, {"showContent": True, "showOwner": True}]
        try:
            result = await asyncio.to_thread(self.client.call, "iota_getObject", params)
        except (RpcError, RpcTransportError) as e:
            raise LedgerUnavailableError(f"Could not query object {identifier}: {e}", cause=e) from e

        if not isinstance(result, Mapping):
            return None

        err = result.get("error")
        if isinstance(err, Mapping) and err.get("code") in _MISSING_OBJECT_CODES:
            logger.info("object %s not found (%s)", identifier, err.get("code"))
            return None

        data = result.get("data")
        return data if isinstance(data, Mapping) else None
