from .client import JsonRpcClient, RpcError, RpcTransportError
from .finality import RpcFinalityWaiter, parse_effects
from .query import RpcLedgerQueryService

__all__ = [
    "JsonRpcClient",
    "RpcError",
    "RpcTransportError",
    "RpcFinalityWaiter",
    "parse_effects",
    "RpcLedgerQueryService",
]
