# twin_providers/factory.py
from __future__ import annotations

from typing import Optional

from twin_engine.config import SessionConfig
from twin_engine.runtime.ports import IdentifierStore, IdentityProvider
from twin_engine.runtime.session import TwinSession

from .executor import SignerTransactionExecutor
from .networks import NetworkConfig, RpcConfig, load_network_config
from .protocol import TransactionSigner
from .rpc.client import JsonRpcClient
from .rpc.finality import RpcFinalityWaiter
from .rpc.query import RpcLedgerQueryService


def build_rpc_session(
    *,
    signer: TransactionSigner,
    identity: Optional[IdentityProvider] = None,
    identifier_store: Optional[IdentifierStore] = None,
    network: Optional[NetworkConfig] = None,
    rpc: Optional[RpcConfig] = None,
    client: Optional[JsonRpcClient] = None,
) -> TwinSession:
    """
    Wire a TwinSession against a fullnode:

      network preset (+ env overrides)
        -> JsonRpcClient
        -> RpcLedgerQueryService (reads) + RpcFinalityWaiter (confirmation)
        -> SignerTransactionExecutor (external signer)
    """
    net = network or load_network_config()
    rpc_cfg = rpc or RpcConfig()
    rpc_client = client or JsonRpcClient(net.url, timeout_s=rpc_cfg.timeout_s)

    return TwinSession(
        query=RpcLedgerQueryService(rpc_client),
        executor=SignerTransactionExecutor(signer, RpcFinalityWaiter(rpc_client, config=rpc_cfg)),
        identity=identity,
        identifier_store=identifier_store,
        config=SessionConfig(contract=net.contract()),
    )
