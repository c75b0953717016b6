"""
Concrete collaborators for twin_engine sessions: network presets, a JSON-RPC
ledger query service, a finality waiter and a signer-backed executor.
"""
from .executor import SignerTransactionExecutor
from .factory import build_rpc_session
from .networks import NETWORKS, NetworkConfig, RpcConfig, load_network_config
from .protocol import TransactionSigner

__all__ = [
    "SignerTransactionExecutor",
    "build_rpc_session",
    "NETWORKS",
    "NetworkConfig",
    "RpcConfig",
    "load_network_config",
    "TransactionSigner",
]
