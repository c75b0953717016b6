# twin_providers/networks.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from twin_engine.config import DEVNET_PACKAGE_ID, ContractConfig


@dataclass(frozen=True)
class NetworkConfig:
    """
    One ledger network: fullnode endpoint + where the twin contract is deployed.
    Package ids stay empty until the contract is deployed there.
    """
    name: str
    url: str
    package_id: str = ""

    def contract(self, module: str = "contract") -> ContractConfig:
        if not self.package_id:
            raise ValueError(f"No twin contract package id configured for network {self.name!r}")
        return ContractConfig(package_id=self.package_id, module=module)


@dataclass(frozen=True)
class RpcConfig:
    """
    Transport-only settings: no schema, no policy.
    """
    timeout_s: float = 10.0
    poll_interval_s: float = 0.5
    finality_timeout_s: float = 60.0


NETWORKS: Mapping[str, NetworkConfig] = {
    "devnet": NetworkConfig("devnet", "https://api.devnet.iota.cafe", DEVNET_PACKAGE_ID),
    "testnet": NetworkConfig("testnet", "https://api.testnet.iota.cafe"),
    "mainnet": NetworkConfig("mainnet", "https://api.mainnet.iota.cafe"),
}

DEFAULT_NETWORK = "devnet"


def load_network_config(env: Optional[Mapping[str, str]] = None) -> NetworkConfig:
    """
    Pick a network preset, then apply overrides:
      TWIN_NETWORK     preset name (default devnet)
      TWIN_RPC_URL     fullnode URL override
      TWIN_PACKAGE_ID  contract package override
    """
    env = os.environ if env is None else env
    name = env.get("TWIN_NETWORK", DEFAULT_NETWORK).strip().lower()
    if name not in NETWORKS:
        raise ValueError(f"Unknown network {name!r}; expected one of {sorted(NETWORKS)}")

    cfg = NETWORKS[name]
    url = env.get("TWIN_RPC_URL", "").strip()
    if url:
        cfg = replace(cfg, url=url)
    package_id = env.get("TWIN_PACKAGE_ID", "").strip()
    if package_id:
        cfg = replace(cfg, package_id=package_id)
    return cfg
