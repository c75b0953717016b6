from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# Devnet deployment of the twin contract.
DEVNET_PACKAGE_ID = "0x703c97fb88edc981081307351be009b7815b1f5ae2e31421e9ef9d84bf2b0856"


class ContractMethod(str, Enum):
    MINT_TO_SENDER = "mint_to_sender"
    ADD_EVENT = "add_event"
    REPORT_LOST = "report_lost"
    TRANSFER_TWIN = "transfer_twin"


@dataclass(frozen=True)
class ContractConfig:
    """
    Where the twin contract lives on-chain.
    """
    package_id: str
    module: str = "contract"

    def __post_init__(self) -> None:
        if not self.package_id.strip():
            raise ValueError("ContractConfig.package_id must be non-empty")

    def target(self, method: ContractMethod | str) -> str:
        name = method.value if isinstance(method, ContractMethod) else str(method)
        return f"{self.package_id}::{self.module}::{name}"


@dataclass(frozen=True)
class SessionConfig:
    """
    Session runtime configuration.
    Keep small; transport settings live with the providers.
    """
    contract: ContractConfig = field(
        default_factory=lambda: ContractConfig(package_id=DEVNET_PACKAGE_ID)
    )
    persist_identifier: bool = True

