from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence, Tuple, Union

from twin_engine.config import ContractConfig, ContractMethod


@dataclass(frozen=True)
class ObjectArg:
    object_id: str


@dataclass(frozen=True)
class PureArg:
    # type_tag: "u8" | "vector<u8>" | "address"
    type_tag: str
    value: Any


IntentArg = Union[ObjectArg, PureArg]


@dataclass(frozen=True)
class MoveCallIntent:
    """
    A single Move call, described as data. Serialization and signing belong
    to the executor.
    """
    target: str
    arguments: Sequence[IntentArg] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments))

    @property
    def method(self) -> str:
        return self.target.rsplit("::", 1)[-1]


def utf8_vector(text: str) -> Tuple[int, ...]:
    return tuple(text.encode("utf-8"))


def mint_intent(contract: ContractConfig, metadata: str) -> MoveCallIntent:
    return MoveCallIntent(
        target=contract.target(ContractMethod.MINT_TO_SENDER),
        arguments=(PureArg("vector<u8>", utf8_vector(metadata)),),
    )


def add_event_intent(
    contract: ContractConfig,
    object_id: str,
    event_type: int,
    description: str,
) -> MoveCallIntent:
    # event_type is not checked here; the contract owns the enumeration
    return MoveCallIntent(
        target=contract.target(ContractMethod.ADD_EVENT),
        arguments=(
            ObjectArg(object_id),
            PureArg("u8", int(event_type)),
            PureArg("vector<u8>", utf8_vector(description)),
        ),
    )


def report_lost_intent(contract: ContractConfig, object_id: str) -> MoveCallIntent:
    return MoveCallIntent(
        target=contract.target(ContractMethod.REPORT_LOST),
        arguments=(ObjectArg(object_id),),
    )


def transfer_intent(contract: ContractConfig, object_id: str, recipient: str) -> MoveCallIntent:
    return MoveCallIntent(
        target=contract.target(ContractMethod.TRANSFER_TWIN),
        arguments=(ObjectArg(object_id), PureArg("address", recipient)),
    )
