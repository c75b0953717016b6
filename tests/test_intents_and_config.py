from __future__ import annotations

import pytest

from twin_engine.config import ContractConfig, ContractMethod, DEVNET_PACKAGE_ID
from twin_engine.models.intent import (
    ObjectArg,
    PureArg,
    add_event_intent,
    mint_intent,
    report_lost_intent,
    transfer_intent,
)
from twin_providers.networks import NETWORKS, load_network_config

CONTRACT = ContractConfig(package_id="0xfeed")


def test_contract_targets() -> None:
    assert CONTRACT.target(ContractMethod.ADD_EVENT) == "0xfeed::contract::add_event"
    assert ContractConfig("0x1", module="twin").target("report_lost") == "0x1::twin::report_lost"


def test_contract_requires_package_id() -> None:
    with pytest.raises(ValueError):
        ContractConfig(package_id="  ")


def test_mint_intent_encodes_metadata_as_utf8_vector() -> None:
    intent = mint_intent(CONTRACT, "Ünit 1")
    assert intent.method == "mint_to_sender"
    assert intent.arguments == (PureArg("vector<u8>", tuple("Ünit 1".encode("utf-8"))),)


def test_add_event_intent_passes_event_type_unchecked() -> None:
    intent = add_event_intent(CONTRACT, "0x7", 250, "odd code")
    assert intent.arguments[0] == ObjectArg("0x7")
    assert intent.arguments[1] == PureArg("u8", 250)
    assert bytes(intent.arguments[2].value) == b"odd code"


def test_report_lost_and_transfer_intents() -> None:
    assert report_lost_intent(CONTRACT, "0x7").arguments == (ObjectArg("0x7"),)
    t = transfer_intent(CONTRACT, "0x7", "0xb0b")
    assert t.target == "0xfeed::contract::transfer_twin"
    assert t.arguments[1] == PureArg("address", "0xb0b")


def test_network_defaults_to_devnet() -> None:
    cfg = load_network_config(env={})
    assert cfg.name == "devnet"
    assert cfg.package_id == DEVNET_PACKAGE_ID
    assert cfg.contract().package_id == DEVNET_PACKAGE_ID


def test_network_env_overrides() -> None:
    cfg = load_network_config(
        env={"TWIN_NETWORK": "Testnet", "TWIN_RPC_URL": "http://localhost:9000", "TWIN_PACKAGE_ID": "0xabc"}
    )
    assert cfg.name == "testnet"
    assert cfg.url == "http://localhost:9000"
    assert cfg.contract(module="contract").target("report_lost") == "0xabc::contract::report_lost"


def test_unknown_network_is_rejected() -> None:
    with pytest.raises(ValueError):
        load_network_config(env={"TWIN_NETWORK": "moonnet"})


def test_undeployed_network_has_no_contract() -> None:
    with pytest.raises(ValueError):
        NETWORKS["mainnet"].contract()
