import sys
from pathlib import Path

# -------------------------------------------------------------------
# Make repo root importable BEFORE importing any project packages.
# -------------------------------------------------------------------
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402

from twin_engine.config import ContractConfig, SessionConfig  # noqa: E402
from twin_engine.runtime.identifier_store import InMemoryIdentifierStore  # noqa: E402
from twin_engine.runtime.session import TwinSession  # noqa: E402
from twin_engine.testing.stubs import StubExecutor, StubIdentity, StubLedger  # noqa: E402

OWNER = "0xA11CE"
PACKAGE_ID = "0xfeed"


@pytest.fixture
def ledger() -> StubLedger:
    return StubLedger()


@pytest.fixture
def executor(ledger: StubLedger) -> StubExecutor:
    return StubExecutor(ledger, sender=OWNER)


@pytest.fixture
def identity() -> StubIdentity:
    return StubIdentity(address=OWNER.lower())


@pytest.fixture
def identifier_store() -> InMemoryIdentifierStore:
    return InMemoryIdentifierStore()


@pytest.fixture
def session(ledger, executor, identity, identifier_store) -> TwinSession:
    return TwinSession(
        query=ledger,
        executor=executor,
        identity=identity,
        identifier_store=identifier_store,
        config=SessionConfig(contract=ContractConfig(package_id=PACKAGE_ID)),
    )


@pytest.fixture
def phases(session: TwinSession) -> list:
    """
    Phase log for the session fixture (consecutive duplicates collapsed).
    """
    seen = [session.state.phase]

    def _on_change(state) -> None:
        if state.phase is not seen[-1]:
            seen.append(state.phase)

    session.subscribe(_on_change)
    return seen


@pytest.fixture
def make_payload():
    """
    Returns a factory for raw object payloads in the ledger's JSON shape,
    letting each test override one field.
    """

    _MISSING = object()

    def _make(
        *,
        data_type="moveObject",
        owner=OWNER,
        metadata="0x" + "Serial ABC123".encode("utf-8").hex(),
        trust_score="50",
        logs=_MISSING,
        fields=_MISSING,
    ):
        if fields is _MISSING:
            fields = {"owner": owner, "metadata": metadata, "trust_score": trust_score}
            if logs is not _MISSING:
                fields["logs"] = logs
            fields = {k: v for k, v in fields.items() if v is not _MISSING}
        return {
            "objectId": "0x1",
            "content": {"dataType": data_type, "type": "0xfeed::contract::DigitalTwin", "fields": fields},
        }

    _make.MISSING = _MISSING
    return _make
