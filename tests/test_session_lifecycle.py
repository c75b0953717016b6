from __future__ import annotations

import pytest

from twin_engine.models.errors import NotFoundError, InvalidStructureError, ValidationError
from twin_engine.models.types import EventType, Phase
from twin_engine.runtime.session import TwinSession


@pytest.mark.asyncio
async def test_mint_runs_full_lifecycle_and_adopts_created_object(session, phases, executor, identifier_store) -> None:
    result = await session.mint("Serial ABC123")

    assert result.ok is True
    assert phases == [Phase.IDLE, Phase.SUBMITTING, Phase.AWAITING_FINALITY, Phase.LOADING, Phase.READY]

    created = next(iter(executor.ledger.objects))
    assert session.state.object_identifier == created
    assert identifier_store.load_persisted_identifier() == created
    assert session.state.last_transaction_hash == result.transaction_hash
    assert session.state.last_error is None

    rec = session.record
    assert rec is not None
    assert rec.metadata == "Serial ABC123"
    assert rec.trust_score == 50
    assert rec.logs[0].event_type is EventType.CREATED
    assert session.has_valid_data and session.object_exists
    assert session.is_confirmed
    assert not session.is_pending


@pytest.mark.asyncio
async def test_add_event_refreshes_record(session, ledger) -> None:
    await session.mint("Bike")

    result = await session.add_event(int(EventType.MAINTENANCE), "Chain replaced")

    assert result.ok
    assert session.state.phase is Phase.READY
    assert session.record.trust_score == 55
    assert session.record.logs[-1].description == "Chain replaced"
    assert ledger.queries[-1] == session.state.object_identifier


@pytest.mark.asyncio
async def test_report_lost_then_transfer(session, executor, identity) -> None:
    await session.mint("Camera")
    assert session.is_owner

    assert (await session.report_lost()).ok
    assert session.is_lost
    assert session.record.trust_score == 0

    assert (await session.transfer("0xB0B")).ok
    assert executor.submitted[-1].arguments[1].value == "0xB0B"
    assert session.record.owner == "0xB0B"
    assert session.is_owner is False


@pytest.mark.asyncio
async def test_transfer_submits_recipient_as_given(session, executor) -> None:
    await session.mint("Lamp")

    await session.transfer(" 0xb0b ")

    assert executor.submitted[-1].method == "transfer_twin"
    assert executor.submitted[-1].arguments[1].value == " 0xb0b "


@pytest.mark.asyncio
async def test_events_after_lost_are_still_submitted(session, executor) -> None:
    await session.mint("Drone")
    await session.report_lost()

    result = await session.add_event(int(EventType.VERIFICATION), "Found again")

    assert result.ok
    assert executor.submitted[-1].method == "add_event"
    assert session.is_lost


@pytest.mark.asyncio
async def test_select_loads_existing_twin(session, ledger, phases, identifier_store) -> None:
    object_id = ledger.mint("0xa11ce", "Piano")

    assert await session.select(object_id) is True

    assert phases == [Phase.IDLE, Phase.LOADING, Phase.READY]
    assert session.record.metadata == "Piano"
    assert identifier_store.load_persisted_identifier() == object_id


@pytest.mark.asyncio
async def test_select_unknown_identifier_fails_not_found(session) -> None:
    assert await session.select("0xdead") is False

    assert session.state.phase is Phase.FAILED
    assert isinstance(session.state.last_error, NotFoundError)
    assert session.object_exists is False
    assert session.record is None


@pytest.mark.asyncio
async def test_select_invalid_object_fails_invalid_structure(session, ledger, make_payload) -> None:
    ledger.raw_overrides["0xbad"] = make_payload(trust_score="NaN")

    assert await session.select("0xbad") is False

    assert session.state.phase is Phase.FAILED
    assert isinstance(session.state.last_error, InvalidStructureError)
    assert "trust_score" in session.state.last_error.message
    assert session.object_exists is True
    assert session.has_valid_data is False
    assert session.record is None


@pytest.mark.asyncio
async def test_query_transport_failure_is_captured(ledger, executor) -> None:
    class _Broken:
        async def get_object(self, identifier):
            raise ConnectionError("node down")

    s = TwinSession(query=_Broken(), executor=executor)
    assert await s.select("0x1") is False

    assert s.state.phase is Phase.FAILED
    assert s.state.last_error.code == "ledger_unavailable"
    assert isinstance(s.state.last_error.cause, ConnectionError)


@pytest.mark.asyncio
async def test_restore_selects_persisted_identifier(ledger, executor, identity) -> None:
    from twin_engine.runtime.identifier_store import InMemoryIdentifierStore

    object_id = ledger.mint("0xa11ce", "Violin")
    s = TwinSession(
        query=ledger,
        executor=executor,
        identity=identity,
        identifier_store=InMemoryIdentifierStore(object_id),
    )

    assert await s.restore() is True
    assert s.record.metadata == "Violin"


@pytest.mark.asyncio
async def test_restore_without_persisted_identifier_stays_idle(session, ledger) -> None:
    assert await session.restore() is False
    assert session.state.phase is Phase.IDLE
    assert ledger.queries == []


@pytest.mark.asyncio
async def test_clear_resets_everything(session, identifier_store) -> None:
    await session.mint("Lamp")
    await session.add_event(1, "")

    session.clear()

    assert session.state.phase is Phase.IDLE
    assert session.state.object_identifier is None
    assert session.state.last_transaction_hash is None
    assert session.state.last_error is None
    assert session.record is None
    assert identifier_store.load_persisted_identifier() is None


def test_clear_is_safe_when_idle(session) -> None:
    session.clear()
    session.clear()
    assert session.state.phase is Phase.IDLE


@pytest.mark.asyncio
async def test_refresh_rereads_current_identifier(session, ledger) -> None:
    await session.mint("Guitar")
    ledger.add_event(session.state.object_identifier, int(EventType.DAMAGE), "Dropped")

    assert await session.refresh() is True
    assert session.record.trust_score == 47


@pytest.mark.asyncio
async def test_refresh_without_selection_is_noop(session, ledger) -> None:
    assert await session.refresh() is False
    assert ledger.queries == []


@pytest.mark.asyncio
async def test_new_operation_clears_previous_error(session) -> None:
    await session.mint("Desk")
    await session.transfer(" ")
    assert isinstance(session.state.last_error, ValidationError)

    await session.add_event(3, "Inspected")

    assert session.state.last_error is None
    assert session.state.phase is Phase.READY


def test_subscribe_and_unsubscribe(session) -> None:
    seen = []
    unsubscribe = session.subscribe(seen.append)
    session.clear()
    unsubscribe()
    session.clear()
    assert len(seen) == 1
