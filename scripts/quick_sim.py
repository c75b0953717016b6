from __future__ import annotations

import asyncio
import logging

from twin_engine.config import ContractConfig, SessionConfig
from twin_engine.models.record import event_history, trust_grade, twin_status
from twin_engine.models.session import OperationResult
from twin_engine.models.types import EventType
from twin_engine.runtime.identifier_store import InMemoryIdentifierStore
from twin_engine.runtime.session import TwinSession
from twin_engine.testing.stubs import StubExecutor, StubIdentity, StubLedger

OWNER = "0xa11ce"
RECIPIENT = "0xb0b"


def _show(label: str, result: OperationResult) -> None:
    status = "ok" if result.ok else f"FAILED ({result.error!r})"
    tx = f" tx={result.transaction_hash}" if result.transaction_hash else ""
    print(f"- {label}: {status}{tx}")


async def run() -> None:
    ledger = StubLedger()
    session = TwinSession(
        query=ledger,
        executor=StubExecutor(ledger, sender=OWNER),
        identity=StubIdentity(OWNER),
        identifier_store=InMemoryIdentifierStore(),
        config=SessionConfig(contract=ContractConfig("0xstub")),
    )
    session.subscribe(lambda s: logging.getLogger("quick_sim").debug("phase=%s", s.phase.value))

    # Mint -> events -> lost -> transfer
    _show("mint", await session.mint("E-Scooter SN-2024-001"))
    _show("maintenance", await session.add_event(int(EventType.MAINTENANCE), "Battery replaced"))
    _show("inspection", await session.add_event(int(EventType.INSPECTION), "Annual inspection passed"))
    _show("report_lost", await session.report_lost())
    _show("transfer", await session.transfer(RECIPIENT))
    _show("empty event (expected to fail)", await session.add_event(int(EventType.DAMAGE), "   "))

    await session.refresh()
    record = session.record
    if record is None:
        print("\nNo twin loaded")
        return

    print(f"\n== {session.object_identifier} ==")
    print(f"Metadata: {record.metadata}")
    print(f"Owner:    {record.owner} (mine: {session.is_owner})")
    print(f"Trust:    {record.trust_score} ({trust_grade(record.trust_score).value})")
    print(f"Status:   {twin_status(record).value}")
    print("\nHistory:")
    for index, kind, description in event_history(record):
        print(f"  #{index} {kind.label}: {description or '(no description)'}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run())


if __name__ == "__main__":
    main()
