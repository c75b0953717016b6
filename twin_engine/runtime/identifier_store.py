from __future__ import annotations

from typing import Optional


class InMemoryIdentifierStore:
    """
    Concrete in-memory IdentifierStore used by tests and quick_sim.
    """

    def __init__(self, identifier: Optional[str] = None) -> None:
        self._identifier = identifier
        self.saves: list[Optional[str]] = []

    def load_persisted_identifier(self) -> Optional[str]:
        return self._identifier

    def save_persisted_identifier(self, identifier: Optional[str]) -> None:
        self._identifier = identifier or None
        self.saves.append(self._identifier)
