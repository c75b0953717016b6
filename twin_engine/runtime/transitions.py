"""Allowed phase transitions for the session state machine.

Invariants:
  - Every phase may fall back to IDLE (clear) or FAILED.
  - SUBMITTING and AWAITING_FINALITY only move forward, fail, or are abandoned.
"""
from __future__ import annotations

from twin_engine.models.types import Phase

ALLOWED_TRANSITIONS: dict[Phase, set[Phase]] = {
    Phase.IDLE: {Phase.IDLE, Phase.LOADING, Phase.SUBMITTING, Phase.FAILED},
    Phase.LOADING: {Phase.LOADING, Phase.READY, Phase.SUBMITTING, Phase.FAILED, Phase.IDLE},
    Phase.READY: {Phase.LOADING, Phase.SUBMITTING, Phase.FAILED, Phase.IDLE},
    Phase.FAILED: {Phase.LOADING, Phase.SUBMITTING, Phase.FAILED, Phase.IDLE},
    Phase.SUBMITTING: {Phase.AWAITING_FINALITY, Phase.LOADING, Phase.FAILED, Phase.IDLE},
    Phase.AWAITING_FINALITY: {Phase.LOADING, Phase.FAILED, Phase.IDLE},
}


def is_allowed(current: Phase, proposed: Phase) -> bool:
    return proposed in ALLOWED_TRANSITIONS[current]
