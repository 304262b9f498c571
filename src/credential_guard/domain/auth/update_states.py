"""Deterministic transition guards for credential update attempts."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class UpdateState(StrEnum):
    """States of one guarded credential update attempt."""

    IDLE = "idle"
    VALIDATING = "validating"
    APPLIED = "applied"
    REJECTED = "rejected"


class InvalidUpdateTransitionError(ValueError):
    """Raised when an attempted update state transition is not allowed."""


_ALLOWED_TRANSITIONS: Final[dict[UpdateState, frozenset[UpdateState]]] = {
    UpdateState.IDLE: frozenset({UpdateState.VALIDATING}),
    UpdateState.VALIDATING: frozenset({UpdateState.APPLIED, UpdateState.REJECTED}),
    UpdateState.APPLIED: frozenset(),
    UpdateState.REJECTED: frozenset(),
}


def can_transition(from_state: UpdateState, to_state: UpdateState) -> bool:
    """Return whether the transition is valid for the update state machine."""

    return to_state in _ALLOWED_TRANSITIONS[from_state]


def assert_update_transition(from_state: UpdateState, to_state: UpdateState) -> UpdateState:
    """Assert a transition is allowed and return the target state."""

    if not can_transition(from_state, to_state):
        raise InvalidUpdateTransitionError(
            f"Invalid credential update transition: {from_state.value} -> {to_state.value}"
        )
    return to_state
