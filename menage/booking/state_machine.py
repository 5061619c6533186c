"""
Finite state machine for one booking page.

    BROWSING -> OPTION_SELECTED -> RESERVABLE -> SUBMITTING -> SUBMITTED
                                       ^              |
                                       +- SUBMIT_ERROR <+

SUBMITTED is terminal. Entering SUBMITTING is guarded by the selection's
validity predicate, so an incomplete selection never reaches storage.

Usage:
    sm = BookingStateMachine(can_submit=lambda: is_reservable(sel, table))
    sm.transition(BookingTrigger.OPTION_ADDED)
    assert sm.current_state == BookingState.OPTION_SELECTED
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from menage.errors import InvalidTransitionError

logger = logging.getLogger(__name__)


class BookingState(str, Enum):
    """All possible states of a booking page."""
    BROWSING = "browsing"
    OPTION_SELECTED = "option_selected"
    RESERVABLE = "reservable"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"
    SUBMIT_ERROR = "submit_error"


class BookingTrigger(str, Enum):
    """Events that cause state transitions."""
    OPTION_ADDED = "option_added"
    SELECTION_CLEARED = "selection_cleared"
    SELECTION_COMPLETED = "selection_completed"
    SELECTION_INCOMPLETE = "selection_incomplete"
    SUBMIT = "submit"
    INSERT_SUCCEEDED = "insert_succeeded"
    INSERT_FAILED = "insert_failed"
    ERROR_ACKNOWLEDGED = "error_acknowledged"


@dataclass
class Transition:
    """A single valid state transition."""
    from_state: BookingState
    to_state: BookingState
    trigger: BookingTrigger
    guard: Optional[Callable[["BookingStateMachine"], bool]] = None


@dataclass
class StateEntry:
    """Recorded history entry for a state visit."""
    state: BookingState
    entered_at: datetime
    trigger: Optional[BookingTrigger] = None


class BookingStateMachine:
    """Deterministic state machine for selection and submission on one page."""

    TRANSITIONS: list[Transition] = [
        # --- Selecting ---
        Transition(BookingState.BROWSING, BookingState.OPTION_SELECTED,
                   BookingTrigger.OPTION_ADDED),
        Transition(BookingState.OPTION_SELECTED, BookingState.BROWSING,
                   BookingTrigger.SELECTION_CLEARED),
        Transition(BookingState.OPTION_SELECTED, BookingState.RESERVABLE,
                   BookingTrigger.SELECTION_COMPLETED),

        # --- Editing a complete selection ---
        Transition(BookingState.RESERVABLE, BookingState.OPTION_SELECTED,
                   BookingTrigger.SELECTION_INCOMPLETE),
        Transition(BookingState.RESERVABLE, BookingState.BROWSING,
                   BookingTrigger.SELECTION_CLEARED),

        # --- Submission ---
        Transition(BookingState.RESERVABLE, BookingState.SUBMITTING,
                   BookingTrigger.SUBMIT, guard=lambda sm: sm.can_submit()),
        Transition(BookingState.SUBMITTING, BookingState.SUBMITTED,
                   BookingTrigger.INSERT_SUCCEEDED),
        Transition(BookingState.SUBMITTING, BookingState.SUBMIT_ERROR,
                   BookingTrigger.INSERT_FAILED),

        # --- Recovery: the selection is kept ---
        Transition(BookingState.SUBMIT_ERROR, BookingState.RESERVABLE,
                   BookingTrigger.ERROR_ACKNOWLEDGED),
    ]

    def __init__(self, can_submit: Optional[Callable[[], bool]] = None) -> None:
        self._can_submit = can_submit or (lambda: True)
        self._current_state = BookingState.BROWSING
        self._history: list[StateEntry] = [
            StateEntry(state=BookingState.BROWSING, entered_at=datetime.now(timezone.utc))
        ]
        self._error_count: int = 0

    @property
    def current_state(self) -> BookingState:
        return self._current_state

    @property
    def error_count(self) -> int:
        return self._error_count

    def can_submit(self) -> bool:
        return self._can_submit()

    def transition(self, trigger: BookingTrigger) -> BookingState:
        """
        Execute a state transition.

        Raises:
            InvalidTransitionError: If no valid transition exists, or its guard fails.
        """
        for t in self.TRANSITIONS:
            if t.from_state == self._current_state and t.trigger == trigger:
                if t.guard is not None and not t.guard(self):
                    continue

                old_state = self._current_state
                self._current_state = t.to_state
                self._history.append(StateEntry(
                    state=self._current_state,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))

                if t.to_state == BookingState.SUBMIT_ERROR:
                    self._error_count += 1

                logger.debug(
                    "State transition: %s -> %s (trigger: %s)",
                    old_state.value, self._current_state.value, trigger.value,
                )
                return self._current_state

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_state.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[BookingTrigger]:
        """Return all triggers valid from the current state."""
        return [t.trigger for t in self.TRANSITIONS if t.from_state == self._current_state]

    def get_history(self) -> list[StateEntry]:
        return list(self._history)

    def get_state_trace(self) -> list[str]:
        """Return ordered list of state names visited."""
        return [entry.state.value for entry in self._history]

    def is_terminal(self) -> bool:
        return self._current_state == BookingState.SUBMITTED
