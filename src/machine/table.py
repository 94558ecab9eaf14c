"""Thread-safe transition table."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Hashable, Optional

from src.machine.types import (
    DuplicateTransitionError,
    Event,
    HandlerError,
    LabelConflictError,
    State,
    TableSnapshot,
    Transition,
    TransitionKey,
    UndefinedTransitionError,
    label,
)
from src.utils.logging import get_logger
from src.utils.result import Err, Ok

if TYPE_CHECKING:
    from src.config.settings import RenderConfig
    from src.render.diagrams import DiagramSet

logger = get_logger("machine.table")


def _merge_labels(known: dict[str, Hashable], *values: Hashable) -> dict[str, Hashable]:
    """Add values to a label map, refusing two distinct values with one label."""
    merged = dict(known)
    for value in values:
        existing = merged.setdefault(label(value), value)
        if existing != value:
            raise LabelConflictError(existing, value)
    return merged


class TransitionTable:
    """
    Finite state machine keyed by (current state, event).

    A single lock serializes registration, triggering and reads. Handlers run
    while the lock is held, so a handler must not call back into the same
    table; doing so deadlocks. A handler that never returns blocks every
    other caller of the table.

    Diagrams identify states and events by label, so two distinct values
    with the same label (1 and "1") cannot both be registered.
    """

    def __init__(self, initial_state: State) -> None:
        """
        Initialize the table.

        Args:
            initial_state: State the machine starts in
        """
        self._current = initial_state
        self._transitions: dict[TransitionKey, Transition] = {}
        self._state_labels: dict[str, State] = {label(initial_state): initial_state}
        self._event_labels: dict[str, Event] = {}
        self._lock = threading.Lock()

    @property
    def current_state(self) -> State:
        """The state the machine is in now."""
        with self._lock:
            return self._current

    def __len__(self) -> int:
        with self._lock:
            return len(self._transitions)

    def add_transitions(self, *transitions: Transition) -> None:
        """
        Register transitions in order.

        Registration stops at the first rejected transition; transitions
        added before it stay registered.

        Raises:
            DuplicateTransitionError: If a (from_state, event) pair exists
            LabelConflictError: If a state or event label is already used
                by a different value
        """
        with self._lock:
            for transition in transitions:
                key = transition.key
                if key in self._transitions:
                    raise DuplicateTransitionError(key)

                states = _merge_labels(
                    self._state_labels, transition.from_state, transition.to_state,
                )
                events = _merge_labels(self._event_labels, transition.event)

                self._transitions[key] = transition
                self._state_labels = states
                self._event_labels = events

                logger.debug(
                    "transition_registered",
                    from_state=label(transition.from_state),
                    event_name=label(transition.event),
                    to_state=label(transition.to_state),
                )

    def trigger(self, event: Event) -> State:
        """
        Fire an event from the current state.

        The state advances only after the handler succeeds. A handler
        succeeds by returning None or an Ok. An exception it raises or
        returns, directly or inside an Err, is raised unchanged.

        Args:
            event: Event to fire

        Returns:
            The new current state

        Raises:
            UndefinedTransitionError: If no transition matches
            HandlerError: If the handler returned a non-exception Err or
                any other unexpected value
        """
        with self._lock:
            from_state = self._current
            transition = self._transitions.get(TransitionKey(from_state, event))
            if transition is None:
                raise UndefinedTransitionError(from_state, event)

            outcome = transition.handler(from_state, event, transition.to_state)
            self._check_outcome(transition, outcome)

            self._current = transition.to_state

        logger.debug(
            "state_transition",
            from_state=label(from_state),
            event_name=label(event),
            to_state=label(transition.to_state),
        )
        return transition.to_state

    @staticmethod
    def _check_outcome(transition: Transition, outcome: Any) -> None:
        """Raise unless the handler outcome is a success."""
        if outcome is None or isinstance(outcome, Ok):
            return

        error = outcome.unwrap_err() if isinstance(outcome, Err) else outcome
        if isinstance(error, BaseException):
            raise error
        raise HandlerError(transition.key, error)

    def can_trigger(self, event: Event) -> bool:
        """Check whether a transition exists for event from the current state."""
        with self._lock:
            return TransitionKey(self._current, event) in self._transitions

    def available_events(self) -> list[Event]:
        """Events with a transition from the current state, sorted by label."""
        with self._lock:
            events = [
                key.event for key in self._transitions
                if key.from_state == self._current
            ]
        return sorted(events, key=label)

    def snapshot(self) -> TableSnapshot:
        """Take a consistent copy of the current state and transitions."""
        with self._lock:
            current = self._current
            keys = sorted(self._transitions)
            transitions = tuple(self._transitions[key] for key in keys)
        return TableSnapshot(current_state=current, transitions=transitions)

    def view(self, config: Optional["RenderConfig"] = None) -> "DiagramSet":
        """Render the table as Graphviz, Mermaid flowchart and state diagram text."""
        from src.render.diagrams import render

        return render(self.snapshot(), config)
