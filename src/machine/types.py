"""Types for the transition table: keys, transitions, handlers and errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from functools import total_ordering
from typing import Any, Callable, Hashable, Optional

from src.utils.result import Result

# States and events are opaque labels: plain strings or Enum members
State = Hashable
Event = Hashable

# Handler(from_state, event, to_state); raise or return Err to veto
Handler = Callable[[State, Event, State], Optional[Result[Any, Any]]]


def label(value: Hashable) -> str:
    """Return the text label used to order and render a state or event."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def noop_handler(from_state: State, event: Event, to_state: State) -> None:
    """Handler that accepts every transition."""
    return None


@total_ordering
@dataclass(frozen=True)
class TransitionKey:
    """The (from_state, event) pair a transition is registered under."""

    from_state: State
    event: Event

    def sort_key(self) -> tuple[str, str]:
        return (label(self.from_state), label(self.event))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TransitionKey):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"[{label(self.from_state)}, {label(self.event)}]"


@dataclass(frozen=True)
class Transition:
    """A declared rule: on `event` in `from_state`, run `handler` and move to `to_state`."""

    from_state: State
    event: Event
    to_state: State
    handler: Handler = field(default=noop_handler, compare=False, repr=False)

    @property
    def key(self) -> TransitionKey:
        return TransitionKey(self.from_state, self.event)


@dataclass(frozen=True)
class TableSnapshot:
    """Consistent read-only copy of a table, transitions sorted by key."""

    current_state: State
    transitions: tuple[Transition, ...] = ()

    def states(self) -> list[State]:
        """Every state used as a source or target, sorted by label."""
        seen: dict[str, State] = {}
        for transition in self.transitions:
            seen.setdefault(label(transition.from_state), transition.from_state)
            seen.setdefault(label(transition.to_state), transition.to_state)
        return [seen[name] for name in sorted(seen)]

    def events(self) -> list[Event]:
        """Every registered event, sorted by label."""
        seen: dict[str, Event] = {}
        for transition in self.transitions:
            seen.setdefault(label(transition.event), transition.event)
        return [seen[name] for name in sorted(seen)]

    def terminal_states(self) -> list[State]:
        """States with no outgoing transitions."""
        sources = {label(t.from_state) for t in self.transitions}
        return [s for s in self.states() if label(s) not in sources]


class MachineError(Exception):
    """Base class for transition table errors."""

    pass


class DuplicateTransitionError(MachineError):
    """A transition is already registered for this (state, event) pair."""

    def __init__(self, key: TransitionKey) -> None:
        self.key = key
        super().__init__(f"state, event: {key} existed")


class UndefinedTransitionError(MachineError):
    """No transition is registered for the current state and event."""

    def __init__(self, state: State, event: Event) -> None:
        self.state = state
        self.event = event
        super().__init__(f"state, event: [{label(state)}, {label(event)}] undefined")


class HandlerError(MachineError):
    """A handler failed without an exception: a plain Err or an unexpected return value."""

    def __init__(self, key: TransitionKey, error: Any) -> None:
        self.key = key
        self.error = error
        super().__init__(f"handler for {key} failed: {error}")


class LabelConflictError(MachineError):
    """Two distinct states or events would be rendered under the same label."""

    def __init__(self, existing: Hashable, value: Hashable) -> None:
        self.existing = existing
        self.value = value
        super().__init__(
            f"label {label(value)!r} is already used by {existing!r}, cannot register {value!r}"
        )
