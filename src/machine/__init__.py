"""Transition table state machine.

A table starts in an initial state and only moves along registered
(state, event) -> state transitions:

    table = TransitionTable("Pending")
    table.add_transitions(
        Transition("Pending", "Pay", "Paid", handler=charge_card),
        Transition("Pending", "Cancel", "Canceled"),
    )
    table.trigger("Pay")        # runs charge_card, state becomes "Paid"
    table.trigger("Cancel")     # UndefinedTransitionError, state stays "Paid"

A handler vetoes a transition by raising or by returning an Err.
"""

from src.machine.table import TransitionTable
from src.machine.types import (
    DuplicateTransitionError,
    Event,
    Handler,
    HandlerError,
    LabelConflictError,
    MachineError,
    State,
    TableSnapshot,
    Transition,
    TransitionKey,
    UndefinedTransitionError,
    label,
    noop_handler,
)

__all__ = [
    # Types
    "State",
    "Event",
    "Handler",
    "Transition",
    "TransitionKey",
    "TableSnapshot",
    "label",
    "noop_handler",
    # Errors
    "MachineError",
    "DuplicateTransitionError",
    "UndefinedTransitionError",
    "HandlerError",
    "LabelConflictError",
    # Table
    "TransitionTable",
]
