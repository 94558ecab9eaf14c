"""fsm-table: an embeddable finite state machine with diagram export."""

__version__ = "0.1.0"
