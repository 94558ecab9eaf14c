"""YAML machine definitions."""

from src.definitions.loader import (
    MachineDefinition,
    TransitionSpec,
    load_definition,
    logging_handler,
)

__all__ = [
    "MachineDefinition",
    "TransitionSpec",
    "load_definition",
    "logging_handler",
]
