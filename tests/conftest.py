"""Shared fixtures for fsm-table tests."""

from pathlib import Path

import pytest

from src.machine import Transition, TransitionTable
from src.utils.logging import configure_logging

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default logging after tests that reconfigure it."""
    yield
    configure_logging()


@pytest.fixture
def order_definition_path() -> Path:
    """The bundled order workflow definition."""
    return EXAMPLES_DIR / "order_workflow.yaml"


@pytest.fixture
def order_table() -> TransitionTable:
    """Pending order that can be paid or canceled."""
    table = TransitionTable("Pending")
    table.add_transitions(
        Transition("Pending", "Pay", "Paid"),
        Transition("Pending", "Cancel", "Canceled"),
    )
    return table


@pytest.fixture
def cycle_table() -> TransitionTable:
    """Three-state cycle A -e1-> B -e2-> C -e3-> A."""
    table = TransitionTable("A")
    table.add_transitions(
        Transition("A", "e1", "B"),
        Transition("B", "e2", "C"),
        Transition("C", "e3", "A"),
    )
    return table


@pytest.fixture
def write_yaml(tmp_path):
    """Write text to a YAML file under tmp_path and return its path."""

    def _write(text: str, name: str = "machine.yaml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
