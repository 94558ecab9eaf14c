"""Load state machine definitions from YAML.

A definition names an initial state and lists its transitions:

    name: order
    initial: Pending
    transitions:
      - {from: Pending, event: Pay, to: Paid}
      - {from: Pending, event: Cancel, to: Canceled}

States and events are read as strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from src.machine import Handler, Transition, TransitionTable, label
from src.utils.logging import get_logger
from src.utils.result import DefinitionError, Err, Ok, Result

logger = get_logger("definitions.loader")

REQUIRED_FIELDS = ("from", "event", "to")


def logging_handler(from_state: str, event: str, to_state: str) -> None:
    """Default handler: record the transition and accept it."""
    logger.info(
        "transition_handled",
        from_state=label(from_state),
        event_name=label(event),
        to_state=label(to_state),
    )


@dataclass(frozen=True)
class TransitionSpec:
    """One transition line of a definition."""

    from_state: str
    event: str
    to_state: str


@dataclass
class MachineDefinition:
    """A named machine: initial state plus ordered transitions."""

    name: str
    initial: str
    transitions: list[TransitionSpec] = field(default_factory=list)

    @classmethod
    def from_dict(
        cls,
        data: Any,
        source: str = "<dict>",
    ) -> Result["MachineDefinition", DefinitionError]:
        """
        Build a definition from parsed YAML data.

        Args:
            data: Mapping with name, initial and transitions
            source: Where the data came from, for error messages

        Returns:
            Result with the definition or the first problem found
        """
        if not isinstance(data, dict):
            return Err(DefinitionError(source, "Expected a mapping at the top level"))

        if data.get("initial") is None:
            return Err(DefinitionError(source, "Missing 'initial' state"))

        raw_transitions = data.get("transitions") or []
        if not isinstance(raw_transitions, list):
            return Err(DefinitionError(source, "'transitions' must be a list"))

        specs: list[TransitionSpec] = []
        seen: set[tuple[str, str]] = set()

        for index, item in enumerate(raw_transitions):
            if not isinstance(item, dict):
                return Err(DefinitionError(source, "Transition must be a mapping", index))

            missing = [name for name in REQUIRED_FIELDS if item.get(name) is None]
            if missing:
                return Err(DefinitionError(
                    source,
                    f"Missing field(s): {', '.join(missing)}",
                    index,
                ))

            spec = TransitionSpec(
                from_state=str(item["from"]),
                event=str(item["event"]),
                to_state=str(item["to"]),
            )
            if (spec.from_state, spec.event) in seen:
                return Err(DefinitionError(
                    source,
                    f"state, event: [{spec.from_state}, {spec.event}] existed",
                    index,
                ))
            seen.add((spec.from_state, spec.event))
            specs.append(spec)

        return Ok(cls(
            name=str(data.get("name", Path(source).stem)),
            initial=str(data["initial"]),
            transitions=specs,
        ))

    def build(self, handler: Optional[Handler] = None) -> TransitionTable:
        """
        Create a table in the initial state with every transition registered.

        Args:
            handler: Handler for every transition (default: log and accept)

        Returns:
            Populated TransitionTable
        """
        handler = handler or logging_handler
        table = TransitionTable(self.initial)
        table.add_transitions(*(
            Transition(spec.from_state, spec.event, spec.to_state, handler)
            for spec in self.transitions
        ))
        logger.debug(
            "definition_built",
            name=self.name,
            transitions=len(self.transitions),
        )
        return table


def load_definition(path: Path) -> Result[MachineDefinition, DefinitionError]:
    """
    Load a machine definition from a YAML file.

    Args:
        path: Definition file

    Returns:
        Result with the definition or error
    """
    path = Path(path)
    source = str(path)

    if not path.exists():
        return Err(DefinitionError(source, "File not found"))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        return Err(DefinitionError(source, f"Failed to parse YAML: {e}"))
    except OSError as e:
        return Err(DefinitionError(source, f"Failed to read file: {e}"))

    return MachineDefinition.from_dict(data, source=source)
