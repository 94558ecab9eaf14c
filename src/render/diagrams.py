"""Text diagram renderers for a transition table snapshot.

Three formats are produced from the same sorted view of the table:

    graphviz       DOT digraph, current state drawn in the highlight colour
    flowchart      Mermaid left-to-right flowchart with synthetic node ids
    state-diagram  Mermaid stateDiagram, start arrow points at the current state

States are ordered by label and transitions by (from label, event label),
so output is identical for the same table regardless of registration order.

The current state is only highlighted when it takes part in a transition.
For an empty table, or a current state no transition mentions, the
flowchart has no trailing `style` line and no Graphviz node is coloured.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.config.settings import RenderConfig
from src.machine.types import State, TableSnapshot, label

INDENT = "    "

FORMATS = ("graphviz", "flowchart", "state-diagram")


@dataclass(frozen=True)
class DiagramSet:
    """The three renderings of one snapshot."""

    graphviz: str
    flowchart: str
    state_diagram: str

    def get(self, format_name: str) -> str:
        """Return one rendering by its format name."""
        if format_name not in FORMATS:
            raise ValueError(
                f"Unknown diagram format '{format_name}', expected one of {', '.join(FORMATS)}"
            )
        return getattr(self, format_name.replace("-", "_"))


def state_ids(states: list[State]) -> dict[str, str]:
    """Map each state label to a synthetic id (id0, id1, ...) in sorted order."""
    return {label(state): f"id{i}" for i, state in enumerate(states)}


def render_graphviz(
    snapshot: TableSnapshot,
    config: Optional[RenderConfig] = None,
) -> str:
    """Render a DOT digraph: edges first, then nodes."""
    config = config or RenderConfig()
    current = label(snapshot.current_state)

    lines = [f"digraph {config.graph_name} {{"]

    for transition in snapshot.transitions:
        lines.append(
            f'{INDENT}"{label(transition.from_state)}" -> "{label(transition.to_state)}"'
            f' [ label = "{label(transition.event)}" ];'
        )
    lines.append("")

    for state in snapshot.states():
        name = label(state)
        if name == current:
            lines.append(f'{INDENT}"{name}" [color = "{config.graph_highlight}"];')
        else:
            lines.append(f'{INDENT}"{name}";')

    lines.append("}")
    return "\n".join(lines) + "\n"


def render_flowchart(
    snapshot: TableSnapshot,
    config: Optional[RenderConfig] = None,
) -> str:
    """Render a Mermaid flowchart: nodes, edges, then the current-state style."""
    config = config or RenderConfig()
    states = snapshot.states()
    ids = state_ids(states)

    lines = [f"graph {config.flow_direction}"]

    for state in states:
        lines.append(f"{INDENT}{ids[label(state)]}[{label(state)}]")
    lines.append("")

    for transition in snapshot.transitions:
        lines.append(
            f"{INDENT}{ids[label(transition.from_state)]} --> "
            f"|{label(transition.event)}| {ids[label(transition.to_state)]}"
        )
    lines.append("")

    # Only states that take part in a transition have a node to style
    current_id = ids.get(label(snapshot.current_state))
    if current_id is not None:
        lines.append(f"{INDENT}style {current_id} fill:{config.flow_highlight}")

    return "\n".join(lines) + "\n"


def render_state_diagram(
    snapshot: TableSnapshot,
    config: Optional[RenderConfig] = None,
) -> str:
    """Render a Mermaid stateDiagram anchored at the current state."""
    lines = [
        "stateDiagram",
        f"{INDENT}[*] --> {label(snapshot.current_state)}",
    ]

    for transition in snapshot.transitions:
        lines.append(
            f"{INDENT}{label(transition.from_state)} --> "
            f"{label(transition.to_state)}: {label(transition.event)}"
        )

    return "\n".join(lines) + "\n"


def render(
    snapshot: TableSnapshot,
    config: Optional[RenderConfig] = None,
) -> DiagramSet:
    """Render all three formats from one snapshot."""
    return DiagramSet(
        graphviz=render_graphviz(snapshot, config),
        flowchart=render_flowchart(snapshot, config),
        state_diagram=render_state_diagram(snapshot, config),
    )
