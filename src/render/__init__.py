"""Diagram export for transition tables."""

from src.render.diagrams import (
    FORMATS,
    DiagramSet,
    render,
    render_flowchart,
    render_graphviz,
    render_state_diagram,
)

__all__ = [
    "FORMATS",
    "DiagramSet",
    "render",
    "render_graphviz",
    "render_flowchart",
    "render_state_diagram",
]
