"""CLI entry point for fsm-table."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional

import click

from src import __version__
from src.config.settings import EngineConfig, load_config
from src.definitions import MachineDefinition, load_definition
from src.machine import MachineError, label
from src.render import FORMATS
from src.utils.logging import (
    configure_logging,
    get_correlation_id,
    get_logger,
    set_machine_name,
)
from src.utils.result import ExitCode


class Context:
    """CLI context for sharing state between commands."""

    def __init__(self, config: EngineConfig) -> None:
        self.config = config
        self.logger = get_logger("cli")


pass_context = click.make_pass_decorator(Context)


def output_json(data: dict) -> None:
    """Output JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


def fail(message: str, code: int) -> None:
    """Print an error document and exit with code."""
    output_json({"status": "error", "message": message})
    sys.exit(code)


def read_definition(path: Path) -> MachineDefinition:
    """Load a definition or exit with DEFINITION_INVALID."""
    result = load_definition(path)
    if result.is_err():
        fail(str(result.unwrap_err()), ExitCode.DEFINITION_INVALID)
    definition = result.unwrap()
    set_machine_name(definition.name)
    return definition


@click.group()
@click.option(
    "--config",
    type=click.Path(exists=False, path_type=Path),
    default=None,
    help="Path to config file (default: ./fsm-table.yaml if present)",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warn", "error"], case_sensitive=False),
    default=None,
    help="Logging level (overrides config)",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"], case_sensitive=False),
    default=None,
    help="Log format (overrides config)",
)
@click.version_option(version=__version__)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    log_level: Optional[str],
    log_format: Optional[str],
) -> None:
    """
    fsm-table - finite state machines from YAML definitions.

    Checks machine definitions, replays events against them and exports
    their transition tables as Graphviz or Mermaid diagrams.
    """
    result = load_config(config)
    if result.is_err():
        fail(str(result.unwrap_err()), ExitCode.CONFIG_INVALID)
    engine_config = result.unwrap()

    if log_level:
        engine_config.logging.level = log_level
    if log_format:
        engine_config.logging.format = log_format

    configure_logging(
        level=engine_config.logging.level,
        format_type=engine_config.logging.format,
    )
    get_correlation_id()

    ctx.obj = Context(config=engine_config)


@cli.command()
@click.argument("definition", type=click.Path(path_type=Path))
@pass_context
def check(ctx: Context, definition: Path) -> None:
    """Validate a definition and summarize it."""
    machine = read_definition(definition)
    snapshot = machine.build().snapshot()

    ctx.logger.info("definition_checked", transitions=len(snapshot.transitions))

    output_json({
        "status": "success",
        "name": machine.name,
        "initial": machine.initial,
        "states": [label(s) for s in snapshot.states()],
        "events": [label(e) for e in snapshot.events()],
        "transitions": len(snapshot.transitions),
        "terminal_states": [label(s) for s in snapshot.terminal_states()],
    })


@cli.command()
@click.argument("definition", type=click.Path(path_type=Path))
@click.argument("events", nargs=-1)
@click.option(
    "--keep-going",
    is_flag=True,
    default=False,
    help="Continue with the next event after a failed trigger",
)
@pass_context
def run(
    ctx: Context,
    definition: Path,
    events: tuple[str, ...],
    keep_going: bool,
) -> None:
    """Trigger EVENTS in order and report each step."""
    machine = read_definition(definition)
    table = machine.build()

    steps = []
    failed = False

    for event in events:
        from_state = table.current_state
        try:
            to_state = table.trigger(event)
        except MachineError as e:
            failed = True
            steps.append({
                "event": event,
                "from": label(from_state),
                "to": None,
                "status": "failed",
                "error": str(e),
            })
            if not keep_going:
                break
            continue

        steps.append({
            "event": event,
            "from": label(from_state),
            "to": label(to_state),
            "status": "applied",
            "error": None,
        })

    ctx.logger.info("run_completed", steps=len(steps), failed=failed)

    output_json({
        "status": "partial" if failed else "success",
        "name": machine.name,
        "current_state": label(table.current_state),
        "steps": steps,
    })

    if failed:
        sys.exit(ExitCode.TRIGGER_FAILED)


@cli.command()
@click.argument("definition", type=click.Path(path_type=Path))
@click.option(
    "--format",
    "format_name",
    type=click.Choice([*FORMATS, "all"]),
    default="all",
    help="Diagram format",
)
@click.option(
    "--event",
    "events",
    multiple=True,
    help="Trigger this event before rendering (can be repeated)",
)
@pass_context
def render(
    ctx: Context,
    definition: Path,
    format_name: str,
    events: tuple[str, ...],
) -> None:
    """Print diagrams of a definition's transition table."""
    machine = read_definition(definition)
    table = machine.build()

    for event in events:
        try:
            table.trigger(event)
        except MachineError as e:
            fail(str(e), ExitCode.TRIGGER_FAILED)

    diagrams = table.view(ctx.config.render)

    if format_name == "all":
        for name in FORMATS:
            click.echo(f"--- {name} ---")
            click.echo(diagrams.get(name))
    else:
        click.echo(diagrams.get(format_name), nl=False)


def main() -> None:
    """Main entry point."""
    try:
        cli()
    except Exception as e:
        logger = get_logger("cli")
        logger.error("cli_error", error=str(e))
        sys.exit(ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
