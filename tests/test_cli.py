import json

import pytest
from click.testing import CliRunner

from src import __version__
from src.cli import cli
from src.utils.result import ExitCode


@pytest.fixture
def runner():
    return CliRunner()


def invoke(runner, *args):
    return runner.invoke(cli, ["--log-level", "error", *map(str, args)])


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_check(runner, order_definition_path):
    result = invoke(runner, "check", order_definition_path)

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["name"] == "order"
    assert data["initial"] == "Pending"
    assert data["transitions"] == 13
    assert data["states"] == [
        "Canceled", "Complete", "Paid", "Pending", "Refunding", "Returning", "Shipped",
    ]
    assert data["terminal_states"] == ["Canceled", "Complete"]


def test_run_applies_events(runner, order_definition_path):
    result = invoke(runner, "run", order_definition_path, "PaySuccess", "Ship")

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["status"] == "success"
    assert data["current_state"] == "Shipped"
    assert [step["to"] for step in data["steps"]] == ["Paid", "Shipped"]


def test_run_stops_at_undefined_event(runner, order_definition_path):
    result = invoke(runner, "run", order_definition_path, "Ship", "PaySuccess")

    assert result.exit_code == ExitCode.TRIGGER_FAILED
    data = json.loads(result.output)
    assert data["status"] == "partial"
    assert data["current_state"] == "Pending"
    assert len(data["steps"]) == 1
    assert data["steps"][0]["error"] == "state, event: [Pending, Ship] undefined"


def test_run_keep_going(runner, order_definition_path):
    result = invoke(
        runner, "run", order_definition_path, "--keep-going", "Ship", "PaySuccess",
    )

    assert result.exit_code == ExitCode.TRIGGER_FAILED
    data = json.loads(result.output)
    assert [step["status"] for step in data["steps"]] == ["failed", "applied"]
    assert data["current_state"] == "Paid"


def test_render_state_diagram_after_events(runner, write_yaml):
    path = write_yaml(
        "initial: A\n"
        "transitions:\n"
        "  - {from: A, event: e1, to: B}\n"
        "  - {from: B, event: e2, to: C}\n"
        "  - {from: C, event: e3, to: A}\n"
    )

    result = invoke(runner, "render", path, "--format", "state-diagram", "--event", "e1")

    assert result.exit_code == 0
    assert result.output == (
        "stateDiagram\n"
        "    [*] --> B\n"
        "    A --> B: e1\n"
        "    B --> C: e2\n"
        "    C --> A: e3\n"
    )


def test_render_all_formats(runner, order_definition_path):
    result = invoke(runner, "render", order_definition_path)

    assert result.exit_code == 0
    assert "--- graphviz ---\ndigraph fsm {" in result.output
    assert "--- flowchart ---\ngraph LR" in result.output
    assert "--- state-diagram ---\nstateDiagram" in result.output


def test_render_uses_config(runner, write_yaml, order_definition_path):
    config = write_yaml("render:\n  flow_direction: TD\n", name="config.yaml")

    result = invoke(
        runner, "--config", config, "render", order_definition_path, "--format", "flowchart",
    )

    assert result.exit_code == 0
    assert result.output.startswith("graph TD\n")


def test_render_rejects_undefined_event(runner, order_definition_path):
    result = invoke(runner, "render", order_definition_path, "--event", "Ship")

    assert result.exit_code == ExitCode.TRIGGER_FAILED
    assert json.loads(result.output)["status"] == "error"


def test_invalid_definition(runner, write_yaml):
    path = write_yaml(
        "initial: A\n"
        "transitions:\n"
        "  - {from: A, event: x, to: B}\n"
        "  - {from: A, event: x, to: C}\n"
    )

    result = invoke(runner, "check", path)

    assert result.exit_code == ExitCode.DEFINITION_INVALID
    assert "[A, x] existed" in json.loads(result.output)["message"]


def test_invalid_config(runner, write_yaml, order_definition_path):
    config = write_yaml("render:\n  flow_direction: sideways\n", name="config.yaml")

    result = invoke(runner, "--config", config, "check", order_definition_path)

    assert result.exit_code == ExitCode.CONFIG_INVALID
    assert "render.flow_direction" in json.loads(result.output)["message"]


def test_log_level_error_hides_handler_logs(runner, order_definition_path):
    result = invoke(runner, "run", order_definition_path, "PaySuccess")

    assert result.exit_code == 0
    assert "transition_handled" not in result.output
    assert json.loads(result.output)["current_state"] == "Paid"


def test_log_level_info_shows_handler_logs(runner, order_definition_path):
    result = runner.invoke(
        cli, ["--log-level", "info", "run", str(order_definition_path), "PaySuccess"],
    )

    assert result.exit_code == 0
    assert "transition_handled" in result.output


def test_log_level_debug_shows_table_logs(runner, order_definition_path):
    result = runner.invoke(
        cli, ["--log-level", "debug", "run", str(order_definition_path), "PaySuccess"],
    )

    assert result.exit_code == 0
    assert "transition_registered" in result.output
    assert "state_transition" in result.output
