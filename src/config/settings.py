"""Centralized configuration for fsm-table.

Configuration can be loaded from a YAML file and is validated before use.
Every value has a documented default, so no file is required.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from src.utils.result import ConfigError, Err, Ok, Result

DEFAULT_CONFIG_FILE = "fsm-table.yaml"

LOG_LEVELS = ("debug", "info", "warn", "warning", "error")
LOG_FORMATS = ("json", "text")
FLOW_DIRECTIONS = ("LR", "RL", "TB", "TD", "BT")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class RenderConfig:
    """Diagram rendering settings."""

    graph_name: str = "fsm"
    graph_highlight: str = "red"  # DOT colour of the current state
    flow_direction: str = "LR"
    flow_highlight: str = "#00AA00"  # Mermaid fill of the current state


@dataclass
class EngineConfig:
    """Complete fsm-table configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    render: RenderConfig = field(default_factory=RenderConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> Result["EngineConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["EngineConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        if not isinstance(data, dict):
            return Err(ConfigError(
                field="root",
                message=f"Expected a mapping, got {type(data).__name__}",
            ))

        for section in ("logging", "render"):
            if not isinstance(data.get(section, {}), dict):
                return Err(ConfigError(
                    field=section,
                    message="Expected a mapping",
                ))

        logging_data = data.get("logging", {})
        logging_config = LoggingConfig(
            level=str(logging_data.get("level", "info")),
            format=str(logging_data.get("format", "json")),
        )

        render_data = data.get("render", {})
        render = RenderConfig(
            graph_name=str(render_data.get("graph_name", "fsm")),
            graph_highlight=str(render_data.get("graph_highlight", "red")),
            flow_direction=str(render_data.get("flow_direction", "LR")),
            flow_highlight=str(render_data.get("flow_highlight", "#00AA00")),
        )

        return Ok(cls(logging=logging_config, render=render))

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if self.logging.level.lower() not in LOG_LEVELS:
            return Err(ConfigError(
                field="logging.level",
                message=f"Must be one of {', '.join(LOG_LEVELS)}, got {self.logging.level}",
            ))
        if self.logging.format not in LOG_FORMATS:
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be one of {', '.join(LOG_FORMATS)}, got {self.logging.format}",
            ))

        if self.render.flow_direction not in FLOW_DIRECTIONS:
            return Err(ConfigError(
                field="render.flow_direction",
                message=f"Must be one of {', '.join(FLOW_DIRECTIONS)}, got {self.render.flow_direction}",
            ))
        if not self.render.graph_name.isidentifier():
            return Err(ConfigError(
                field="render.graph_name",
                message=f"Must be a plain identifier, got {self.render.graph_name!r}",
            ))

        return Ok(None)


def load_config(path: Optional[Path] = None) -> Result[EngineConfig, ConfigError]:
    """
    Load configuration from a file, falling back to defaults.

    An explicit path must exist. Without one, ./fsm-table.yaml is used when
    present.

    Args:
        path: Configuration file

    Returns:
        Result with loaded config or error
    """
    if path is None:
        default_path = Path(DEFAULT_CONFIG_FILE)
        if default_path.exists():
            result = EngineConfig.from_yaml(default_path)
        else:
            result = Ok(EngineConfig())
    else:
        result = EngineConfig.from_yaml(Path(path))

    if result.is_err():
        return result
    config = result.unwrap()

    validation_result = config.validate()
    if validation_result.is_err():
        return Err(validation_result.unwrap_err())

    return Ok(config)
