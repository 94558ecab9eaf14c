"""Utility modules for fsm-table."""

from src.utils.logging import (
    configure_logging,
    get_correlation_id,
    get_logger,
    set_machine_name,
)
from src.utils.result import (
    ConfigError,
    DefinitionError,
    Err,
    ExitCode,
    Ok,
    Result,
    ResultError,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    "set_machine_name",
    # Result
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ConfigError",
    "DefinitionError",
    "ExitCode",
]
