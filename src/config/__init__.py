"""Configuration module for fsm-table."""

from src.config.settings import EngineConfig, LoggingConfig, RenderConfig, load_config

__all__ = ["EngineConfig", "LoggingConfig", "RenderConfig", "load_config"]
