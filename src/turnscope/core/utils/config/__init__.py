"""
Configuration management for turnscope.

Re-exports the configuration sections and the global accessors so callers
can write ``from turnscope.core.utils.config import get_config``.
"""

from .analysis import AnalysisConfig, LoggingConfig, TimingConfig
from .base import (
    DEFAULT_SPEAKER,
    INTERROGATIVE_WORDS,
    STOP_WORDS,
    USER_COLORS,
)
from .main import TurnscopeConfig, get_config, load_config, set_config

__all__ = [
    "AnalysisConfig",
    "DEFAULT_SPEAKER",
    "INTERROGATIVE_WORDS",
    "LoggingConfig",
    "STOP_WORDS",
    "TimingConfig",
    "TurnscopeConfig",
    "USER_COLORS",
    "get_config",
    "load_config",
    "set_config",
]
