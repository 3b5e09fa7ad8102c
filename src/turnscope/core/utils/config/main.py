"""Top-level turnscope configuration."""

from __future__ import annotations

import json
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .analysis import AnalysisConfig, LoggingConfig, TimingConfig

ENV_PREFIX = "TURNSCOPE_"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_bool(value: str) -> bool | None:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    return None


class TurnscopeConfig:
    """
    Main configuration class for turnscope.

    The configuration is organized into sections:
    - analysis: toggles for the processed word stream and derived views
    - timing: speech rate and gap handling used when times are estimated
    - logging: level, file and format for the shared logger

    Loading order (highest to lowest priority):
    1. Environment variables (TURNSCOPE_*)
    2. Configuration file (JSON), if provided
    3. Default values
    """

    def __init__(self, config_file: str | None = None):
        self.analysis = AnalysisConfig()
        self.timing = TimingConfig()
        self.logging = LoggingConfig()

        if config_file:
            self._load_from_file(config_file)

        self._load_from_env()
        self.validate()

    def _load_from_env(self) -> None:
        """
        Load configuration from environment variables.

        Supported environment variables:
        - TURNSCOPE_STOP_WORDS: filter stop words (1/true/yes/on or 0/false/no/off)
        - TURNSCOPE_LAST_WORD_MODE: count repeats on the last occurrence
        - TURNSCOPE_ECHO_WORDS: keep earlier counts in last-word mode
        - TURNSCOPE_SCALE_TO_VISIBLE: normalize fingerprints to the selection
        - TURNSCOPE_SPEAKER_SORT: none/words/turns/name
        - TURNSCOPE_SPEECH_RATE: words per second for estimated durations
        - TURNSCOPE_PRESERVE_GAPS: keep gaps between start-only turns
        - TURNSCOPE_LOG_LEVEL: logging level
        - TURNSCOPE_LOG_FILE: log file path
        """
        bool_fields = {
            "STOP_WORDS": (self.analysis, "stop_words_filter"),
            "LAST_WORD_MODE": (self.analysis, "last_word_mode"),
            "ECHO_WORDS": (self.analysis, "echo_words"),
            "SCALE_TO_VISIBLE": (self.analysis, "scale_to_visible_data"),
            "PRESERVE_GAPS": (self.timing, "preserve_gaps_between_turns"),
        }
        for suffix, (section, attr) in bool_fields.items():
            raw = os.getenv(ENV_PREFIX + suffix)
            if raw:
                parsed = _parse_bool(raw)
                if parsed is not None:
                    setattr(section, attr, parsed)

        speaker_sort = os.getenv(ENV_PREFIX + "SPEAKER_SORT")
        if speaker_sort:
            self.analysis.speaker_sort = speaker_sort.strip().lower()

        speech_rate = os.getenv(ENV_PREFIX + "SPEECH_RATE")
        if speech_rate:
            try:
                self.timing.speech_rate_words_per_second = float(speech_rate)
            except ValueError:
                pass  # Keep default value if conversion fails

        log_level = os.getenv(ENV_PREFIX + "LOG_LEVEL")
        if log_level:
            self.logging.level = log_level.upper()

        log_file = os.getenv(ENV_PREFIX + "LOG_FILE")
        if log_file:
            self.logging.file = log_file

    def _load_from_file(self, config_file: str) -> None:
        """
        Load configuration from a JSON file.

        The file has one object per section:
            {"analysis": {...}, "timing": {...}, "logging": {...}}

        Raises:
            ValueError: If the file cannot be read or parsed
        """
        if not os.path.exists(config_file):
            raise ValueError(f"Configuration file not found: {config_file}")
        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to load configuration from {config_file}: {e}") from e

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration file must contain a JSON object: {config_file}")

        for section_name in ("analysis", "timing", "logging"):
            section_data = config_data.get(section_name)
            if isinstance(section_data, dict):
                self._apply_section(getattr(self, section_name), section_data)

    def _apply_section(self, config_obj: Any, data: dict[str, Any]) -> None:
        for key, value in data.items():
            if hasattr(config_obj, key):
                setattr(config_obj, key, value)

    def validate(self) -> None:
        self.analysis.validate()
        self.timing.validate()
        self.logging.validate()

    def to_dict(self) -> dict[str, Any]:
        """Return a complete configuration snapshot as a dictionary."""
        return {
            "analysis": asdict(self.analysis),
            "timing": asdict(self.timing),
            "logging": asdict(self.logging),
        }

    def save_to_file(self, config_file: str) -> None:
        """Save current configuration to a JSON file."""
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)


# Global configuration instance
_config: TurnscopeConfig | None = None
_env_loaded = False


def _load_repo_dotenv() -> None:
    global _env_loaded
    if _env_loaded:
        return
    _env_loaded = True
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)


def get_config() -> TurnscopeConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _load_repo_dotenv()
        _config = TurnscopeConfig()
    return _config


def set_config(config: TurnscopeConfig | None) -> None:
    """Set the global configuration instance (None resets to defaults)."""
    global _config
    _config = config


def load_config(config_file: str) -> TurnscopeConfig:
    """Load configuration from file and set as global config."""
    _load_repo_dotenv()
    config = TurnscopeConfig(config_file)
    set_config(config)
    return config
