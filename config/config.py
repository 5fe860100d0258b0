"""Configuration system with layered loading and validation.

Implements a hierarchical configuration system with the following precedence:
1. Default values (lowest priority)
2. JSON configuration files
3. Environment variables
4. Command-line arguments (highest priority)

Configuration is deep-merged across all sources, allowing partial overrides
at any level of the configuration hierarchy.
"""
from __future__ import annotations

import argparse
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from core.exceptions import ConfigurationError
from speech.factory import SpeechHostRegistry
from speech.voice_selector import DEFAULT_PREFERRED_VOICES
from verbs.repository import BUNDLED_DATASET

# settings.json and voices.json live beside this module
CONFIG_DIR = Path(__file__).resolve().parent
SCHEMAS = ("conjugations", "examples")
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR")


def _require_number(name: str, value: Any) -> None:
    # bool is an int subclass; JSON true/false must not pass as a number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


@dataclass(frozen=True)
class DatasetConfig:
    """Verb dataset configuration.

    Attributes:
        location: Filesystem path or http(s) URL of the JSON document
        schema: Declared schema (conjugations | examples), None to follow the document
        timeout_s: HTTP timeout for remote datasets
    """
    location: str = str(BUNDLED_DATASET)
    schema: Optional[str] = None
    timeout_s: float = 10.0

    def __post_init__(self):
        if not self.location:
            raise ConfigurationError("Dataset location must not be empty")
        if self.schema is not None and self.schema not in SCHEMAS:
            raise ConfigurationError(f"Invalid dataset schema: {self.schema}")
        _require_number("dataset.timeout_s", self.timeout_s)
        if self.timeout_s <= 0:
            raise ConfigurationError(f"Invalid dataset timeout: {self.timeout_s}")


@dataclass(frozen=True)
class SpeechConfig:
    """Speech synthesis configuration.

    Attributes:
        engine: Speech host engine name
        qt_engine: Optional Qt TTS plugin name (speechd, flite, sapi, ...)
        locale: Locale tag set on every utterance
        rate: Speaking rate, 1.0 is normal
        pitch: Voice pitch, 1.0 is normal
        volume: Volume between 0.0 and 1.0
        cancel_delay_ms: Delay between cancelling and issuing the next utterance
        strip_translation: Speak only the text before a dash separator
        preferred_voices: Ordered voice names tried before locale matching
    """
    engine: str = "qt"
    qt_engine: Optional[str] = None
    locale: str = "pt-PT"
    rate: float = 0.98
    pitch: float = 1.0
    volume: float = 1.0
    cancel_delay_ms: int = 50
    strip_translation: bool = False
    preferred_voices: Tuple[str, ...] = DEFAULT_PREFERRED_VOICES

    def __post_init__(self):
        if self.engine not in SpeechHostRegistry.engines():
            raise ConfigurationError(
                f"Invalid engine: {self.engine} (available: {', '.join(SpeechHostRegistry.engines())})"
            )
        for name in ("rate", "pitch", "volume", "cancel_delay_ms"):
            _require_number(f"speech.{name}", getattr(self, name))
        if not isinstance(self.strip_translation, bool):
            raise ConfigurationError(
                f"speech.strip_translation must be true or false, got {self.strip_translation!r}"
            )
        if not 0.1 <= self.rate <= 2.0:
            raise ConfigurationError(f"Invalid speech rate: {self.rate}")
        if not 0.0 <= self.pitch <= 2.0:
            raise ConfigurationError(f"Invalid speech pitch: {self.pitch}")
        if not 0.0 <= self.volume <= 1.0:
            raise ConfigurationError(f"Invalid speech volume: {self.volume}")
        if self.cancel_delay_ms < 0:
            raise ConfigurationError(f"Invalid cancel delay: {self.cancel_delay_ms}")
        # JSON files deliver lists
        object.__setattr__(self, "preferred_voices", tuple(self.preferred_voices))


@dataclass(frozen=True)
class AppConfig:
    """Complete application configuration.

    Attributes:
        dataset: Verb dataset settings
        speech: Speech synthesis settings
        debug: Debug mode flag
        log_level: Logging verbosity level
    """
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    speech: SpeechConfig = field(default_factory=SpeechConfig)
    debug: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.log_level}")


class ConfigLoader:
    """Centralized configuration loader with validation and hierarchy.

    Implements the configuration loading strategy with proper precedence
    and deep merging of nested configuration dictionaries.
    """

    def __init__(self, config_dir: Path = CONFIG_DIR):
        self.config_dir = Path(config_dir)

    def load(self, argv: List[str]) -> Tuple[AppConfig, List[str]]:
        """Load configuration with proper hierarchy: defaults → files → env → CLI.

        Args:
            argv: Command-line arguments to parse

        Returns:
            Tuple of (AppConfig instance, unknown CLI arguments)
        """
        config_dict = self._get_defaults()
        self._deep_update(config_dict, self._load_json_configs())
        self._deep_update(config_dict, self._load_env_overrides())
        cli_overrides, unknown_args = self._parse_cli_args(argv)
        self._deep_update(config_dict, cli_overrides)
        return self._build_config(config_dict), unknown_args

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            "dataset": {
                "location": str(BUNDLED_DATASET),
                "schema": None,
                "timeout_s": 10.0,
            },
            "speech": {
                "engine": "qt",
                "qt_engine": None,
                "locale": "pt-PT",
                "rate": 0.98,
                "pitch": 1.0,
                "volume": 1.0,
                "cancel_delay_ms": 50,
                "strip_translation": False,
                "preferred_voices": list(DEFAULT_PREFERRED_VOICES),
            },
            "debug": False,
            "log_level": "INFO",
        }

    def _load_json_configs(self) -> Dict[str, Any]:
        """Load the JSON configuration files of the config directory.

        ``settings.json`` holds a partial configuration tree; ``voices.json`` holds
        the ordered list of preferred voice names. Missing files are skipped.

        Returns:
            Dictionary of overrides
        """
        overrides: Dict[str, Any] = {}

        settings = self._read_json("settings.json")
        if isinstance(settings, dict):
            self._deep_update(overrides, settings)

        voices = self._read_json("voices.json")
        if isinstance(voices, list):
            overrides.setdefault("speech", {})["preferred_voices"] = [str(v) for v in voices]

        return overrides

    def _read_json(self, filename: str) -> Any:
        file_path = self.config_dir / filename
        if not file_path.exists():
            return None
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Failed to load {filename}: {e}")
            return None

    def _load_env_overrides(self) -> Dict[str, Any]:
        """Load configuration overrides from environment variables.

        Supported environment variables:
        - VERBS_DATASET: Dataset path or URL
        - VERBS_SCHEMA: Dataset schema
        - SPEECH_ENGINE: Speech host engine
        - SPEECH_RATE: Speaking rate
        - SPEECH_CANCEL_DELAY_MS: Delay between cancel and speak
        - SPEECH_STRIP_TRANSLATION: Speak only text before a dash
        - DEBUG: Enable debug mode
        - LOG_LEVEL: Set logging level

        Returns:
            Dictionary with environment-based overrides
        """
        overrides: Dict[str, Any] = {}

        dataset = os.getenv("VERBS_DATASET")
        if dataset:
            overrides.setdefault("dataset", {})["location"] = dataset

        schema = os.getenv("VERBS_SCHEMA")
        if schema:
            overrides.setdefault("dataset", {})["schema"] = schema.lower()

        engine = os.getenv("SPEECH_ENGINE")
        if engine:
            overrides.setdefault("speech", {})["engine"] = engine.lower()

        rate = os.getenv("SPEECH_RATE")
        if rate:
            overrides.setdefault("speech", {})["rate"] = self._env_number("SPEECH_RATE", rate, float)

        delay = os.getenv("SPEECH_CANCEL_DELAY_MS")
        if delay:
            overrides.setdefault("speech", {})["cancel_delay_ms"] = self._env_number(
                "SPEECH_CANCEL_DELAY_MS", delay, int
            )

        if self._env_bool("SPEECH_STRIP_TRANSLATION"):
            overrides.setdefault("speech", {})["strip_translation"] = True

        if self._env_bool("DEBUG"):
            overrides["debug"] = True

        log_level = os.getenv("LOG_LEVEL")
        if log_level:
            overrides["log_level"] = log_level.upper()

        return overrides

    def _parse_cli_args(self, argv: List[str]) -> Tuple[Dict[str, Any], List[str]]:
        """Parse CLI arguments.

        Args:
            argv: Command-line arguments

        Returns:
            Tuple of (overrides dictionary, unknown arguments)
        """
        # help and front-end options belong to the console parser
        parser = argparse.ArgumentParser(description="EP verb console", add_help=False, allow_abbrev=False)

        parser.add_argument("--dataset", help="Dataset path or http(s) URL")
        parser.add_argument("--schema", choices=list(SCHEMAS), help="Dataset schema")
        parser.add_argument("--engine", choices=list(SpeechHostRegistry.engines()), help="Speech host engine")
        parser.add_argument("--qt-engine", help="Qt TTS plugin (speechd, flite, sapi, ...)")
        parser.add_argument("--rate", type=float, help="Speaking rate (1.0 is normal)")
        parser.add_argument(
            "--strip-translation",
            action="store_true",
            help="Speak only the text before a dash separator"
        )
        parser.add_argument("--debug", action="store_true", help="Enable debug mode")
        parser.add_argument("--log-level", choices=list(LOG_LEVELS), help="Set logging level")

        known, unknown = parser.parse_known_args(argv)

        overrides: Dict[str, Any] = {}
        if known.dataset:
            overrides.setdefault("dataset", {})["location"] = known.dataset
        if known.schema:
            overrides.setdefault("dataset", {})["schema"] = known.schema
        if known.engine:
            overrides.setdefault("speech", {})["engine"] = known.engine
        if known.qt_engine:
            overrides.setdefault("speech", {})["qt_engine"] = known.qt_engine
        if known.rate is not None:
            overrides.setdefault("speech", {})["rate"] = known.rate
        if known.strip_translation:
            overrides.setdefault("speech", {})["strip_translation"] = True
        if known.debug:
            overrides["debug"] = True
        if known.log_level:
            overrides["log_level"] = known.log_level

        return overrides, unknown

    def _build_config(self, config_dict: Dict[str, Any]) -> AppConfig:
        """Build and validate the final configuration object.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        try:
            dataset_config = DatasetConfig(**config_dict.get("dataset", {}))
            speech_config = SpeechConfig(**config_dict.get("speech", {}))
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration section: {e}") from e

        return AppConfig(
            dataset=dataset_config,
            speech=speech_config,
            debug=config_dict.get("debug", False),
            log_level=config_dict.get("log_level", "INFO"),
        )

    @staticmethod
    def _env_number(name: str, raw: str, cast):
        try:
            return cast(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None

    @staticmethod
    def _env_bool(name: str, default: bool = False) -> bool:
        """Parse boolean from environment variable.

        Returns:
            Boolean value (True for "1", "true", "yes", "y", "on")
        """
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in {"1", "true", "yes", "y", "on"}

    @staticmethod
    def _deep_update(target: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Recursively update mapping 'target' with 'updates' without clobbering nested dicts."""
        for key, new_val in updates.items():
            if isinstance(new_val, dict) and isinstance(target.get(key), dict):
                ConfigLoader._deep_update(target[key], new_val)  # type: ignore[index]
            else:
                target[key] = new_val


__all__ = ["AppConfig", "DatasetConfig", "SpeechConfig", "ConfigLoader", "CONFIG_DIR"]
