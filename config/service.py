"""Configuration service facade for simplified configuration access.

Provides a flat, read-only view over ``AppConfig`` so client code does not
reach through nested sections.
"""
from __future__ import annotations

from typing import Any, Optional

from config.config import AppConfig, ConfigLoader
from speech.dispatcher import UtteranceParams
from verbs.models import SchemaKind


class ConfigurationService:
    """Facade for application configuration management.

    Example:
        config_service = ConfigurationService(config)
        location = config_service.dataset_location  # instead of config.dataset.location
    """

    def __init__(self, config: AppConfig):
        self._config = config

    # Dataset configuration
    @property
    def dataset_location(self) -> str:
        return self._config.dataset.location

    @property
    def dataset_schema(self) -> Optional[SchemaKind]:
        """Declared dataset schema, None when the document decides."""
        schema = self._config.dataset.schema
        return SchemaKind(schema) if schema else None

    @property
    def dataset_timeout(self) -> float:
        return self._config.dataset.timeout_s

    # Speech configuration
    @property
    def engine(self) -> str:
        return self._config.speech.engine

    @property
    def qt_engine(self) -> Optional[str]:
        return self._config.speech.qt_engine

    @property
    def preferred_voices(self) -> tuple[str, ...]:
        return self._config.speech.preferred_voices

    @property
    def cancel_delay_ms(self) -> int:
        return self._config.speech.cancel_delay_ms

    @property
    def strip_translation(self) -> bool:
        return self._config.speech.strip_translation

    @property
    def utterance_params(self) -> UtteranceParams:
        """Utterance settings derived from the speech section."""
        speech = self._config.speech
        return UtteranceParams(
            locale=speech.locale,
            rate=speech.rate,
            pitch=speech.pitch,
            volume=speech.volume,
        )

    # General configuration
    @property
    def debug(self) -> bool:
        return self._config.debug

    @property
    def log_level(self) -> str:
        """Effective log level; debug mode forces DEBUG."""
        return "DEBUG" if self._config.debug else self._config.log_level

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for logging.

        Returns:
            Dictionary representation of current configuration
        """
        return {
            "dataset": {
                "location": self.dataset_location,
                "schema": self._config.dataset.schema,
            },
            "speech": {
                "engine": self.engine,
                "qt_engine": self.qt_engine,
                "locale": self._config.speech.locale,
                "rate": self._config.speech.rate,
                "cancel_delay_ms": self.cancel_delay_ms,
                "strip_translation": self.strip_translation,
            },
            "debug": self.debug,
            "log_level": self.log_level,
        }


class ConfigurationServiceFactory:
    """Factory for creating ConfigurationService instances."""

    @staticmethod
    def create_from_args(args: list[str]) -> tuple[ConfigurationService, list[str]]:
        """Create configuration service from command-line arguments.

        Args:
            args: Command-line arguments

        Returns:
            Tuple of (ConfigurationService, unknown_args)
        """
        loader = ConfigLoader()
        config, unknown_args = loader.load(args)
        return ConfigurationService(config), unknown_args
