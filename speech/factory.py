"""Speech host creation by engine name."""
from __future__ import annotations

from typing import Callable, Dict, Optional

from core.exceptions import SpeechHostError
from speech.host import SpeechHost


class SpeechHostRegistry:
    """Maps engine names to host factories.

    The configuration layer validates ``speech.engine`` against
    ``engines()``, so a newly registered host is selectable without
    touching the config code.
    """

    _factories: Dict[str, Callable[..., SpeechHost]] = {}

    @classmethod
    def register(cls, name: str, factory: Callable[..., SpeechHost]) -> None:
        cls._factories[name.strip().lower()] = factory

    @classmethod
    def engines(cls) -> tuple[str, ...]:
        """Registered engine names, in registration order."""
        return tuple(cls._factories)

    @classmethod
    def create(cls, name: str, **kwargs) -> SpeechHost:
        """Build the host registered under ``name``.

        Raises:
            SpeechHostError: If the engine is unknown or its factory fails
        """
        engine = name.strip().lower()
        factory = cls._factories.get(engine)
        if factory is None:
            raise SpeechHostError(
                f"Unknown speech engine: '{name}'. Available engines: {', '.join(cls.engines())}"
            )
        try:
            return factory(**kwargs)
        except Exception as e:
            raise SpeechHostError(f"Failed to create {engine} speech host: {e}") from e


def _make_qt(qt_engine: Optional[str] = None) -> SpeechHost:
    # Qt stays out of the import graph until a host is actually needed
    try:
        from speech.qt_host import QtSpeechHost
    except ImportError as exc:
        raise SpeechHostError(
            "QtSpeechHost not available. Install PyQt6 (with QtTextToSpeech) and retry."
        ) from exc
    return QtSpeechHost(engine=qt_engine)


SpeechHostRegistry.register("qt", _make_qt)


def create_speech_host(engine: str, qt_engine: Optional[str] = None) -> SpeechHost:
    """Create a speech host by engine name.

    Parameters:
        engine: Registered engine name, currently ``qt``.
        qt_engine: Optional Qt TTS plugin (speechd, flite, sapi, darwin, ...).
    """
    return SpeechHostRegistry.create(engine, qt_engine=qt_engine)
