"""Speech package: voice selection and pronunciation dispatch.

The core pieces (``VoiceSelector``, ``SpeechDispatcher``) only talk to the
``SpeechHost`` protocol, so they import without any GUI toolkit. The Qt-backed
host is loaded lazily on first access to keep pytest collection free of Qt.
"""
from .host import SpeechHost, Utterance, Voice
from .voice_selector import VoiceSelector, VoiceState, VoiceSubscription
from .dispatcher import SpeechDispatcher, UtteranceParams, strip_translation

__all__ = [
    "SpeechHost",
    "Utterance",
    "Voice",
    "VoiceSelector",
    "VoiceState",
    "VoiceSubscription",
    "SpeechDispatcher",
    "UtteranceParams",
    "strip_translation",
]


def __getattr__(name: str):
    """Import the Qt host on first access."""
    if name == "QtSpeechHost":
        from .qt_host import QtSpeechHost
        return QtSpeechHost
    raise AttributeError(f"module 'speech' has no attribute {name!r}")
