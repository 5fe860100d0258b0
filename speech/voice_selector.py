"""European Portuguese voice selection.

The selector is the single writer of the resolved voice; the dispatcher only
reads it. Hosts may report their voice list late (empty at first, filled in
asynchronously), several times, or never. Each report re-runs the selection
from scratch and overwrites the previous outcome.
"""
from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Sequence

from loguru import logger

from speech.host import SpeechHost, Voice

DEFAULT_PREFERRED_VOICES = (
    "Google português de Portugal",
    "Microsoft Duarte Online (Natural) - Portuguese (Portugal)",
    "Microsoft Maria Online (Natural) - Portuguese (Portugal)",
)


class VoiceState(str, Enum):
    UNRESOLVED = "unresolved"
    RESOLVED = "resolved"


def match_preferred(voices: Sequence[Voice], preferred: Sequence[str]) -> Optional[Voice]:
    """First voice whose exact name appears in ``preferred``, in preference order."""
    by_name = {}
    for voice in voices:
        by_name.setdefault(voice.name, voice)
    for name in preferred:
        if name in by_name:
            return by_name[name]
    return None


def match_locale(voices: Iterable[Voice]) -> Optional[Voice]:
    """First pt-PT voice, else first Portuguese voice of any region."""
    voices = list(voices)
    for prefix in ("pt-pt", "pt"):
        for voice in voices:
            if voice.normalized_lang.startswith(prefix):
                return voice
    return None


class VoiceSubscription:
    """Handle for a selector attached to a host; closing it unsubscribes."""

    def __init__(self, selector: VoiceSelector, host: SpeechHost) -> None:
        self._selector = selector
        self._host = host
        self.closed = False

    def close(self) -> None:
        if self.closed:
            return
        self._host.remove_voices_listener(self._selector.on_voices_changed)
        self.closed = True
        logger.debug("[voice] unsubscribed from voice list changes")

    def __enter__(self) -> VoiceSubscription:
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class VoiceSelector:
    """Resolves the best available European Portuguese voice.

    Resolution order:
        1. Exact name match against ``preferred_names`` (list order wins)
        2. First voice whose locale starts with ``pt-pt``
        3. First voice whose locale starts with ``pt``
        4. Nothing: state falls back to UNRESOLVED and the platform default is used

    Attributes:
        preferred_names: Ordered names of known high-quality pt-PT voices
    """

    def __init__(self, preferred_names: Sequence[str] = DEFAULT_PREFERRED_VOICES) -> None:
        self.preferred_names = tuple(preferred_names)
        self._current: Optional[Voice] = None
        self._resolving = False
        self._pending: Optional[List[Voice]] = None

    @property
    def current(self) -> Optional[Voice]:
        return self._current

    @property
    def state(self) -> VoiceState:
        return VoiceState.RESOLVED if self._current is not None else VoiceState.UNRESOLVED

    def resolve(self, voices: Sequence[Voice]) -> Optional[Voice]:
        """Recompute the selection from ``voices`` and store it."""
        voice = match_preferred(voices, self.preferred_names) or match_locale(voices)
        self._current = voice
        if voice is None:
            logger.debug(f"[voice] no Portuguese voice among {len(voices)} voices; using platform default")
        else:
            logger.debug(f"[voice] selected '{voice.name}' ({voice.lang})")
        return voice

    def on_voices_changed(self, voices: Sequence[Voice]) -> None:
        """Host notification handler.

        A notification arriving while a resolution is running is queued and
        applied right after it, so the latest list always wins.
        """
        if self._resolving:
            self._pending = list(voices)
            return
        self._resolving = True
        try:
            self.resolve(voices)
            while self._pending is not None:
                latest, self._pending = self._pending, None
                self.resolve(latest)
        finally:
            self._resolving = False

    def attach(self, host: SpeechHost) -> VoiceSubscription:
        """Resolve from the host's current snapshot and follow later changes."""
        host.add_voices_listener(self.on_voices_changed)
        self.on_voices_changed(host.voices())
        return VoiceSubscription(self, host)


__all__ = [
    "VoiceSelector",
    "VoiceState",
    "VoiceSubscription",
    "DEFAULT_PREFERRED_VOICES",
    "match_preferred",
    "match_locale",
]
