"""Pronunciation dispatch: turns a text fragment into exactly one utterance.

Ordering guarantee: at most one utterance is ever in flight, and the last call
to ``speak`` wins. Each call cancels whatever is playing, waits a short delay on
the host event loop (some synthesizers silently drop the voice binding of an
utterance issued right after a cancel), then issues the new utterance.

Presentation code observes progress through three optional callbacks, in the
same style as the application's other event handlers:

- ``on_speaking_started(control_id)``: fired synchronously inside ``speak``
- ``on_speaking_ended(control_id)``: fired when the host reports completion of
  the current utterance
- ``on_speaking_interrupted(control_id)``: fired for a control whose utterance is
  superseded, before the next ``started`` signal
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Hashable, Optional

from loguru import logger

from core.error_handler import handle_exceptions
from speech.host import SpeechHost, Utterance
from speech.voice_selector import VoiceSelector, match_locale

DEFAULT_CANCEL_DELAY_MS = 50

# En dash, em dash, or a hyphen with whitespace on both sides ("fala - speaks").
# A bare hyphen is kept: it joins clitics to verbs (lembrar-se, dá-me).
_TRANSLATION_SEPARATOR = re.compile(r"[–—]|\s-\s")


def strip_translation(text: str) -> str:
    """Keep only the part of ``text`` before the first dash separator."""
    return _TRANSLATION_SEPARATOR.split(text, maxsplit=1)[0].strip()


@dataclass(frozen=True)
class UtteranceParams:
    """Fixed utterance settings (rate and pitch on a 1.0-centred scale)."""
    locale: str = "pt-PT"
    rate: float = 0.98
    pitch: float = 1.0
    volume: float = 1.0


@dataclass(frozen=True)
class _InFlight:
    token: int
    text: str
    control_id: Optional[Hashable]


class SpeechDispatcher:
    """Speaks text through a host, one utterance at a time.

    Args:
        host: Platform speech host, or None when speech is unavailable
        selector: Voice selector whose current voice is bound to utterances
        params: Locale, rate, pitch and volume of every utterance
        cancel_delay_ms: Delay between cancelling and issuing the next utterance
        strip_translation: Speak only the segment before a dash separator
    """

    def __init__(
        self,
        host: Optional[SpeechHost],
        selector: VoiceSelector,
        params: UtteranceParams = UtteranceParams(),
        cancel_delay_ms: int = DEFAULT_CANCEL_DELAY_MS,
        strip_translation: bool = False,
    ) -> None:
        self.host = host
        self.selector = selector
        self.params = params
        self.cancel_delay_ms = cancel_delay_ms
        self.strip_translation = strip_translation

        self._token = 0
        self._active: Optional[_InFlight] = None

        # UI callback functions (Observer pattern)
        self.on_speaking_started: Optional[Callable[[Hashable], None]] = None
        self.on_speaking_ended: Optional[Callable[[Hashable], None]] = None
        self.on_speaking_interrupted: Optional[Callable[[Hashable], None]] = None

    @property
    def is_available(self) -> bool:
        return self.host is not None and self.host.is_available()

    @property
    def in_flight(self) -> bool:
        return self._active is not None

    @property
    def active_control(self) -> Optional[Hashable]:
        return self._active.control_id if self._active else None

    def speak(self, text: str, target_control_id: Optional[Hashable] = None) -> bool:
        """Cancel the current utterance and speak ``text``.

        An empty text (after normalization) only cancels.

        Args:
            text: Form or sentence to pronounce
            target_control_id: Identifier of the control that triggered the call

        Returns:
            True if a new utterance was scheduled, False otherwise
        """
        if not self.is_available:
            logger.debug("[speech] speech unavailable on this host; ignoring speak request")
            return False

        spoken = strip_translation(text) if self.strip_translation else (text or "").strip()

        self._token += 1
        token = self._token
        previous, self._active = self._active, None
        self.host.cancel()
        if previous is not None:
            logger.debug(f"[speech] cancelled '{previous.text}'")
            self._emit(self.on_speaking_interrupted, previous.control_id)

        if not spoken:
            return False

        self._active = _InFlight(token=token, text=spoken, control_id=target_control_id)
        self._emit(self.on_speaking_started, target_control_id)
        self.host.schedule(self.cancel_delay_ms, lambda: self._issue(token))
        return True

    def _issue(self, token: int) -> None:
        active = self._active
        if active is None or active.token != token:
            # superseded during the delay
            return

        voice = self.selector.current or match_locale(self.host.voices())
        utterance = Utterance(
            text=active.text,
            locale=self.params.locale,
            voice=voice,
            rate=self.params.rate,
            pitch=self.params.pitch,
            volume=self.params.volume,
        )
        logger.debug(f"[speech] speaking '{active.text}' voice={voice.name if voice else 'default'}")
        self.host.speak(utterance, lambda: self._finished(token))

    def _finished(self, token: int) -> None:
        active = self._active
        if active is None or active.token != token:
            return
        self._active = None
        self._emit(self.on_speaking_ended, active.control_id)

    @staticmethod
    @handle_exceptions(message="Speech observer failed")
    def _emit(callback: Optional[Callable[[Hashable], None]], control_id: Optional[Hashable]) -> None:
        if callback is not None and control_id is not None:
            callback(control_id)


__all__ = ["SpeechDispatcher", "UtteranceParams", "strip_translation", "DEFAULT_CANCEL_DELAY_MS"]
