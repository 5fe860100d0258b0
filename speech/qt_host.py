"""Speech host backed by Qt's text-to-speech module.

Requires a running Qt application object (QCoreApplication or subclass) so that
engine state notifications and timers are delivered.
"""
from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from loguru import logger
from PyQt6.QtCore import QLocale, QObject, QTimer
from PyQt6.QtTextToSpeech import QTextToSpeech

from speech.host import Utterance, Voice, VoicesListener


def to_qt_scale(value: float) -> float:
    """Map a 1.0-centred rate/pitch to Qt's -1.0..1.0 range (0.0 is normal)."""
    return max(-1.0, min(1.0, value - 1.0))


def to_qt_locale_name(tag: str) -> str:
    """pt-PT -> pt_PT, the form QLocale expects."""
    return tag.replace("-", "_")


class QtSpeechHost(QObject):
    """SpeechHost implementation over ``QTextToSpeech``.

    Qt has no voice-list-changed signal; engines that initialize asynchronously
    report readiness through ``stateChanged`` instead. The host therefore
    re-reads the voice list whenever the engine becomes ready and notifies
    listeners only when that list actually changed.

    Args:
        engine: Qt TTS plugin name (speechd, flite, sapi, darwin, ...), or None for
            the platform default
        parent: Optional Qt parent object
    """

    def __init__(self, engine: Optional[str] = None, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._tts = QTextToSpeech(engine, self) if engine else QTextToSpeech(self)
        self._listeners: List[VoicesListener] = []
        self._on_done: Optional[Callable[[], None]] = None
        self._started = False
        self._voice_signature: Tuple[Tuple[str, str], ...] = ()

        self._tts.stateChanged.connect(self._on_state_changed)
        logger.info(f"Qt speech engine ready: {engine or 'default'} (state={self._tts.state().name})")

    # ---- SpeechHost protocol ----

    def is_available(self) -> bool:
        return self._tts.state() != QTextToSpeech.State.Error

    def voices(self) -> List[Voice]:
        """Collect voices across every locale the engine supports.

        ``availableVoices`` only covers the current locale, so each locale is
        visited in turn and the original locale is restored afterwards.
        """
        original = self._tts.locale()
        collected: List[Voice] = []
        seen = set()
        try:
            for locale in self._tts.availableLocales():
                self._tts.setLocale(locale)
                for qvoice in self._tts.availableVoices():
                    voice = Voice(name=qvoice.name(), lang=qvoice.locale().bcp47Name(), ref=qvoice)
                    if (voice.name, voice.lang) not in seen:
                        seen.add((voice.name, voice.lang))
                        collected.append(voice)
        finally:
            self._tts.setLocale(original)
        return collected

    def add_voices_listener(self, listener: VoicesListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_voices_listener(self, listener: VoicesListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def speak(self, utterance: Utterance, on_done: Callable[[], None]) -> None:
        self._tts.setLocale(QLocale(to_qt_locale_name(utterance.locale)))
        # setLocale resets the voice, so bind the voice afterwards
        if utterance.voice is not None and utterance.voice.ref is not None:
            self._tts.setVoice(utterance.voice.ref)
        self._tts.setRate(to_qt_scale(utterance.rate))
        self._tts.setPitch(to_qt_scale(utterance.pitch))
        self._tts.setVolume(max(0.0, min(1.0, utterance.volume)))

        self._on_done = on_done
        self._started = False
        self._tts.say(utterance.text)

    def cancel(self) -> None:
        self._on_done = None
        self._started = False
        if self._tts.state() in (QTextToSpeech.State.Speaking, QTextToSpeech.State.Paused):
            self._tts.stop()

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(max(0, int(delay_ms)), callback)

    # ---- Qt signal handlers ----

    def _on_state_changed(self, state: QTextToSpeech.State) -> None:
        if state == QTextToSpeech.State.Speaking:
            self._started = True
            return

        if state == QTextToSpeech.State.Error:
            logger.warning(f"Qt speech engine error: {self._tts.errorString()}")
            self._complete()
            return

        if state == QTextToSpeech.State.Ready:
            if self._started:
                self._complete()
            self._refresh_voices()

    def _complete(self) -> None:
        on_done, self._on_done = self._on_done, None
        self._started = False
        if on_done is not None:
            on_done()

    def _refresh_voices(self) -> None:
        if not self._listeners:
            return
        voices = self.voices()
        signature = tuple((v.name, v.lang) for v in voices)
        if signature == self._voice_signature:
            return
        self._voice_signature = signature
        logger.debug(f"[voice] host reports {len(voices)} voices")
        for listener in list(self._listeners):
            listener(voices)


__all__ = ["QtSpeechHost", "to_qt_scale", "to_qt_locale_name"]
