"""Tests for the Qt speech host.

The Qt engine is replaced by a mock so no platform synthesizer or desktop
session is needed; engine state changes are fed to the host directly.
"""
import pytest
from unittest.mock import Mock, patch

pytest.importorskip("PyQt6.QtTextToSpeech")

from PyQt6.QtTextToSpeech import QTextToSpeech  # noqa: E402

from speech.host import Utterance, Voice  # noqa: E402
from speech.qt_host import QtSpeechHost, to_qt_locale_name, to_qt_scale  # noqa: E402

State = QTextToSpeech.State


def _qt_voice(name, lang):
    qvoice = Mock()
    qvoice.name.return_value = name
    qvoice.locale.return_value.bcp47Name.return_value = lang
    return qvoice


@pytest.fixture
def engine():
    """Mocked QTextToSpeech instance that keeps Qt's real State enum."""
    with patch("speech.qt_host.QTextToSpeech") as engine_class:
        engine_class.State = State
        tts = engine_class.return_value
        tts.state.return_value = State.Ready
        tts.availableLocales.return_value = ["pt_PT"]
        tts.availableVoices.return_value = []
        yield tts


@pytest.fixture
def host(engine):
    return QtSpeechHost()


@pytest.mark.parametrize("value,expected", [
    (1.0, 0.0),
    (0.98, pytest.approx(-0.02)),
    (1.5, 0.5),
    (2.5, 1.0),
    (-1.0, -1.0),
])
def test_to_qt_scale(value, expected):
    assert to_qt_scale(value) == expected


def test_to_qt_locale_name():
    assert to_qt_locale_name("pt-PT") == "pt_PT"
    assert to_qt_locale_name("pt_PT") == "pt_PT"


class TestUtteranceSetup:
    """Tests for how an utterance is applied to the engine."""

    def test_voice_is_bound_after_locale(self, host, engine):
        # Arrange
        voice = Voice("Joana", "pt-PT", ref=object())

        # Act
        host.speak(Utterance("falo", voice=voice, rate=1.2, volume=1.7), Mock())

        # Assert
        names = [c[0] for c in engine.method_calls]
        assert names.index("setLocale") < names.index("setVoice") < names.index("say")
        assert engine.setLocale.call_args[0][0].name() == "pt_PT"
        engine.setVoice.assert_called_once_with(voice.ref)
        assert engine.setRate.call_args[0][0] == pytest.approx(0.2)
        engine.setVolume.assert_called_once_with(1.0)
        engine.say.assert_called_once_with("falo")

    def test_unresolved_voice_leaves_engine_voice_alone(self, host, engine):
        host.speak(Utterance("falo"), Mock())

        engine.setVoice.assert_not_called()


class TestCompletion:
    """Tests for the engine-state driven completion callback."""

    def test_done_fires_only_after_speaking_then_ready(self, host):
        # Arrange
        on_done = Mock()
        host.speak(Utterance("falo"), on_done)

        # Act / Assert
        host._on_state_changed(State.Ready)
        on_done.assert_not_called()

        host._on_state_changed(State.Speaking)
        on_done.assert_not_called()

        host._on_state_changed(State.Ready)
        on_done.assert_called_once()

    def test_done_fires_once(self, host):
        on_done = Mock()
        host.speak(Utterance("falo"), on_done)

        host._on_state_changed(State.Speaking)
        host._on_state_changed(State.Ready)
        host._on_state_changed(State.Ready)

        on_done.assert_called_once()

    def test_cancel_suppresses_done_and_stops_engine(self, host, engine):
        # Arrange
        on_done = Mock()
        host.speak(Utterance("falo"), on_done)
        host._on_state_changed(State.Speaking)
        engine.state.return_value = State.Speaking

        # Act
        host.cancel()
        host._on_state_changed(State.Ready)

        # Assert
        engine.stop.assert_called_once()
        on_done.assert_not_called()

    def test_cancel_when_idle_does_not_stop(self, host, engine):
        host.cancel()

        engine.stop.assert_not_called()

    def test_error_state_completes_utterance(self, host, engine):
        # Arrange
        engine.errorString.return_value = "audio device lost"
        on_done = Mock()
        host.speak(Utterance("falo"), on_done)
        host._on_state_changed(State.Speaking)

        # Act
        host._on_state_changed(State.Error)

        # Assert
        on_done.assert_called_once()

    def test_error_before_speaking_still_completes(self, host):
        on_done = Mock()
        host.speak(Utterance("falo"), on_done)

        host._on_state_changed(State.Error)

        on_done.assert_called_once()

    def test_is_available_reflects_error_state(self, host, engine):
        assert host.is_available() is True

        engine.state.return_value = State.Error

        assert host.is_available() is False


class TestVoiceList:
    """Tests for voice enumeration and change notification."""

    def test_voices_across_locales_without_duplicates(self, host, engine):
        # Arrange
        joana = _qt_voice("Joana", "pt-PT")
        engine.availableLocales.return_value = ["pt_PT", "pt_BR"]
        engine.availableVoices.side_effect = [[joana], [joana, _qt_voice("Luciana", "pt-BR")]]

        # Act
        voices = host.voices()

        # Assert
        assert voices == [Voice("Joana", "pt-PT"), Voice("Luciana", "pt-BR")]
        assert voices[0].ref is joana
        assert engine.setLocale.call_args[0][0] is engine.locale.return_value

    def test_listeners_notified_only_when_list_changes(self, host, engine):
        # Arrange
        listener = Mock()
        host.add_voices_listener(listener)
        engine.availableVoices.return_value = [_qt_voice("Joana", "pt-PT")]

        # Act
        host._on_state_changed(State.Ready)
        host._on_state_changed(State.Ready)

        # Assert
        listener.assert_called_once_with([Voice("Joana", "pt-PT")])

        engine.availableVoices.return_value = [_qt_voice("Joana", "pt-PT"), _qt_voice("Catarina", "pt-PT")]
        host._on_state_changed(State.Ready)

        assert listener.call_count == 2
        assert [v.name for v in listener.call_args[0][0]] == ["Joana", "Catarina"]

    def test_removed_listener_is_not_called(self, host, engine):
        listener = Mock()
        host.add_voices_listener(listener)
        host.remove_voices_listener(listener)
        engine.availableVoices.return_value = [_qt_voice("Joana", "pt-PT")]

        host._on_state_changed(State.Ready)

        listener.assert_not_called()


class TestSchedule:
    """Tests for timer scheduling."""

    @patch("speech.qt_host.QTimer")
    def test_negative_delay_clamped_to_zero(self, mock_timer, host):
        callback = Mock()

        host.schedule(-5, callback)

        mock_timer.singleShot.assert_called_once_with(0, callback)
