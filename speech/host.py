"""Contract between the speech core and the platform speech synthesizer.

The host is a black box that can enumerate voices (with change notifications),
speak one utterance with a completion callback, cancel the current utterance
and schedule a callback on its own event loop.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Protocol

VoicesListener = Callable[[List["Voice"]], None]


@dataclass(frozen=True)
class Voice:
    """A synthesizer voice as reported by the host.

    Attributes:
        name: Human-readable voice name, e.g. "Google português de Portugal"
        lang: Locale tag, e.g. "pt-PT"
        ref: Host-native voice handle, passed back to the host unchanged
    """
    name: str
    lang: str
    ref: Any = field(default=None, compare=False, repr=False)

    @property
    def normalized_lang(self) -> str:
        """Lower-case locale tag with ``-`` separators (pt_PT -> pt-pt)."""
        return (self.lang or "").replace("_", "-").lower()


@dataclass(frozen=True)
class Utterance:
    """One unit of speech handed to the host.

    Rate and pitch use a 1.0-centred scale (1.0 is the platform's normal);
    hosts with a different scale convert on their side.
    """
    text: str
    locale: str = "pt-PT"
    voice: Optional[Voice] = None
    rate: float = 0.98
    pitch: float = 1.0
    volume: float = 1.0


class SpeechHost(Protocol):
    """Platform speech capability consumed by the voice selector and dispatcher."""

    def is_available(self) -> bool:
        """Return False when speech cannot be produced on this host."""
        ...

    def voices(self) -> List[Voice]:
        """Synchronous snapshot of the voices currently known to the host."""
        ...

    def add_voices_listener(self, listener: VoicesListener) -> None:
        """Call ``listener`` with the new list whenever the voice list changes."""
        ...

    def remove_voices_listener(self, listener: VoicesListener) -> None:
        ...

    def speak(self, utterance: Utterance, on_done: Callable[[], None]) -> None:
        """Start speaking; ``on_done`` runs once playback of this utterance ends."""
        ...

    def cancel(self) -> None:
        """Stop the current utterance, if any. Its ``on_done`` must not run."""
        ...

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Run ``callback`` on the host event loop after ``delay_ms``."""
        ...


__all__ = ["Voice", "Utterance", "SpeechHost", "VoicesListener"]
