"""Test builders: synthetic dataset records and a scriptable speech host."""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from speech.host import Utterance, Voice
from verbs.models import ConjugationVerb

SAMPLE_DATASET = Path(__file__).resolve().parent.parent / "verbs" / "data" / "conjugations.json"

PERSONS = ["eu", "tu", "ele/ela", "nós", "vós", "eles/elas"]
ADDRESSEES = ["tu", "você", "nós", "vós", "vocês"]


def make_verb_dict(
    verb: str,
    rank: int,
    category: str = "ar",
    irregular: bool = False,
    translation: str = "",
) -> dict:
    """Build a complete conjugation-schema record with placeholder forms."""
    def row(key: str) -> List[str]:
        return [f"{verb}:{key}:{i}" for i in range(6)]

    return {
        "rank": rank,
        "verb": verb,
        "translation": translation,
        "category": category,
        "irregular": irregular,
        "conjugations": {
            "persons": list(PERSONS),
            "indicativo": {
                key: row(key)
                for key in ("presente", "pretérito_perfeito", "pretérito_imperfeito", "futuro", "condicional")
            },
            "subjuntivo": {key: row(f"sj_{key}") for key in ("presente", "imperfeito", "futuro")},
            "imperativo": {
                "afirmativo": {a: f"{verb}!{a}" for a in ADDRESSEES},
                "negativo": {a: f"não {verb}!{a}" for a in ADDRESSEES},
            },
            "non_finite": {"infinitivo": verb, "gerúndio": f"{verb}ndo", "particípio": f"{verb}do"},
        },
    }


def make_record(
    verb: str,
    rank: int,
    category: str = "ar",
    irregular: bool = False,
    translation: str = "",
) -> ConjugationVerb:
    """Build a record with only the common fields (enough for querying)."""
    return ConjugationVerb(
        rank=rank,
        verb=verb,
        translation=translation,
        category=category,
        irregular=irregular,
    )


class FakeSpeechHost:
    """In-memory SpeechHost: records calls and lets tests drive the event loop."""

    def __init__(self, voices: Optional[List[Voice]] = None, available: bool = True):
        self._voices = list(voices or [])
        self.available = available
        self.listeners = []
        self.calls: List[str] = []
        self.spoken: List[tuple] = []
        self.scheduled: List[tuple] = []

    def is_available(self) -> bool:
        return self.available

    def voices(self) -> List[Voice]:
        return list(self._voices)

    def add_voices_listener(self, listener) -> None:
        self.listeners.append(listener)

    def remove_voices_listener(self, listener) -> None:
        self.listeners.remove(listener)

    def speak(self, utterance: Utterance, on_done) -> None:
        self.calls.append("speak")
        self.spoken.append((utterance, on_done))

    def cancel(self) -> None:
        self.calls.append("cancel")

    def schedule(self, delay_ms: int, callback) -> None:
        self.calls.append("schedule")
        self.scheduled.append((delay_ms, callback))

    # ---- test helpers ----

    def set_voices(self, voices: List[Voice]) -> None:
        self._voices = list(voices)
        for listener in list(self.listeners):
            listener(self.voices())

    def run_scheduled(self) -> None:
        pending, self.scheduled = self.scheduled, []
        for _, callback in pending:
            callback()

    def finish(self, index: int = -1) -> None:
        self.spoken[index][1]()

    @property
    def spoken_texts(self) -> List[str]:
        return [utterance.text for utterance, _ in self.spoken]


GOOGLE_PT = Voice(name="Google português de Portugal", lang="pt-PT")
MARIA_PT = Voice(name="Microsoft Maria Online (Natural) - Portuguese (Portugal)", lang="pt-PT")
JOANA_PT = Voice(name="Joana", lang="pt_PT")
LUCIANA_BR = Voice(name="Luciana", lang="pt-BR")
SAMANTHA_US = Voice(name="Samantha", lang="en-US")
THOMAS_FR = Voice(name="Thomas", lang="fr-FR")
