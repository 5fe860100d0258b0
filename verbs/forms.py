"""Derivation of the displayable (and speakable) forms of a verb.

All functions here are pure: they read a ``VerbRecord`` and return new tuples.
Tense order comes from the enumerations below, never from the dataset, since a
JSON object carries no ordering guarantee for its keys.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Sequence, Tuple

from core.exceptions import MissingConjugationsError, MissingTenseError
from verbs.models import ADDRESSEES, ConjugationSet, ConjugationVerb, ExampleVerb, Mood, VerbRecord

TenseSpec = Tuple[str, str]  # (dataset key, display label)

INDICATIVE_TENSES: Tuple[TenseSpec, ...] = (
    ("presente", "Presente"),
    ("pretérito_perfeito", "Pretérito perfeito"),
    ("pretérito_imperfeito", "Pretérito imperfeito"),
    ("futuro", "Futuro"),
    ("condicional", "Condicional"),
)

SUBJUNCTIVE_TENSES: Tuple[TenseSpec, ...] = (
    ("presente", "Presente"),
    ("imperfeito", "Imperfeito"),
    ("futuro", "Futuro"),
)

# eu, tu, ele/ela, nós, vós, eles/elas
PERSONAL_INFINITIVE_SUFFIXES: Tuple[str, ...] = ("", "es", "", "mos", "des", "em")


@dataclass(frozen=True)
class TenseRow:
    key: str
    label: str
    forms: Tuple[str, ...]


@dataclass(frozen=True)
class ImperativeTable:
    """Affirmative and negative imperative, each as (addressee, form) pairs."""
    afirmativo: Tuple[Tuple[str, str], ...]
    negativo: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class VerbForms:
    """Every derived view of one verb, as shown when its card is expanded."""
    persons: Tuple[str, ...]
    indicativo: Tuple[TenseRow, ...]
    subjuntivo: Tuple[TenseRow, ...]
    imperativo: ImperativeTable
    non_finite: Tuple[Tuple[str, str], ...]
    personal_infinitive: Tuple[str, ...]


class FormDeriver:
    """Expands verb records into ordered tables of forms.

    Args:
        indicative_tenses: Ordered (key, label) pairs for the indicative table
        subjunctive_tenses: Ordered (key, label) pairs for the subjunctive table
    """

    def __init__(
        self,
        indicative_tenses: Sequence[TenseSpec] = INDICATIVE_TENSES,
        subjunctive_tenses: Sequence[TenseSpec] = SUBJUNCTIVE_TENSES,
    ) -> None:
        self._tenses: Dict[Mood, Tuple[TenseSpec, ...]] = {
            Mood.INDICATIVO: tuple(indicative_tenses),
            Mood.SUBJUNTIVO: tuple(subjunctive_tenses),
        }

    def tense_specs(self, mood: Mood) -> Tuple[TenseSpec, ...]:
        return self._tenses[Mood(mood)]

    def derive_table(self, verb: VerbRecord, mood: Mood) -> Tuple[TenseRow, ...]:
        """Build the person x tense table of ``mood``.

        Raises:
            MissingTenseError: If a tense of the enumeration is absent
            MissingConjugationsError: If the record has no conjugation tables
        """
        mood = Mood(mood)
        tenses = _conjugations(verb).tenses(mood)
        rows = []
        for key, label in self._tenses[mood]:
            if key not in tenses:
                raise MissingTenseError(verb.verb, mood.value, key)
            rows.append(TenseRow(key=key, label=label, forms=tuple(tenses[key])))
        return tuple(rows)

    def derive_imperative(self, verb: VerbRecord) -> ImperativeTable:
        imperativo = _conjugations(verb).imperativo
        polarities = {}
        for polarity in ("afirmativo", "negativo"):
            forms = imperativo.get(polarity)
            if forms is None:
                raise MissingTenseError(verb.verb, "imperativo", polarity)
            pairs = []
            for addressee in ADDRESSEES:
                if addressee not in forms:
                    raise MissingTenseError(verb.verb, "imperativo", f"{polarity}.{addressee}")
                pairs.append((addressee, forms[addressee]))
            polarities[polarity] = tuple(pairs)
        return ImperativeTable(**polarities)

    def derive_non_finite(self, verb: VerbRecord) -> Tuple[Tuple[str, str], ...]:
        return tuple(_conjugations(verb).non_finite.items())

    def derive_personal_infinitive(self, verb: VerbRecord) -> Tuple[str, ...]:
        """Inflect the infinitive for person: falar -> falar, falares, falar, ..."""
        base = _conjugations(verb).non_finite.get("infinitivo")
        if base is None:
            raise MissingTenseError(verb.verb, "non_finite", "infinitivo")
        return tuple(base + suffix for suffix in PERSONAL_INFINITIVE_SUFFIXES)

    def derive_all(self, verb: VerbRecord) -> VerbForms:
        return VerbForms(
            persons=_conjugations(verb).persons,
            indicativo=self.derive_table(verb, Mood.INDICATIVO),
            subjuntivo=self.derive_table(verb, Mood.SUBJUNTIVO),
            imperativo=self.derive_imperative(verb),
            non_finite=self.derive_non_finite(verb),
            personal_infinitive=self.derive_personal_infinitive(verb),
        )

    @staticmethod
    def derive_examples(verb: VerbRecord) -> Tuple[str, ...]:
        if isinstance(verb, ExampleVerb):
            return verb.examples
        return ()


def _conjugations(verb: VerbRecord) -> ConjugationSet:
    if not isinstance(verb, ConjugationVerb) or verb.conjugations is None:
        raise MissingConjugationsError(f"Verb '{verb.verb}' carries no conjugation tables")
    return verb.conjugations


__all__ = [
    "FormDeriver",
    "TenseRow",
    "ImperativeTable",
    "VerbForms",
    "INDICATIVE_TENSES",
    "SUBJUNCTIVE_TENSES",
    "PERSONAL_INFINITIVE_SUFFIXES",
]
