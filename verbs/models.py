"""Domain model for the verb dataset.

Records are immutable once loaded. Two dataset schemas exist: one carries a
full conjugation table per verb, the other a list of example sentences. Both
share the common ``VerbRecord`` fields and are told apart by ``schema``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import ClassVar, Mapping, Tuple

PERSONS: Tuple[str, ...] = ("eu", "tu", "ele/ela", "nós", "vós", "eles/elas")
ADDRESSEES: Tuple[str, ...] = ("tu", "você", "nós", "vós", "vocês")
CATEGORIES: Tuple[str, ...] = ("ar", "er", "ir")


class SchemaKind(str, Enum):
    """Dataset schema discriminator."""

    CONJUGATIONS = "conjugations"
    EXAMPLES = "examples"


class Mood(str, Enum):
    """Moods rendered as person x tense tables."""

    INDICATIVO = "indicativo"
    SUBJUNTIVO = "subjuntivo"


def freeze_mapping(data: Mapping) -> Mapping:
    """Return a read-only view over a shallow copy of ``data``."""
    return MappingProxyType(dict(data))


@dataclass(frozen=True)
class ConjugationSet:
    """Conjugation tables of one verb.

    Attributes:
        persons: Six person labels, the column order of every tense array
        indicativo: Tense key -> six forms aligned with ``persons``
        subjuntivo: Tense key -> six forms aligned with ``persons``
        imperativo: ``afirmativo``/``negativo`` -> addressee -> form
        non_finite: Label -> form, in dataset order
    """
    persons: Tuple[str, ...]
    indicativo: Mapping[str, Tuple[str, ...]]
    subjuntivo: Mapping[str, Tuple[str, ...]]
    imperativo: Mapping[str, Mapping[str, str]]
    non_finite: Mapping[str, str]

    def tenses(self, mood: Mood) -> Mapping[str, Tuple[str, ...]]:
        return self.indicativo if Mood(mood) is Mood.INDICATIVO else self.subjuntivo


@dataclass(frozen=True)
class VerbRecord:
    """Fields shared by every dataset schema."""

    schema: ClassVar[SchemaKind]

    rank: int
    verb: str
    translation: str
    category: str
    irregular: bool

    @property
    def rank_label(self) -> str:
        """Zero-padded rank identifier, e.g. ``#007``."""
        return f"#{self.rank:03d}"

    @property
    def class_label(self) -> str:
        """Regularity and paradigm tag, e.g. ``IRREG • ER``."""
        regularity = "IRREG" if self.irregular else "REG"
        return f"{regularity} • {self.category.upper()}"


@dataclass(frozen=True)
class ConjugationVerb(VerbRecord):
    schema: ClassVar[SchemaKind] = SchemaKind.CONJUGATIONS

    conjugations: ConjugationSet = None


@dataclass(frozen=True)
class ExampleVerb(VerbRecord):
    schema: ClassVar[SchemaKind] = SchemaKind.EXAMPLES

    examples: Tuple[str, ...] = ()


__all__ = [
    "PERSONS",
    "ADDRESSEES",
    "CATEGORIES",
    "SchemaKind",
    "Mood",
    "ConjugationSet",
    "VerbRecord",
    "ConjugationVerb",
    "ExampleVerb",
    "freeze_mapping",
]
