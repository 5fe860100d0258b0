"""
Verb data package for the EP verb console.

Main Components:
    ConjugationRepository: Loads and validates the JSON dataset, exposes lookup
    FormDeriver: Expands a record into indicative/subjunctive tables, imperative,
        non-finite forms and the personal infinitive
    QueryEngine: Category filter and free-text search over records
"""
from __future__ import annotations

from .models import (
    ConjugationSet,
    ConjugationVerb,
    ExampleVerb,
    Mood,
    SchemaKind,
    VerbRecord,
)
from .repository import ConjugationRepository
from .forms import FormDeriver, ImperativeTable, TenseRow, VerbForms
from .query import CategoryFilter, QueryEngine

__all__ = [
    "ConjugationSet",
    "ConjugationVerb",
    "ExampleVerb",
    "Mood",
    "SchemaKind",
    "VerbRecord",
    "ConjugationRepository",
    "FormDeriver",
    "ImperativeTable",
    "TenseRow",
    "VerbForms",
    "CategoryFilter",
    "QueryEngine",
]
