"""Category filtering and free-text search over verb records.

Both operations are stable (relative input order is kept) and side-effect
free, so the presentation layer simply recomputes them whenever the search box
or the active filter changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from loguru import logger

from verbs.models import CATEGORIES, VerbRecord

FILTER_KEYS: Tuple[str, ...] = ("all", *CATEGORIES, "irregular")


@dataclass(frozen=True)
class CategoryFilter:
    """Single-select filter: all records, one paradigm, or irregular verbs only.

    Use the named constructors rather than building instances directly.
    """
    kind: str
    category: Optional[str] = None

    @classmethod
    def all(cls) -> CategoryFilter:
        return cls("all")

    @classmethod
    def by_category(cls, category: str) -> CategoryFilter:
        if category not in CATEGORIES:
            raise ValueError(f"Unknown category: {category!r}")
        return cls("category", category)

    @classmethod
    def irregular_only(cls) -> CategoryFilter:
        return cls("irregular")

    @classmethod
    def parse(cls, key: str) -> CategoryFilter:
        """Build a filter from a UI key (all, ar, er, ir, irregular)."""
        key = (key or "all").strip().lower()
        if key == "all":
            return cls.all()
        if key == "irregular":
            return cls.irregular_only()
        if key in CATEGORIES:
            return cls.by_category(key)
        raise ValueError(f"Unknown filter: {key!r}. Expected one of {', '.join(FILTER_KEYS)}")

    @property
    def key(self) -> str:
        return self.category if self.kind == "category" else self.kind

    @property
    def label(self) -> str:
        return self.key.upper()

    def matches(self, record: VerbRecord) -> bool:
        if self.kind == "category":
            return record.category == self.category
        if self.kind == "irregular":
            return record.irregular
        return True


class QueryEngine:
    """Stateless filter/search over a sequence of verb records."""

    def filter(self, records: Sequence[VerbRecord], predicate: CategoryFilter) -> Tuple[VerbRecord, ...]:
        if predicate.kind == "all":
            return tuple(records)
        return tuple(r for r in records if predicate.matches(r))

    def search(self, records: Sequence[VerbRecord], query: str) -> Tuple[VerbRecord, ...]:
        """Case-insensitive substring match on the verb or its translation."""
        needle = (query or "").strip().lower()
        if not needle:
            return tuple(records)
        return tuple(
            r for r in records
            if needle in r.verb.lower() or needle in (r.translation or "").lower()
        )

    def run(self, records: Sequence[VerbRecord], predicate: CategoryFilter, query: str = "") -> Tuple[VerbRecord, ...]:
        """Apply the category filter, then narrow by the search query."""
        rows = self.search(self.filter(records, predicate), query)
        logger.debug(f"[query] filter={predicate.label} search={query!r} -> {len(rows)}/{len(records)}")
        return rows


__all__ = ["CategoryFilter", "QueryEngine", "FILTER_KEYS"]
