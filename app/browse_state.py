"""Explicit presentation state of the verb browser.

The core query and derivation functions are pure; whatever the user has typed,
selected or expanded lives here and is passed into them. Instances are
immutable; every interaction returns a new state.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import FrozenSet

from verbs.query import CategoryFilter


@dataclass(frozen=True)
class BrowseState:
    """Search text, active filter and expanded cards.

    Attributes:
        search: Raw text of the search box
        filter: Active category filter
        expanded: Ranks of the verbs whose detail is shown
    """
    search: str = ""
    filter: CategoryFilter = field(default_factory=CategoryFilter.all)
    expanded: FrozenSet[int] = frozenset()

    def with_search(self, text: str) -> BrowseState:
        return replace(self, search=text or "")

    def with_filter(self, key: str) -> BrowseState:
        return replace(self, filter=CategoryFilter.parse(key))

    def toggle(self, rank: int) -> BrowseState:
        """Expand a collapsed card or collapse an expanded one."""
        if rank in self.expanded:
            return replace(self, expanded=self.expanded - {rank})
        return replace(self, expanded=self.expanded | {rank})

    def is_expanded(self, rank: int) -> bool:
        return rank in self.expanded

    def status_line(self, shown: int, total: int) -> str:
        """One-line status summary, e.g. ``ACTIVE FILTER: AR | SEARCH: fal | COUNT: 2/10``."""
        search = self.search.strip() or "—"
        return f"ACTIVE FILTER: {self.filter.label} | SEARCH: {search} | COUNT: {shown}/{total}"
