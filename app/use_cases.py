"""Use cases for the verb console.

Implements the use case layer: each class wraps one user-facing operation,
delegates to the verb and speech packages, and reports the outcome as a
``Result`` so the presentation layer never has to catch domain exceptions.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Hashable, Optional, Sequence, Tuple

from loguru import logger

from app.browse_state import BrowseState
from core.exceptions import FormDerivationError, LoadError
from core.result import Failure, Result, Success
from speech.dispatcher import SpeechDispatcher
from verbs.forms import FormDeriver, VerbForms
from verbs.models import VerbRecord
from verbs.query import QueryEngine
from verbs.repository import ConjugationRepository


@dataclass(frozen=True)
class BrowseResult:
    """Rows visible for a browse state.

    Attributes:
        rows: Records passing the filter and search, in dataset order
        total: Size of the whole dataset
        status: Status line for the header
    """
    rows: Tuple[VerbRecord, ...]
    total: int
    status: str


class LoadDatasetUseCase:
    """Use case for the single dataset load at startup."""

    def __init__(self, repository: ConjugationRepository):
        self.repository = repository

    def execute(self) -> Result[Tuple[VerbRecord, ...], LoadError]:
        result = self.repository.load()
        if result.is_failure():
            logger.error(f"Dataset unavailable: {result.error} (hint: {result.error.hint})")
        return result


class BrowseVerbsUseCase:
    """Use case for recomputing the visible rows after any filter/search change."""

    def __init__(self, query_engine: QueryEngine):
        self.query_engine = query_engine

    def execute(self, records: Sequence[VerbRecord], state: BrowseState) -> BrowseResult:
        rows = self.query_engine.run(records, state.filter, state.search)
        return BrowseResult(rows=rows, total=len(records), status=state.status_line(len(rows), len(records)))


class ExpandVerbUseCase:
    """Use case for deriving every table shown in an expanded verb card."""

    def __init__(self, deriver: FormDeriver):
        self.deriver = deriver

    def execute(self, record: VerbRecord) -> Result[VerbForms, FormDerivationError]:
        """Derive all forms of ``record``.

        Returns:
            Success with VerbForms, or Failure with the derivation error so the
            caller can abort rendering instead of showing blank cells
        """
        try:
            return Success(self.deriver.derive_all(record))
        except FormDerivationError as e:
            logger.error(f"Cannot render verb '{record.verb}': {e}")
            return Failure(e)


class SpeakFormUseCase:
    """Use case for pronouncing a form the user clicked."""

    def __init__(self, dispatcher: SpeechDispatcher):
        self.dispatcher = dispatcher

    def execute(self, text: str, control_id: Optional[Hashable] = None) -> bool:
        started = self.dispatcher.speak(text, control_id)
        if started:
            logger.info(f"[speak] '{text}'")
        return started
