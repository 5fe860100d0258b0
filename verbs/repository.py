"""Loading and validation of the verb dataset.

The dataset is a single JSON document fetched once per session, either from the
local filesystem or over HTTP. It is validated against one declared schema and
then held as read-only state. No retry is attempted: a failed load is reported
to the caller as a ``LoadError`` inside a ``Failure``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

import requests
from loguru import logger

from core.error_handler import log_execution_time
from core.exceptions import DatasetNotFoundError, LoadError, SchemaInvalidError
from core.result import Failure, Result, Success
from verbs.models import (
    ADDRESSEES,
    CATEGORIES,
    ConjugationSet,
    ConjugationVerb,
    ExampleVerb,
    SchemaKind,
    VerbRecord,
    freeze_mapping,
)

DEFAULT_TIMEOUT_S = 10.0
# Sample dataset shipped inside the package
BUNDLED_DATASET = Path(__file__).resolve().parent / "data" / "conjugations.json"


class ConjugationRepository:
    """Read-only store of verb records loaded from a JSON document.

    Example:
        repository = ConjugationRepository(BUNDLED_DATASET)
        result = repository.load()
        if result.is_success():
            falar = repository.get("falar")

    Attributes:
        location: Filesystem path or http(s) URL of the dataset
        schema: Declared schema, or None to accept whatever the document declares
            (bare arrays then default to the conjugation schema)
        timeout: HTTP timeout in seconds
    """

    def __init__(
        self,
        location: Union[str, Path],
        schema: Optional[SchemaKind] = None,
        timeout: float = DEFAULT_TIMEOUT_S,
    ) -> None:
        self.location = str(location)
        self.schema = SchemaKind(schema) if schema is not None else None
        self.timeout = timeout
        self._records: Tuple[VerbRecord, ...] = ()
        self._by_verb: Mapping[str, VerbRecord] = freeze_mapping({})
        self._by_rank: Mapping[int, VerbRecord] = freeze_mapping({})
        self._loaded_schema: Optional[SchemaKind] = None

    # ---- Public API ----

    @log_execution_time()
    def load(self) -> Result[Tuple[VerbRecord, ...], LoadError]:
        """Fetch, parse and validate the dataset.

        Returns:
            Success with the records in source order, or Failure with a
            DatasetNotFoundError / SchemaInvalidError.
        """
        try:
            raw = self._fetch()
            payload = self._parse(raw)
            schema, items = self._unwrap(payload)
            records = self._build_records(schema, items)
        except LoadError as e:
            logger.error(f"Failed to load dataset from {self.location}: {e}")
            return Failure(e)

        self._records = records
        self._by_verb = freeze_mapping({r.verb: r for r in records})
        self._by_rank = freeze_mapping({r.rank: r for r in records})
        self._loaded_schema = schema
        logger.info(f"Loaded {len(records)} verbs ({schema.value} schema) from {self.location}")
        return Success(records)

    @property
    def records(self) -> Tuple[VerbRecord, ...]:
        return self._records

    @property
    def loaded_schema(self) -> Optional[SchemaKind]:
        """Schema of the last successful load, None before any."""
        return self._loaded_schema

    def get(self, verb: str) -> Optional[VerbRecord]:
        return self._by_verb.get(verb)

    def by_rank(self, rank: int) -> Optional[VerbRecord]:
        return self._by_rank.get(rank)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[VerbRecord]:
        return iter(self._records)

    # ---- Fetching ----

    def _is_remote(self) -> bool:
        return self.location.lower().startswith(("http://", "https://"))

    def _fetch(self) -> str:
        if self._is_remote():
            return self._fetch_remote()
        return self._fetch_local()

    def _fetch_local(self) -> str:
        path = Path(self.location)
        if not path.is_file():
            raise DatasetNotFoundError(f"Dataset file not found: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise DatasetNotFoundError(f"Dataset file unreadable: {path} ({e})") from e

    def _fetch_remote(self) -> str:
        try:
            response = requests.get(self.location, timeout=self.timeout)
        except requests.RequestException as e:
            raise DatasetNotFoundError(f"Dataset request failed: {e}") from e
        if not response.ok:
            raise DatasetNotFoundError(
                f"Dataset request returned HTTP {response.status_code}",
                hint=f"Publish the dataset at {self.location}, then reload.",
            )
        return response.text

    # ---- Parsing and validation ----

    @staticmethod
    def _parse(raw: str) -> Any:
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise SchemaInvalidError(f"Dataset is not valid JSON: {e}") from e

    def _unwrap(self, payload: Any) -> Tuple[SchemaKind, List[Any]]:
        """Resolve the schema and the record list of a parsed document.

        A bare array uses the configured schema. An object must carry a
        ``schema`` discriminator and a ``verbs`` array.
        """
        if isinstance(payload, list):
            return self.schema or SchemaKind.CONJUGATIONS, payload

        if isinstance(payload, dict) and "verbs" in payload:
            declared = payload.get("schema")
            try:
                schema = SchemaKind(declared)
            except ValueError:
                raise SchemaInvalidError(f"Unknown dataset schema: {declared!r}") from None
            if self.schema is not None and schema is not self.schema:
                raise SchemaInvalidError(
                    f"Dataset declares schema '{schema.value}' but '{self.schema.value}' is configured"
                )
            verbs = payload["verbs"]
            if not isinstance(verbs, list):
                raise SchemaInvalidError("Dataset 'verbs' must be an array of records")
            return schema, verbs

        raise SchemaInvalidError("Dataset must be an array of verb records")

    def _build_records(self, schema: SchemaKind, items: List[Any]) -> Tuple[VerbRecord, ...]:
        records: List[VerbRecord] = []
        seen_ranks: Dict[int, int] = {}
        seen_verbs: Dict[str, int] = {}

        for index, item in enumerate(items):
            record = self._build_record(schema, index, item)
            if record.rank in seen_ranks:
                raise SchemaInvalidError(
                    f"Record {index}: rank {record.rank} already used by record {seen_ranks[record.rank]}"
                )
            if record.verb in seen_verbs:
                raise SchemaInvalidError(
                    f"Record {index}: verb '{record.verb}' already used by record {seen_verbs[record.verb]}"
                )
            seen_ranks[record.rank] = index
            seen_verbs[record.verb] = index
            records.append(record)

        return tuple(records)

    def _build_record(self, schema: SchemaKind, index: int, item: Any) -> VerbRecord:
        if not isinstance(item, dict):
            raise SchemaInvalidError(f"Record {index}: expected an object, got {type(item).__name__}")

        verb = item.get("verb")
        if not isinstance(verb, str) or not verb.strip():
            raise SchemaInvalidError(f"Record {index}: missing 'verb'")

        rank = item.get("rank")
        # bool is an int subclass; reject it explicitly
        if isinstance(rank, bool) or not isinstance(rank, int) or rank < 1:
            raise SchemaInvalidError(f"Record {index} ({verb}): missing or invalid 'rank'")

        category = item.get("category")
        if category not in CATEGORIES:
            raise SchemaInvalidError(
                f"Record {index} ({verb}): category must be one of {', '.join(CATEGORIES)}, got {category!r}"
            )

        translation = item.get("translation") or ""
        if not isinstance(translation, str):
            raise SchemaInvalidError(f"Record {index} ({verb}): 'translation' must be a string")

        irregular = item.get("irregular", False)
        if not isinstance(irregular, bool):
            raise SchemaInvalidError(f"Record {index} ({verb}): 'irregular' must be true or false, got {irregular!r}")

        common = dict(
            rank=rank,
            verb=verb,
            translation=translation,
            category=category,
            irregular=irregular,
        )

        if schema is SchemaKind.EXAMPLES:
            return ExampleVerb(**common, examples=_parse_examples(index, verb, item))
        return ConjugationVerb(**common, conjugations=_parse_conjugations(index, verb, item))


def _parse_examples(index: int, verb: str, item: Dict[str, Any]) -> Tuple[str, ...]:
    examples = item.get("examples")
    if not isinstance(examples, list) or not all(isinstance(e, str) for e in examples):
        raise SchemaInvalidError(f"Record {index} ({verb}): 'examples' must be an array of strings")
    return tuple(examples)


def _parse_conjugations(index: int, verb: str, item: Dict[str, Any]) -> ConjugationSet:
    where = f"Record {index} ({verb})"
    data = item.get("conjugations")
    if not isinstance(data, dict):
        raise SchemaInvalidError(f"{where}: missing 'conjugations'")

    persons = data.get("persons")
    if not isinstance(persons, list) or len(persons) != 6 or not all(isinstance(p, str) for p in persons):
        raise SchemaInvalidError(f"{where}: 'persons' must list exactly 6 labels")

    tables = {}
    for mood in ("indicativo", "subjuntivo"):
        tenses = data.get(mood, {})
        if not isinstance(tenses, dict):
            raise SchemaInvalidError(f"{where}: '{mood}' must map tense keys to forms")
        for key, forms in tenses.items():
            if not isinstance(forms, list) or len(forms) != 6 or not all(isinstance(f, str) for f in forms):
                raise SchemaInvalidError(f"{where}: {mood}.{key} must have exactly 6 forms")
        tables[mood] = freeze_mapping({key: tuple(forms) for key, forms in tenses.items()})

    imperativo = data.get("imperativo", {})
    if not isinstance(imperativo, dict):
        raise SchemaInvalidError(f"{where}: 'imperativo' must be an object")
    imperative_tables = {}
    for polarity, forms in imperativo.items():
        if not isinstance(forms, dict) or set(forms) != set(ADDRESSEES):
            raise SchemaInvalidError(
                f"{where}: imperativo.{polarity} must have exactly the keys {', '.join(ADDRESSEES)}"
            )
        if not all(isinstance(form, str) for form in forms.values()):
            raise SchemaInvalidError(f"{where}: imperativo.{polarity} must map addressees to single forms")
        imperative_tables[polarity] = freeze_mapping(forms)

    non_finite = data.get("non_finite", {})
    if not isinstance(non_finite, dict) or not all(isinstance(v, str) for v in non_finite.values()):
        raise SchemaInvalidError(f"{where}: 'non_finite' must map labels to single forms")

    return ConjugationSet(
        persons=tuple(persons),
        indicativo=tables["indicativo"],
        subjuntivo=tables["subjuntivo"],
        imperativo=freeze_mapping(imperative_tables),
        non_finite=freeze_mapping(non_finite),
    )


__all__ = ["BUNDLED_DATASET", "ConjugationRepository", "DEFAULT_TIMEOUT_S"]
