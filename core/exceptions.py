"""Custom exception hierarchy for the verb console."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class VerbConsoleException(Exception):
    """Base exception for all verb console errors."""
    pass


class ConfigurationError(VerbConsoleException):
    """Raised when configuration is invalid or missing."""
    pass


class LoadErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    SCHEMA_INVALID = "schema_invalid"


class LoadError(VerbConsoleException):
    """Raised when the verb dataset cannot be loaded.

    Fatal for the session: there is no data to serve. Every load error
    carries a short remediation hint meant for the user.

    Attributes:
        kind: Which family of load failure occurred
        hint: Suggested fix shown next to the error message
    """

    kind: LoadErrorKind = LoadErrorKind.NOT_FOUND
    default_hint = "Check the dataset location and reload."

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.hint = hint or self.default_hint


class DatasetNotFoundError(LoadError):
    """Raised when the dataset resource is absent or the transport fails."""

    kind = LoadErrorKind.NOT_FOUND
    default_hint = "Place conjugations.json at the configured dataset path, then reload."


class SchemaInvalidError(LoadError):
    """Raised when the dataset payload does not match the declared schema."""

    kind = LoadErrorKind.SCHEMA_INVALID
    default_hint = "Fix the reported record in the dataset file, then reload."


class FormDerivationError(VerbConsoleException):
    """Raised when forms cannot be derived from a verb record."""
    pass


class MissingTenseError(FormDerivationError):
    """Raised when a required tense (or base form) is absent from a record.

    Attributes:
        verb: Infinitive of the offending record
        mood: Mood being derived (indicativo, subjuntivo, imperativo, non_finite)
        key: Missing tense key
    """

    def __init__(self, verb: str, mood: str, key: str):
        super().__init__(f"Verb '{verb}' has no '{key}' in {mood}")
        self.verb = verb
        self.mood = mood
        self.key = key


class MissingConjugationsError(FormDerivationError):
    """Raised when a conjugation view is requested for an example-only record."""
    pass


class SpeechHostError(VerbConsoleException):
    """Raised when a speech host cannot be created."""
    pass
