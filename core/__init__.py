"""Core infrastructure: result type, exception hierarchy and error handling."""
from __future__ import annotations

from .exceptions import (
    VerbConsoleException,
    ConfigurationError,
    LoadError,
    LoadErrorKind,
    DatasetNotFoundError,
    SchemaInvalidError,
    FormDerivationError,
    MissingTenseError,
    MissingConjugationsError,
    SpeechHostError,
)
from .result import Result, Success, Failure

__all__ = [
    "VerbConsoleException",
    "ConfigurationError",
    "LoadError",
    "LoadErrorKind",
    "DatasetNotFoundError",
    "SchemaInvalidError",
    "FormDerivationError",
    "MissingTenseError",
    "MissingConjugationsError",
    "SpeechHostError",
    "Result",
    "Success",
    "Failure",
]
