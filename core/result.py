"""Success/failure values returned by loads and use cases instead of raising."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar('T')
E = TypeVar('E', bound=Exception)


@dataclass(frozen=True)
class Success(Generic[T]):
    """Outcome carrying the produced value."""
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure(Generic[E]):
    """Outcome carrying the exception that stopped the operation.

    Callers inspect ``error`` to render a remediation hint; ``unwrap`` re-raises it.
    """
    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self):
        raise self.error


Result = Union[Success[T], Failure[E]]
