from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from repair_registry.models.enums import RegistryError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a ledger entry point: either a value or an error code.
    Callers must check ``is_ok`` before reading ``value``.
    """

    value: Optional[T] = None
    error: Optional[RegistryError] = None

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: RegistryError) -> "Result[T]":
        return cls(error=error)

    @property
    def is_ok(self) -> bool:
        return self.error is None

    def to_contract(self) -> Dict[str, Any]:
        """Render as the ledger response shape, ``{"value": ...}`` or ``{"error": code}``."""
        if self.is_ok:
            return {"value": self.value}
        return {"error": int(self.error)}
