"""
Result -- success-or-error wrapper returned by every operation.

Contract:
    An operation either succeeds with a value or fails with exactly one
    error code.  A failed operation has mutated nothing.

Guarantees:
    - Immutable (frozen dataclass).
    - ``bool(result) == result.success``.
    - ``error`` is always a ``CaseErrorCode`` or ``RegistryErrorCode``
      member when ``success`` is False, and None otherwise.

Non-goals:
    - Does NOT raise on failure.  ``unwrap()`` is the opt-in bridge to the
      typed exception hierarchy for host-side callers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from tracebit_kernel.domain.error_codes import CaseErrorCode, RegistryErrorCode

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a single guarded operation."""

    success: bool
    value: T | None = None
    error: CaseErrorCode | RegistryErrorCode | None = None

    @classmethod
    def ok(cls, value: T) -> Result[T]:
        """Successful outcome carrying ``value``."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: CaseErrorCode | RegistryErrorCode) -> Result[T]:
        """Failed outcome carrying a stable error code."""
        if not isinstance(error, (CaseErrorCode, RegistryErrorCode)):
            raise TypeError(f"Unknown error code: {error!r}")
        return cls(success=False, error=error)

    @property
    def is_ok(self) -> bool:
        return self.success

    def unwrap(self, **context: Any) -> T:
        """Return the value, or raise the typed exception for the error code."""
        if self.success:
            return self.value  # type: ignore[return-value]
        # Local import: exceptions depends on domain.error_codes.
        from tracebit_kernel.exceptions import exception_for

        raise exception_for(self.error, **context)

    def __bool__(self) -> bool:
        return self.success
