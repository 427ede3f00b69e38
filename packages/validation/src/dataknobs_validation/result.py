"""Validation result types.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Generic, Iterable, List, TypeVar

from .exceptions import ResultAccessError

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationError:
    """A single field-level failure.

    Created by the engine only; rendered as ``"<field>: <message>"``.
    """

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


class ValidationResult(Generic[T]):
    """Outcome of validating one record.

    ``ok`` is derived from the errors, so it is True exactly when there are
    none. The record is only handed out through ``data`` when validation
    passed; reading it from a failed result raises ``ResultAccessError``.

    Example:
        ```python
        result = validate(person)
        if result.ok:
            save(result.data)
        else:
            return {"errors": result.messages()}
        ```
    """

    __slots__ = ("_record", "_errors")

    def __init__(self, record: T, errors: Iterable[ValidationError] = ()):
        self._record = record
        self._errors = tuple(errors)

    @classmethod
    def success(cls, record: T) -> ValidationResult[T]:
        """Create a passing result."""
        return cls(record)

    @classmethod
    def failure(cls, record: T, errors: Iterable[ValidationError]) -> ValidationResult[T]:
        """Create a failing result.

        Raises:
            ValueError: If no errors are given
        """
        errors = tuple(errors)
        if not errors:
            raise ValueError("A failed result needs at least one error")
        return cls(record, errors)

    @property
    def ok(self) -> bool:
        """True if every attached constraint passed."""
        return not self._errors

    @property
    def data(self) -> T:
        """The validated record.

        Raises:
            ResultAccessError: If validation failed
        """
        if self._errors:
            raise ResultAccessError(
                f"Cannot access data of a failed validation result ({len(self._errors)} error(s)); "
                f"check .ok first",
                context={"fields": [e.field for e in self._errors]},
            )
        return self._record

    @property
    def errors(self) -> tuple[ValidationError, ...]:
        """Errors for the failing fields, in field declaration order."""
        return self._errors

    def messages(self) -> List[str]:
        """Errors rendered as ``"field: message"`` strings."""
        return [str(e) for e in self._errors]

    def error_for(self, field: str) -> ValidationError | None:
        """Get the error reported for a field, if any."""
        for error in self._errors:
            if error.field == field:
                return error
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serializable summary (without the record itself)."""
        return {
            "ok": self.ok,
            "errors": [e.to_dict() for e in self._errors],
        }

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.ok

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return self._errors == other._errors and self._record == other._record

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.ok:
            return f"ValidationResult(ok=True, data={self._record!r})"
        return f"ValidationResult(ok=False, errors={list(self._errors)!r})"
