"""Exception hierarchy for dataknobs_validation.

Validation failures of *data* are never raised: they are returned as
``ValidationError`` entries inside a ``ValidationResult``. The exceptions in
this module cover the other stratum, mistakes in how constraints are defined
or attached, plus misuse of a result object.

Example:
    ```python
    from dataknobs_validation.exceptions import ConstraintDefinitionError

    try:
        plan = PlanBuilder("Person").field("name", MinLength(1), MinLength(3)).build()
    except ConstraintDefinitionError as e:
        logger.error(f"Bad constraint definition: {e}")
        logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class DataknobsValidationError(Exception):
    """Base exception for the validation package.

    Carries an optional context dictionary with structured information
    about the failure (field names, constraint kinds, etc.).

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence if both are given)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class ConstraintDefinitionError(DataknobsValidationError):
    """Raised when a constraint kind or its attachment to a field is malformed.

    Common scenarios include:
    - A kind without a callable ``check`` or ``error_message``
    - ``check`` not accepting exactly one value
    - ``error_message`` returning something other than a non-empty string
    - A negation wrapping something that is not a constraint
    - Invalid constraint parameters from configuration

    The context carries ``kind`` and, when known, ``field``.
    """

    pass


class AmbiguousConstraintError(ConstraintDefinitionError):
    """Raised when the same constraint kind is attached twice to one field."""

    pass


class ConstraintCheckError(DataknobsValidationError):
    """Raised when a constraint's ``check`` raises instead of returning a bool.

    Built-in kinds never do this; the error surfaces a broken third-party
    kind with the field and kind it was evaluated for.
    """

    pass


class ResultAccessError(DataknobsValidationError):
    """Raised when ``ValidationResult.data`` is read on a failed result.

    Always check ``result.ok`` before reading ``result.data``.
    """

    pass


class NotFoundError(DataknobsValidationError):
    """Raised when a constraint kind is not found in a catalog."""

    pass


class OperationError(DataknobsValidationError):
    """Raised when a catalog operation fails (e.g. duplicate registration)."""

    pass


__all__ = [
    "DataknobsValidationError",
    "ConstraintDefinitionError",
    "AmbiguousConstraintError",
    "ConstraintCheckError",
    "ResultAccessError",
    "NotFoundError",
    "OperationError",
]
