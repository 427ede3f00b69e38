"""The constraint contract: marker, base class and structural checks.

A constraint kind qualifies by carrying the ``__constraint__`` marker (its
catalog name) and exposing two operations:

- ``check(value) -> bool``
- ``error_message() -> str``

Subclasses of :class:`Constraint` are marked automatically. Any other class
can be marked with the ``@constraint`` decorator from
:mod:`dataknobs_validation.catalog`. Everything here runs at definition time;
nothing in this module is called while values are validated.
"""

from __future__ import annotations

import inspect
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from .exceptions import ConstraintDefinitionError

if TYPE_CHECKING:
    from .combinators import AllOf, AnyOf, Not

MARKER = "__constraint__"

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


def kind_label_for(cls: type) -> str:
    """Convert a class name to its default catalog name (``MinLength`` -> ``min_length``)."""
    return _CAMEL_BOUNDARY.sub(r"\1_\2", cls.__name__).lower()


class Constraint(ABC):
    """Base class for constraint kinds with composable operators.

    Subclasses are marked as constraints on creation. Instances should be
    immutable; the built-in kinds are frozen dataclasses.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if MARKER not in cls.__dict__:
            setattr(cls, MARKER, kind_label_for(cls))

    @abstractmethod
    def check(self, value: Any) -> bool:
        """Return True if the value complies with this constraint."""

    @abstractmethod
    def error_message(self) -> str:
        """Return the fixed message reported when ``check`` fails."""

    def kind_key(self) -> Any:
        """Identity used to detect the same kind attached twice to a field."""
        return type(self)

    def kind_label(self) -> str:
        """Human-readable kind name for diagnostics."""
        return type(self).__name__

    def __and__(self, other: Any) -> AllOf:
        """Combine with AND: both constraints must pass."""
        from .combinators import AllOf

        if isinstance(self, AllOf):
            return AllOf(self.constraints + (other,))
        elif isinstance(other, AllOf):
            return AllOf((self,) + other.constraints)
        return AllOf((self, other))

    def __or__(self, other: Any) -> AnyOf:
        """Combine with OR: at least one constraint must pass."""
        from .combinators import AnyOf

        if isinstance(self, AnyOf):
            return AnyOf(self.constraints + (other,))
        elif isinstance(other, AnyOf):
            return AnyOf((self,) + other.constraints)
        return AnyOf((self, other))

    def __invert__(self) -> Not:
        """Negate this constraint."""
        from .combinators import Not

        return Not(self)


def is_constraint_kind(obj: Any) -> bool:
    """Check whether ``obj`` is a class carrying the constraint marker."""
    return inspect.isclass(obj) and isinstance(getattr(obj, MARKER, None), str)


def is_constraint(obj: Any) -> bool:
    """Check whether ``obj`` is an instance of a marked constraint kind."""
    return not inspect.isclass(obj) and is_constraint_kind(type(obj))


def kind_of(constraint: Any) -> Any:
    """Return the identity of a constraint's kind."""
    key = getattr(constraint, "kind_key", None)
    if callable(key):
        return key()
    return type(constraint)


def kind_name(constraint: Any) -> str:
    """Return a readable name for a constraint (or constraint class)."""
    if inspect.isclass(constraint):
        return constraint.__name__
    label = getattr(constraint, "kind_label", None)
    if callable(label):
        return label()
    return type(constraint).__name__


def _accepts(func: Any, *args: Any) -> bool:
    """Check that ``func`` can be called with exactly the given positional args."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # no introspectable signature
        return True
    try:
        signature.bind(*args)
    except TypeError:
        return False
    return True


def verify_kind(cls: type, field: str | None = None) -> None:
    """Verify the structural contract of a constraint class.

    Args:
        cls: Class to verify
        field: Field being defined, for the diagnostic

    Raises:
        ConstraintDefinitionError: If ``check`` or ``error_message`` is
            missing or has the wrong arity
    """
    context = {"kind": cls.__name__, "field": field}
    where = f" on field '{field}'" if field else ""

    check = getattr(cls, "check", None)
    if not callable(check):
        raise ConstraintDefinitionError(
            f"Constraint kind '{cls.__name__}'{where} has no callable 'check'",
            context=context,
        )
    if inspect.isfunction(inspect.getattr_static(cls, "check")) and not _accepts(check, None, None):
        raise ConstraintDefinitionError(
            f"Constraint kind '{cls.__name__}'{where}: 'check' must take exactly one value",
            context=context,
        )

    error_message = getattr(cls, "error_message", None)
    if not callable(error_message):
        raise ConstraintDefinitionError(
            f"Constraint kind '{cls.__name__}'{where} has no callable 'error_message'",
            context=context,
        )
    raw_error_message = inspect.getattr_static(cls, "error_message")
    if inspect.isfunction(raw_error_message) and not _accepts(error_message, None):
        raise ConstraintDefinitionError(
            f"Constraint kind '{cls.__name__}'{where}: 'error_message' must take no arguments",
            context=context,
        )


def verify_constraint(constraint: Any, field: str | None = None) -> str:
    """Verify a constraint instance and return its error message.

    Args:
        constraint: Constraint instance to verify
        field: Field the constraint is attached to, for the diagnostic

    Returns:
        The constraint's error message

    Raises:
        ConstraintDefinitionError: If the instance is not a marked
            constraint or breaks the contract
    """
    name = kind_name(constraint)
    context = {"kind": name, "field": field}
    where = f" on field '{field}'" if field else ""

    if not is_constraint(constraint):
        raise ConstraintDefinitionError(
            f"'{name}'{where} is not a constraint; mark its class with @constraint "
            f"or derive it from Constraint",
            context=context,
        )

    verify_kind(type(constraint), field)

    if not _accepts(constraint.check, None):
        raise ConstraintDefinitionError(
            f"Constraint '{name}'{where}: 'check' must take exactly one value",
            context=context,
        )
    if not _accepts(constraint.error_message):
        raise ConstraintDefinitionError(
            f"Constraint '{name}'{where}: 'error_message' must take no arguments",
            context=context,
        )

    try:
        message = constraint.error_message()
    except Exception as e:
        raise ConstraintDefinitionError(
            f"Constraint '{name}'{where}: 'error_message' raised {type(e).__name__}: {e}",
            context=context,
        ) from e

    if not isinstance(message, str) or not message:
        raise ConstraintDefinitionError(
            f"Constraint '{name}'{where}: 'error_message' must return a non-empty string, "
            f"got {message!r}",
            context=context,
        )
    return message


def resolve_constraint(item: Any, field: str | None = None) -> Any:
    """Turn an annotation item into a constraint instance.

    A marked constraint class stands for its parameterless instance, so
    ``Annotated[str, OnlyAlpha]`` and ``Annotated[str, OnlyAlpha()]`` mean
    the same thing.

    Raises:
        ConstraintDefinitionError: If a marked class needs constructor arguments
    """
    if not is_constraint_kind(item):
        return item

    verify_kind(item, field)
    try:
        return item()
    except TypeError as e:
        where = f" on field '{field}'" if field else ""
        raise ConstraintDefinitionError(
            f"Constraint kind '{item.__name__}'{where} needs parameters; "
            f"attach an instance instead of the class ({e})",
            context={"kind": item.__name__, "field": field},
        ) from e
