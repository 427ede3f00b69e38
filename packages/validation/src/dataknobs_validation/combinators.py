"""Constraint combinators: negation and AND/OR composition.

Combinators verify the constraints they wrap when they are constructed, so
``Not(object())`` fails immediately instead of at validation time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .catalog import constraint
from .contract import Constraint, kind_name, kind_of, resolve_constraint, verify_constraint
from .exceptions import ConstraintDefinitionError


def _wrap(owner: str, item: Any) -> tuple[Any, str]:
    """Resolve and verify a wrapped constraint, returning it with its message."""
    inner = resolve_constraint(item)
    try:
        message = verify_constraint(inner)
    except ConstraintDefinitionError as e:
        raise ConstraintDefinitionError(
            f"{owner} wraps an invalid constraint: {e}",
            context={"kind": owner, "inner": kind_name(inner)},
        ) from e
    return inner, message


@constraint("not")
@dataclass(frozen=True)
class Not(Constraint):
    """Negation of another constraint.

    Accepts a constraint instance or a parameterless constraint class.

    Example:
        ```python
        Not(OnlyDigits).check("12a")
        # True
        Not(MinLength(3)).error_message()
        # 'must not comply with: length must be >= 3'
        ```
    """

    inner: Any
    _inner_message: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        inner, message = _wrap("Not", self.inner)
        object.__setattr__(self, "inner", inner)
        object.__setattr__(self, "_inner_message", message)

    def check(self, value: Any) -> bool:
        return not self.inner.check(value)

    def error_message(self) -> str:
        return f"must not comply with: {self._inner_message}"

    def kind_key(self) -> Any:
        return (Not, kind_of(self.inner))

    def kind_label(self) -> str:
        return f"Not[{kind_name(self.inner)}]"


def negate(inner: Any) -> Not:
    """Functional spelling of ``Not(inner)``."""
    return Not(inner)


@dataclass(frozen=True)
class _Composite(Constraint):
    constraints: tuple
    _messages: tuple = field(init=False, repr=False, compare=False)
    joiner = ""

    def __post_init__(self) -> None:
        owner = type(self).__name__
        items = tuple(self.constraints)
        if not items:
            raise ConstraintDefinitionError(
                f"{owner} requires at least one constraint", context={"kind": owner}
            )
        wrapped = [_wrap(owner, item) for item in items]
        object.__setattr__(self, "constraints", tuple(inner for inner, _ in wrapped))
        object.__setattr__(self, "_messages", tuple(message for _, message in wrapped))

    def error_message(self) -> str:
        return self.joiner.join(self._messages)

    def kind_key(self) -> Any:
        return (type(self),) + tuple(kind_of(c) for c in self.constraints)

    def kind_label(self) -> str:
        return f"{type(self).__name__}[{', '.join(kind_name(c) for c in self.constraints)}]"


@constraint("all_of")
@dataclass(frozen=True)
class AllOf(_Composite):
    """All wrapped constraints must pass (``a & b``)."""

    joiner = " and "

    def check(self, value: Any) -> bool:
        return all(c.check(value) for c in self.constraints)


@constraint("any_of")
@dataclass(frozen=True)
class AnyOf(_Composite):
    """At least one wrapped constraint must pass (``a | b``)."""

    joiner = " or "

    def check(self, value: Any) -> bool:
        return any(c.check(value) for c in self.constraints)
