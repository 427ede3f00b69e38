"""Field attachment: which constraints apply to which fields.

A :class:`ValidationPlan` is the immutable, verified list of fields of a
record type with their ordered constraints. Plans come from two places:

- :class:`PlanBuilder`, a fluent registration API usable for any record
  shape, including plain mappings
- :func:`plan_from_annotations`, which scans ``typing.Annotated`` metadata
  on a class's fields

Both verify every constraint and reject a kind attached twice to one field
while the plan is built, before any record is validated.

Example:
    ```python
    from typing import Annotated

    @dataclass
    class Person:
        name: Annotated[str, NOT_EMPTY, MaxLength(64)]
        age: Annotated[int, NON_NEGATIVE]

    plan_for(Person).field_names
    # ('name', 'age')

    plan = (
        PlanBuilder("signup")
        .field("email", NOT_EMPTY, Pattern(r"[^@]+@[^@]+"))
        .field("password", MinLength(12))
        .build()
    )
    ```
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import typing
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List

from .contract import (
    is_constraint,
    is_constraint_kind,
    kind_name,
    kind_of,
    resolve_constraint,
    verify_constraint,
)
from .exceptions import AmbiguousConstraintError, ConstraintDefinitionError

logger = logging.getLogger(__name__)

PLAN_ATTRIBUTE = "__validation_plan__"


@dataclass(frozen=True)
class FieldRule:
    """One field with its constraints, in attachment order.

    ``messages[i]`` is the error message of ``constraints[i]``.
    """

    name: str
    constraints: tuple
    messages: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.constraints)


@dataclass(frozen=True)
class ValidationPlan:
    """Verified field attachments for one record type, in declaration order."""

    record_name: str
    fields: tuple[FieldRule, ...] = ()

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.fields)

    def rule_for(self, name: str) -> FieldRule | None:
        for rule in self.fields:
            if rule.name == name:
                return rule
        return None

    def __iter__(self) -> Iterator[FieldRule]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def to_dict(self) -> Dict[str, Any]:
        """Describe the plan (kind names and messages per field)."""
        return {
            "record": self.record_name,
            "fields": {
                rule.name: [
                    {"kind": kind_name(c), "message": message}
                    for c, message in zip(rule.constraints, rule.messages)
                ]
                for rule in self.fields
            },
        }


def _attach(field: str, items: List[Any]) -> FieldRule:
    """Verify constraints for one field and build its rule."""
    constraints = [resolve_constraint(item, field) for item in items]
    messages = [verify_constraint(c, field) for c in constraints]

    keys = [kind_of(c) for c in constraints]
    for i, key in enumerate(keys):
        count = keys.count(key)
        if count > 1:
            name = kind_name(constraints[i])
            raise AmbiguousConstraintError(
                f"Ambiguous '{name}' constraint on field '{field}'. "
                f"Please specify each constraint kind only once per field; found: {count}",
                context={"field": field, "kind": name, "count": count},
            )

    return FieldRule(name=field, constraints=tuple(constraints), messages=tuple(messages))


class PlanBuilder:
    """Fluent API for declaring field constraints.

    Calling :meth:`field` again for the same name extends that field's
    constraints; its position stays where it was first declared.
    """

    def __init__(self, record_name: str):
        self.record_name = record_name
        self._fields: Dict[str, List[Any]] = {}

    def field(self, name: str, *constraints: Any) -> PlanBuilder:
        """Attach constraints to a field (fluent API).

        Args:
            name: Field name
            *constraints: Constraint instances (or parameterless kinds)

        Returns:
            Self for chaining

        Raises:
            ConstraintDefinitionError: If a constraint is malformed
            AmbiguousConstraintError: If a kind is attached twice to the field
        """
        items = self._fields.get(name, []) + list(constraints)
        # verify eagerly so the error points at the offending call
        _attach(name, items)
        self._fields[name] = items
        return self

    def build(self) -> ValidationPlan:
        """Build the immutable plan."""
        plan = ValidationPlan(
            record_name=self.record_name,
            fields=tuple(_attach(name, items) for name, items in self._fields.items()),
        )
        logger.debug(f"Built validation plan for {self.record_name}: {list(plan.field_names)}")
        return plan


def _declared_fields(cls: type) -> List[str]:
    if dataclasses.is_dataclass(cls):
        return [f.name for f in dataclasses.fields(cls)]
    return list(typing.get_type_hints(cls, include_extras=True))


def _is_constraint_item(item: Any) -> bool:
    return is_constraint(item) or is_constraint_kind(item)


def _has_nested_constraints(hint: Any) -> bool:
    """Check for constraint metadata inside a hint, below its top level."""
    if typing.get_origin(hint) is typing.Annotated:
        if any(_is_constraint_item(m) for m in hint.__metadata__):
            return True
        return _has_nested_constraints(hint.__origin__)
    return any(_has_nested_constraints(arg) for arg in typing.get_args(hint))


def plan_from_annotations(cls: type) -> ValidationPlan:
    """Build a plan from ``Annotated[...]`` metadata on a class's fields.

    Metadata items that are constraint instances or marked constraint
    classes are attached in the order they appear; other metadata is
    ignored. Fields without constraints are left out of the plan.

    Raises:
        ConstraintDefinitionError: If annotations cannot be resolved, a
            constraint is malformed or constraints are nested inside a
            field's type (``Optional[Annotated[str, NOT_EMPTY]]``)
        AmbiguousConstraintError: If a kind is attached twice to a field
    """
    try:
        hints = typing.get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as e:
        raise ConstraintDefinitionError(
            f"Cannot resolve field annotations of {cls.__qualname__}: {e}",
            context={"record": cls.__qualname__},
        ) from e

    builder = PlanBuilder(cls.__qualname__)
    for name in _declared_fields(cls):
        hint = hints.get(name)
        if typing.get_origin(hint) is typing.Annotated:
            inner, items = hint.__origin__, [m for m in hint.__metadata__ if _is_constraint_item(m)]
        else:
            inner, items = hint, []
        if _has_nested_constraints(inner):
            raise ConstraintDefinitionError(
                f"Field '{name}' of {cls.__qualname__} has constraints nested inside its type "
                f"({hint}); attach them at the top level, e.g. "
                f"Annotated[Optional[str], ...] instead of Optional[Annotated[str, ...]]",
                context={"record": cls.__qualname__, "field": name},
            )
        if items:
            builder.field(name, *items)
    return builder.build()


_plan_cache: Dict[type, ValidationPlan] = {}
_plan_lock = threading.Lock()


def plan_for(cls: type) -> ValidationPlan:
    """Get the validation plan of a record type.

    Uses the plan attached by ``@validated`` when present, otherwise compiles
    one from annotations on first use and caches it.
    """
    plan = cls.__dict__.get(PLAN_ATTRIBUTE)
    if isinstance(plan, ValidationPlan):
        return plan

    with _plan_lock:
        plan = _plan_cache.get(cls)
        if plan is None:
            plan = plan_from_annotations(cls)
            _plan_cache[cls] = plan
    return plan


def clear_plan_cache() -> None:
    """Forget compiled plans (for types redefined at runtime)."""
    with _plan_lock:
        _plan_cache.clear()
