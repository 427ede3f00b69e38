"""Validation engine.

``validate`` walks a record's plan field by field, in declaration order,
and each field's constraints in attachment order. For every field with a
failing constraint it reports the first failing constraint's message. By
default every field is checked; with ``bail_out=True`` validation stops at
the first failure.

Example:
    ```python
    @validated
    @dataclass
    class Person:
        name: Annotated[str, NOT_EMPTY]
        age: int

    result = validate(Person("", 32))
    result.ok
    # False
    [str(e) for e in result.errors]
    # ['name: length must be >= 1']
    ```
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, List, TypeVar

from .contract import kind_name
from .exceptions import ConstraintCheckError
from .plan import PLAN_ATTRIBUTE, ValidationPlan, plan_for, plan_from_annotations
from .result import ValidationError, ValidationResult

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C", bound=type)


def _field_value(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _run_check(constraint: Any, value: Any, field: str) -> bool:
    try:
        return bool(constraint.check(value))
    except Exception as e:
        raise ConstraintCheckError(
            f"Constraint '{kind_name(constraint)}' raised {type(e).__name__} "
            f"while checking field '{field}': {e}",
            context={"field": field, "kind": kind_name(constraint)},
        ) from e


def validate(
    record: T,
    bail_out: bool = False,
    plan: ValidationPlan | None = None,
) -> ValidationResult[T]:
    """Validate a record against its field constraints.

    Args:
        record: Record to validate (never modified)
        bail_out: If True, stop at the first failing field
        plan: Explicit plan; defaults to the plan of ``type(record)``

    Returns:
        ValidationResult with one error per failing field

    Raises:
        ConstraintDefinitionError: If the record type's constraints are
            malformed (raised before any value is checked)
        ConstraintCheckError: If a constraint's check raises
    """
    if plan is None:
        plan = plan_for(type(record))

    errors: List[ValidationError] = []
    for rule in plan.fields:
        value = _field_value(record, rule.name)
        for constraint, message in zip(rule.constraints, rule.messages):
            if _run_check(constraint, value, rule.name):
                continue
            errors.append(ValidationError(rule.name, message))
            if bail_out:
                logger.debug(f"{plan.record_name}: bailing out at field '{rule.name}'")
                return ValidationResult(record, errors)
            break

    if errors:
        logger.debug(f"{plan.record_name}: {len(errors)} field(s) failed validation")
    return ValidationResult(record, errors)


class Validator:
    """Reusable validator bound to one plan.

    Args:
        target: Record type (plan compiled from its annotations) or a plan
        bail_out: Default fail-fast mode for this validator
    """

    def __init__(self, target: type | ValidationPlan, bail_out: bool = False):
        self.plan = target if isinstance(target, ValidationPlan) else plan_for(target)
        self.bail_out = bail_out

    def validate(self, record: T, bail_out: bool | None = None) -> ValidationResult[T]:
        """Validate one record."""
        return validate(
            record,
            bail_out=self.bail_out if bail_out is None else bail_out,
            plan=self.plan,
        )

    __call__ = validate

    def validate_many(
        self,
        records: Iterable[T],
        stop_on_error: bool = False,
    ) -> List[ValidationResult[T]]:
        """Validate multiple records.

        Args:
            records: Records to validate
            stop_on_error: If True, stop after the first failing record

        Returns:
            List of ValidationResults, one per validated record
        """
        results = []
        for record in records:
            result = self.validate(record)
            results.append(result)

            if not result.ok and stop_on_error:
                logger.debug(f"{self.plan.record_name}: stopping after {len(results)} record(s)")
                break

        return results


def validated(cls: C) -> C:
    """Class decorator: compile and attach the validation plan at definition time.

    Any malformed or ambiguous constraint on the class raises when the class
    is defined rather than on first validation.
    """
    setattr(cls, PLAN_ATTRIBUTE, plan_from_annotations(cls))
    return cls
