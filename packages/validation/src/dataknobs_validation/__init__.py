"""Declarative record validation for dataknobs packages.

Fields declare their constraints; ``validate`` checks every one of them and
returns either the validated record or an ordered list of field errors.

- **Constraints**: small immutable kinds (``MinLength``, ``OnlyAlpha``,
  ``GreaterThanOrEqualTo``, ...) plus the ``Not`` / ``AllOf`` / ``AnyOf``
  combinators
- **Catalog**: name-based registry of kinds; third parties add kinds with
  ``@constraint``
- **Plans**: verified field attachments, from ``Annotated`` metadata or
  ``PlanBuilder``
- **Engine**: ``validate``, ``Validator`` and the ``@validated`` decorator

Example:
    ```python
    from dataclasses import dataclass
    from typing import Annotated

    from dataknobs_validation import NON_NEGATIVE, NOT_EMPTY, validate

    @dataclass
    class Person:
        name: Annotated[str, NOT_EMPTY]
        age: Annotated[int, NON_NEGATIVE]

    result = validate(Person("Tom", -1))
    result.ok
    # False
    result.messages()
    # ['age: must be >= 0']
    ```
"""

from dataknobs_validation.catalog import ConstraintCatalog, constraint, default_catalog
from dataknobs_validation.combinators import AllOf, AnyOf, Not, negate
from dataknobs_validation.constraints import (
    NEGATIVE,
    NON_NEGATIVE,
    NON_POSITIVE,
    NOT_EMPTY,
    NOT_NAN,
    NOT_NULL,
    NOT_ZERO,
    ONLY_ALPHA,
    ONLY_ALPHA_NUM,
    ONLY_DIGITS,
    ONLY_LOWER,
    ONLY_UPPER,
    POSITIVE,
    VALID_UTF8,
    ExactLength,
    GreaterThan,
    GreaterThanOrEqualTo,
    LessThan,
    LessThanOrEqualTo,
    MaxLength,
    MaxValue,
    MinLength,
    MinValue,
    NotNaN,
    NotNull,
    NotZero,
    OneOf,
    OnlyAlpha,
    OnlyAlphaNum,
    OnlyDigits,
    OnlyLower,
    OnlyUpper,
    Pattern,
    Predicate,
    ValidUTF8,
)
from dataknobs_validation.contract import Constraint, is_constraint, is_constraint_kind
from dataknobs_validation.engine import Validator, validate, validated
from dataknobs_validation.exceptions import (
    AmbiguousConstraintError,
    ConstraintCheckError,
    ConstraintDefinitionError,
    DataknobsValidationError,
    NotFoundError,
    OperationError,
    ResultAccessError,
)
from dataknobs_validation.factory import ConstraintFactory, constraint_factory
from dataknobs_validation.plan import (
    FieldRule,
    PlanBuilder,
    ValidationPlan,
    clear_plan_cache,
    plan_for,
    plan_from_annotations,
)
from dataknobs_validation.result import ValidationError, ValidationResult

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Engine
    "validate",
    "validated",
    "Validator",
    # Results
    "ValidationResult",
    "ValidationError",
    # Plans
    "ValidationPlan",
    "FieldRule",
    "PlanBuilder",
    "plan_for",
    "plan_from_annotations",
    "clear_plan_cache",
    # Contract and catalog
    "Constraint",
    "constraint",
    "is_constraint",
    "is_constraint_kind",
    "ConstraintCatalog",
    "default_catalog",
    "ConstraintFactory",
    "constraint_factory",
    # Kinds
    "MinLength",
    "MaxLength",
    "ExactLength",
    "ValidUTF8",
    "OnlyAlpha",
    "OnlyUpper",
    "OnlyLower",
    "OnlyAlphaNum",
    "OnlyDigits",
    "Pattern",
    "GreaterThan",
    "GreaterThanOrEqualTo",
    "LessThan",
    "LessThanOrEqualTo",
    "MinValue",
    "MaxValue",
    "NotZero",
    "NotNaN",
    "NotNull",
    "OneOf",
    "Predicate",
    "Not",
    "negate",
    "AllOf",
    "AnyOf",
    # Pre-built constraints
    "NOT_EMPTY",
    "POSITIVE",
    "NON_NEGATIVE",
    "NEGATIVE",
    "NON_POSITIVE",
    "NOT_ZERO",
    "NOT_NAN",
    "NOT_NULL",
    "VALID_UTF8",
    "ONLY_ALPHA",
    "ONLY_UPPER",
    "ONLY_LOWER",
    "ONLY_ALPHA_NUM",
    "ONLY_DIGITS",
    # Exceptions
    "DataknobsValidationError",
    "ConstraintDefinitionError",
    "AmbiguousConstraintError",
    "ConstraintCheckError",
    "ResultAccessError",
    "NotFoundError",
    "OperationError",
]
