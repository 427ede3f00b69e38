"""Built-in constraint kinds.

Every kind is a frozen dataclass whose ``check`` returns a plain ``bool`` and
never raises. Values outside a kind's domain (a number given to a length
check, a string given to a numeric comparison) fail the check.

Pre-built instances such as ``NOT_EMPTY`` and ``POSITIVE`` are constructed
from the primitive kinds so their messages stay consistent.
"""

from __future__ import annotations

import cmath
import operator
import re
import string
from collections.abc import Collection
from dataclasses import dataclass, field
from decimal import Decimal
from numbers import Complex, Number, Rational
from typing import Any, Callable

from .catalog import constraint
from .contract import Constraint
from .exceptions import ConstraintDefinitionError


def _length(value: Any) -> int | None:
    """Length of a value, 0 for None, None if the value has no length."""
    if value is None:
        return 0
    try:
        return len(value)
    except TypeError:
        return None


def _compare(op: Callable[[Any, Any], Any], value: Any, bound: Any) -> bool:
    if value is None or isinstance(value, (str, bytes, bytearray)):
        return False
    try:
        return bool(op(value, bound))
    except (TypeError, ValueError, ArithmeticError):
        return False


# length


@constraint("min_length")
@dataclass(frozen=True)
class MinLength(Constraint):
    """Length must be at least ``n``."""

    n: int

    def __post_init__(self) -> None:
        if self.n < 0:
            raise ConstraintDefinitionError(
                f"min length cannot be negative: {self.n}", context={"kind": "MinLength"}
            )

    def check(self, value: Any) -> bool:
        length = _length(value)
        return length is not None and length >= self.n

    def error_message(self) -> str:
        return f"length must be >= {self.n}"


@constraint("max_length")
@dataclass(frozen=True)
class MaxLength(Constraint):
    """Length must be at most ``n``."""

    n: int

    def __post_init__(self) -> None:
        if self.n < 0:
            raise ConstraintDefinitionError(
                f"max length cannot be negative: {self.n}", context={"kind": "MaxLength"}
            )

    def check(self, value: Any) -> bool:
        length = _length(value)
        return length is not None and length <= self.n

    def error_message(self) -> str:
        return f"length must be <= {self.n}"


@constraint("exact_length")
@dataclass(frozen=True)
class ExactLength(Constraint):
    """Length must be exactly ``n``."""

    n: int

    def __post_init__(self) -> None:
        if self.n < 0:
            raise ConstraintDefinitionError(
                f"exact length cannot be negative: {self.n}", context={"kind": "ExactLength"}
            )

    def check(self, value: Any) -> bool:
        return _length(value) == self.n

    def error_message(self) -> str:
        return f"length must be == {self.n}"


# text


@constraint("valid_utf8")
@dataclass(frozen=True)
class ValidUTF8(Constraint):
    """Value must be well-formed UTF-8.

    Strings must be encodable (no lone surrogates), bytes must decode.
    """

    def check(self, value: Any) -> bool:
        if value is None:
            return True
        try:
            if isinstance(value, str):
                value.encode("utf-8")
            elif isinstance(value, (bytes, bytearray, memoryview)):
                bytes(value).decode("utf-8")
            else:
                return False
        except UnicodeError:
            return False
        return True

    def error_message(self) -> str:
        return "must be valid UTF-8"


def _characters(value: Any) -> str | None:
    """Characters of a value, or None if the value is not character data.

    Accepts a single character, a string, bytes, or a sized collection of
    one-character strings. None counts as empty.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return value.decode("latin-1")
    if isinstance(value, Collection):
        chars = []
        for item in value:
            if not isinstance(item, str) or len(item) != 1:
                return None
            chars.append(item)
        return "".join(chars)
    return None


@dataclass(frozen=True)
class _CharacterClass(Constraint):
    """Every character must belong to ``allowed``."""

    allowed = frozenset()
    description = ""

    def check(self, value: Any) -> bool:
        chars = _characters(value)
        return chars is not None and all(c in self.allowed for c in chars)

    def error_message(self) -> str:
        return f"must contain only {self.description}"


@constraint("only_alpha")
@dataclass(frozen=True)
class OnlyAlpha(_CharacterClass):
    """Only letters (a-z, A-Z)."""

    allowed = frozenset(string.ascii_letters)
    description = "letters (a-z, A-Z)"


@constraint("only_upper")
@dataclass(frozen=True)
class OnlyUpper(_CharacterClass):
    """Only uppercase letters (A-Z)."""

    allowed = frozenset(string.ascii_uppercase)
    description = "uppercase letters (A-Z)"


@constraint("only_lower")
@dataclass(frozen=True)
class OnlyLower(_CharacterClass):
    """Only lowercase letters (a-z)."""

    allowed = frozenset(string.ascii_lowercase)
    description = "lowercase letters (a-z)"


@constraint("only_alpha_num")
@dataclass(frozen=True)
class OnlyAlphaNum(_CharacterClass):
    """Only letters and digits (a-z, A-Z, 0-9)."""

    allowed = frozenset(string.ascii_letters + string.digits)
    description = "letters and digits (a-z, A-Z, 0-9)"


@constraint("only_digits")
@dataclass(frozen=True)
class OnlyDigits(_CharacterClass):
    """Only digits (0-9)."""

    allowed = frozenset(string.digits)
    description = "digits (0-9)"


@constraint("pattern")
@dataclass(frozen=True)
class Pattern(Constraint):
    """String value must fully match a regular expression."""

    pattern: str
    flags: int = 0
    _regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "_regex", re.compile(self.pattern, self.flags))
        except re.error as e:
            raise ConstraintDefinitionError(
                f"Invalid pattern '{self.pattern}': {e}",
                context={"kind": "Pattern", "pattern": self.pattern},
            ) from e

    def check(self, value: Any) -> bool:
        return isinstance(value, str) and self._regex.fullmatch(value) is not None

    def error_message(self) -> str:
        return f"must match pattern '{self.pattern}'"


# numeric


@dataclass(frozen=True)
class _Comparison(Constraint):
    n: Number
    symbol = ""

    def check(self, value: Any) -> bool:
        return _compare(self._op, value, self.n)

    def error_message(self) -> str:
        return f"must be {self.symbol} {self.n}"


@constraint("greater_than")
@dataclass(frozen=True)
class GreaterThan(_Comparison):
    """Value must be > n."""

    symbol = ">"
    _op = staticmethod(operator.gt)


@constraint("greater_than_or_equal_to")
@dataclass(frozen=True)
class GreaterThanOrEqualTo(_Comparison):
    """Value must be >= n."""

    symbol = ">="
    _op = staticmethod(operator.ge)


@constraint("less_than")
@dataclass(frozen=True)
class LessThan(_Comparison):
    """Value must be < n."""

    symbol = "<"
    _op = staticmethod(operator.lt)


@constraint("less_than_or_equal_to")
@dataclass(frozen=True)
class LessThanOrEqualTo(_Comparison):
    """Value must be <= n."""

    symbol = "<="
    _op = staticmethod(operator.le)


MinValue = GreaterThanOrEqualTo
MaxValue = LessThanOrEqualTo


@constraint("not_zero")
@dataclass(frozen=True)
class NotZero(Constraint):
    """Value must be != 0."""

    def check(self, value: Any) -> bool:
        return _compare(operator.ne, value, 0)

    def error_message(self) -> str:
        return "must be != 0"


@constraint("not_nan")
@dataclass(frozen=True)
class NotNaN(Constraint):
    """Floating-point value must not be NaN. Non-float values pass."""

    def check(self, value: Any) -> bool:
        if isinstance(value, Decimal):
            return not value.is_nan()
        if isinstance(value, Rational):
            return True
        if isinstance(value, Complex):
            return not cmath.isnan(value)
        return True

    def error_message(self) -> str:
        return "must not be NaN"


# presence and membership


@constraint("not_null")
@dataclass(frozen=True)
class NotNull(Constraint):
    """Value must not be None."""

    def check(self, value: Any) -> bool:
        return value is not None

    def error_message(self) -> str:
        return "must not be null"


@constraint("one_of")
@dataclass(frozen=True)
class OneOf(Constraint):
    """Value must be one of the allowed values."""

    values: tuple

    def __post_init__(self) -> None:
        if isinstance(self.values, (str, bytes)) or not isinstance(self.values, Collection):
            raise ConstraintDefinitionError(
                f"OneOf requires a collection of allowed values, got {self.values!r}",
                context={"kind": "OneOf"},
            )
        if not self.values:
            raise ConstraintDefinitionError(
                "OneOf requires at least one allowed value", context={"kind": "OneOf"}
            )
        object.__setattr__(self, "values", tuple(self.values))

    def check(self, value: Any) -> bool:
        try:
            return any(value == allowed for allowed in self.values)
        except (TypeError, ValueError, ArithmeticError):
            return False

    def error_message(self) -> str:
        return f"must be one of: {', '.join(repr(v) for v in self.values)}"


@constraint("predicate")
@dataclass(frozen=True)
class Predicate(Constraint):
    """Custom constraint backed by a callable returning a bool."""

    func: Callable[[Any], bool]
    message: str = "must satisfy custom check"

    def __post_init__(self) -> None:
        if not callable(self.func):
            raise ConstraintDefinitionError(
                f"Predicate requires a callable, got {self.func!r}", context={"kind": "Predicate"}
            )

    def check(self, value: Any) -> bool:
        return bool(self.func(value))

    def error_message(self) -> str:
        return self.message


NOT_EMPTY = MinLength(1)
POSITIVE = GreaterThan(0)
NON_NEGATIVE = GreaterThanOrEqualTo(0)
NEGATIVE = LessThan(0)
NON_POSITIVE = LessThanOrEqualTo(0)
NOT_ZERO = NotZero()
NOT_NAN = NotNaN()
NOT_NULL = NotNull()
VALID_UTF8 = ValidUTF8()
ONLY_ALPHA = OnlyAlpha()
ONLY_UPPER = OnlyUpper()
ONLY_LOWER = OnlyLower()
ONLY_ALPHA_NUM = OnlyAlphaNum()
ONLY_DIGITS = OnlyDigits()
