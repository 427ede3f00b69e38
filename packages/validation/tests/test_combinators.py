"""Tests for Not, AllOf and AnyOf."""

import math

import pytest

from dataknobs_validation import (
    NOT_EMPTY,
    AllOf,
    AnyOf,
    ConstraintDefinitionError,
    GreaterThan,
    LessThan,
    MaxLength,
    MinLength,
    Not,
    NotNaN,
    NotNull,
    OnlyAlpha,
    OnlyDigits,
    ValidUTF8,
    negate,
)
from dataknobs_validation.contract import kind_name, kind_of

SAMPLE_CONSTRAINTS = [
    MinLength(2),
    MaxLength(3),
    OnlyAlpha(),
    OnlyDigits(),
    ValidUTF8(),
    GreaterThan(0),
    LessThan(10),
    NotNaN(),
    NotNull(),
]

SAMPLE_VALUES = ["", "ab", "abcd", "123", None, 0, 5, -3, 12.5, math.nan, [1, 2], b"\xff"]


class TestNot:
    """Test the negation combinator."""

    @pytest.mark.parametrize("constraint", SAMPLE_CONSTRAINTS, ids=kind_name)
    def test_negation_law(self, constraint):
        """Test that Not inverts check for every sample value."""
        negated = Not(constraint)
        for value in SAMPLE_VALUES:
            assert negated.check(value) == (not constraint.check(value))

    def test_message(self):
        """Test the synthesized message."""
        assert Not(MinLength(3)).error_message() == "must not comply with: length must be >= 3"
        assert Not(OnlyDigits()).error_message() == "must not comply with: must contain only digits (0-9)"

    def test_accepts_kind_class(self):
        """Test wrapping a parameterless kind class."""
        negated = Not(OnlyDigits)
        assert negated.inner == OnlyDigits()
        assert negated.check("12a")
        assert not negated.check("12")

    def test_kind_class_needing_parameters(self):
        """Test wrapping a kind class that needs parameters."""
        with pytest.raises(ConstraintDefinitionError, match="needs parameters"):
            Not(MinLength)

    def test_rejects_non_constraint(self):
        """Test that wrapping a malformed kind fails on construction."""

        class NoCheck:
            def error_message(self):
                return "nope"

        with pytest.raises(ConstraintDefinitionError, match="Not wraps an invalid constraint"):
            Not(NoCheck())
        with pytest.raises(ConstraintDefinitionError):
            Not(42)

    def test_operator_and_function(self):
        """Test ~ and negate spellings."""
        assert ~NOT_EMPTY == Not(NOT_EMPTY)
        assert negate(NOT_EMPTY) == Not(NOT_EMPTY)

    def test_double_negation(self):
        """Test that Not(Not(c)) agrees with c."""
        doubled = Not(Not(OnlyAlpha()))
        for value in SAMPLE_VALUES:
            assert doubled.check(value) == OnlyAlpha().check(value)

    def test_kind_identity(self):
        """Test that negations of different kinds are different kinds."""
        assert kind_of(Not(MinLength(1))) == kind_of(Not(MinLength(5)))
        assert kind_of(Not(MinLength(1))) != kind_of(Not(MaxLength(1)))
        assert kind_name(Not(MinLength(1))) == "Not[MinLength]"


class TestComposites:
    """Test AllOf and AnyOf."""

    def test_all_of(self):
        """Test AllOf requires every constraint."""
        constraint = AllOf([MinLength(2), OnlyAlpha()])
        assert constraint.check("ab")
        assert not constraint.check("a")
        assert not constraint.check("a1")
        assert constraint.error_message() == (
            "length must be >= 2 and must contain only letters (a-z, A-Z)"
        )

    def test_any_of(self):
        """Test AnyOf requires at least one constraint."""
        constraint = AnyOf([LessThan(0), GreaterThan(100)])
        assert constraint.check(-1)
        assert constraint.check(101)
        assert not constraint.check(50)
        assert constraint.error_message() == "must be < 0 or must be > 100"

    def test_operators(self):
        """Test & and | build flattened composites."""
        both = MinLength(1) & MaxLength(3) & OnlyAlpha()
        assert isinstance(both, AllOf)
        assert len(both.constraints) == 3

        either = LessThan(0) | GreaterThan(10)
        assert isinstance(either, AnyOf)
        assert either.check(11)

    def test_empty_rejected(self):
        """Test that composites need members."""
        with pytest.raises(ConstraintDefinitionError):
            AllOf([])
        with pytest.raises(ConstraintDefinitionError):
            AnyOf(())

    def test_members_verified(self):
        """Test that composite members must be constraints."""
        with pytest.raises(ConstraintDefinitionError, match="AllOf wraps an invalid constraint"):
            AllOf([MinLength(1), "not a constraint"])

    def test_kind_label(self):
        """Test readable composite names."""
        assert kind_name(AllOf([MinLength(1), OnlyAlpha()])) == "AllOf[MinLength, OnlyAlpha]"
