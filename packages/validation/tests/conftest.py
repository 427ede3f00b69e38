"""Pytest configuration for dataknobs_validation tests."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_validation import (  # noqa: E402
    NON_NEGATIVE,
    NOT_EMPTY,
    ConstraintCatalog,
    MaxLength,
    OnlyAlpha,
    clear_plan_cache,
)


@dataclass
class Person:
    """Record used across engine tests."""

    name: Annotated[str, NOT_EMPTY]
    age: Annotated[int, NON_NEGATIVE]


@dataclass
class Account:
    """Record with several constrained fields."""

    username: Annotated[str, NOT_EMPTY, OnlyAlpha()]
    display_name: Annotated[str, MaxLength(10)]
    balance: Annotated[int, NON_NEGATIVE]
    note: str = ""


@pytest.fixture
def person_type():
    return Person


@pytest.fixture
def account_type():
    return Account


@pytest.fixture
def catalog():
    """An empty catalog isolated from the default one."""
    return ConstraintCatalog("test")


@pytest.fixture(autouse=True)
def fresh_plan_cache():
    """Compile plans per test so redefined record types never share a plan."""
    clear_plan_cache()
    yield
    clear_plan_cache()
