"""Catalog of constraint kinds.

The catalog maps kind names (``"min_length"``, ``"not"``, ...) to constraint
classes. It is what makes kinds discoverable by name, e.g. for building
constraints from configuration. Attaching a constraint to a field never
requires registration: the marker alone qualifies a kind.

Example:
    ```python
    from dataknobs_validation import constraint

    @constraint("even")
    class Even:
        def check(self, value):
            return isinstance(value, int) and value % 2 == 0

        def error_message(self):
            return "must be even"

    default_catalog.get("even")
    # <class 'Even'>
    ```
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, TypeVar, overload

from .contract import MARKER, is_constraint_kind, kind_label_for, verify_kind
from .exceptions import ConstraintDefinitionError, NotFoundError, OperationError

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=type)


class ConstraintCatalog:
    """Thread-safe registry of constraint kinds by name.

    Args:
        name: Name for this catalog (for diagnostics)

    Example:
        ```python
        catalog = ConstraintCatalog("custom")
        catalog.register("min_length", MinLength)
        catalog.get("min_length")(3).check("abcd")
        # True
        ```
    """

    def __init__(self, name: str):
        self._name = name
        self._kinds: Dict[str, type] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """Get catalog name."""
        return self._name

    def register(self, key: str, kind: type, allow_overwrite: bool = False) -> None:
        """Register a constraint kind by name.

        Args:
            key: Unique kind name
            kind: Marked constraint class
            allow_overwrite: Whether to replace an existing registration

        Raises:
            ConstraintDefinitionError: If ``kind`` is not a well-formed constraint class
            OperationError: If the name is taken and allow_overwrite is False
        """
        if not is_constraint_kind(kind):
            raise ConstraintDefinitionError(
                f"Cannot register '{getattr(kind, '__name__', kind)}' in {self._name}: "
                f"not a marked constraint kind",
                context={"kind": getattr(kind, "__name__", repr(kind)), "catalog": self._name},
            )
        verify_kind(kind)

        with self._lock:
            if not allow_overwrite and key in self._kinds and self._kinds[key] is not kind:
                raise OperationError(
                    f"Constraint kind '{key}' already registered in {self._name}",
                    context={"key": key, "catalog": self._name},
                )
            self._kinds[key] = kind

        logger.debug(f"Registered constraint kind '{key}' ({kind.__name__}) in {self._name}")

    def unregister(self, key: str) -> type:
        """Unregister and return a kind by name.

        Raises:
            NotFoundError: If the name is not registered
        """
        with self._lock:
            if key not in self._kinds:
                raise NotFoundError(
                    f"Constraint kind not found: {key}",
                    context={"key": key, "catalog": self._name},
                )
            return self._kinds.pop(key)

    def get(self, key: str) -> type:
        """Get a kind by name.

        Raises:
            NotFoundError: If the name is not registered
        """
        with self._lock:
            if key not in self._kinds:
                raise NotFoundError(
                    f"Constraint kind not found: {key}",
                    context={
                        "key": key,
                        "catalog": self._name,
                        "available_keys": list(self._kinds.keys()),
                    },
                )
            return self._kinds[key]

    def get_optional(self, key: str) -> type | None:
        """Get a kind by name, returning None if not found."""
        with self._lock:
            return self._kinds.get(key)

    def has(self, key: str) -> bool:
        """Check if a kind name is registered."""
        with self._lock:
            return key in self._kinds

    def list_keys(self) -> List[str]:
        """List all registered kind names."""
        with self._lock:
            return list(self._kinds.keys())

    def items(self) -> List[tuple[str, type]]:
        """Get all (name, kind) pairs."""
        with self._lock:
            return list(self._kinds.items())

    def count(self) -> int:
        """Get the number of registered kinds."""
        with self._lock:
            return len(self._kinds)

    def clear(self) -> None:
        """Remove every registration."""
        with self._lock:
            self._kinds.clear()

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __iter__(self):
        with self._lock:
            return iter(list(self._kinds.values()))


default_catalog = ConstraintCatalog("constraints")


@overload
def constraint(cls: K) -> K: ...


@overload
def constraint(
    name: str | None = None, *, catalog: ConstraintCatalog | None = None
) -> Callable[[K], K]: ...


def constraint(name: Any = None, *, catalog: ConstraintCatalog | None = None) -> Any:
    """Mark a class as a constraint kind and register it in a catalog.

    Usable bare (``@constraint``), with a name (``@constraint("even")``) or
    with keywords (``@constraint(name="even", catalog=my_catalog)``). The
    class is verified structurally before it is marked, so a malformed kind
    fails where it is defined.

    Args:
        name: Catalog name (defaults to the snake_case class name)
        catalog: Catalog to register in (defaults to ``default_catalog``)

    Raises:
        ConstraintDefinitionError: If the class does not satisfy the contract
        OperationError: If the name is already taken by another kind
    """

    def decorate(cls: K, key: str | None) -> K:
        if not isinstance(cls, type):
            raise ConstraintDefinitionError(
                f"@constraint can only decorate classes, got {cls!r}",
                context={"kind": repr(cls)},
            )
        verify_kind(cls)
        key = key or kind_label_for(cls)
        setattr(cls, MARKER, key)
        target = catalog if catalog is not None else default_catalog
        target.register(key, cls)
        return cls

    if isinstance(name, type):
        return decorate(name, None)

    def wrapper(cls: K) -> K:
        return decorate(cls, name)

    return wrapper
