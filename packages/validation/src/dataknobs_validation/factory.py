"""Factory for building constraints from configuration dictionaries."""

import logging
from typing import Any, Dict, List

from .catalog import ConstraintCatalog, default_catalog
from .exceptions import ConstraintDefinitionError

logger = logging.getLogger(__name__)

_NESTED_ONE = {"not": "constraint"}
_NESTED_MANY = {"all_of": "constraints", "any_of": "constraints"}


class ConstraintFactory:
    """Factory for creating constraint instances from configuration.

    The ``type`` key names a kind in the catalog; every other key is passed
    to the kind's constructor. Combinators take nested configurations.

    Configuration Options:
        type (str): Catalog name of the constraint kind
        <param> (any): Constructor parameters of that kind
        constraint (dict): Wrapped constraint, for ``not``
        constraints (list): Wrapped constraints, for ``all_of`` / ``any_of``

    Example Configuration:
        constraints:
          - type: min_length
            n: 3
          - type: not
            constraint:
              type: only_digits
          - type: any_of
            constraints:
              - type: less_than
                n: 0
              - type: greater_than
                n: 100
    """

    def __init__(self, catalog: ConstraintCatalog | None = None):
        self.catalog = catalog if catalog is not None else default_catalog

    def create(self, **config) -> Any:
        """Create a constraint instance from configuration.

        Args:
            **config: Constraint configuration

        Returns:
            Constraint instance

        Raises:
            ConstraintDefinitionError: If the configuration is invalid
            NotFoundError: If the kind name is not in the catalog
        """
        params = dict(config)
        kind_key = params.pop("type", None)
        if not kind_key:
            raise ConstraintDefinitionError(
                "Constraint configuration missing 'type'", context={"config": config}
            )
        kind_key = str(kind_key).lower()
        kind = self.catalog.get(kind_key)

        if kind_key in _NESTED_ONE:
            nested = params.pop(_NESTED_ONE[kind_key], None)
            if not isinstance(nested, dict):
                raise ConstraintDefinitionError(
                    f"'{kind_key}' constraint requires a nested '{_NESTED_ONE[kind_key]}' mapping",
                    context={"config": config},
                )
            params = {"inner": self.create(**nested), **params}
        elif kind_key in _NESTED_MANY:
            nested = params.pop(_NESTED_MANY[kind_key], None)
            if not isinstance(nested, list):
                raise ConstraintDefinitionError(
                    f"'{kind_key}' constraint requires a '{_NESTED_MANY[kind_key]}' list",
                    context={"config": config},
                )
            params = {"constraints": tuple(self.build_many(nested)), **params}

        logger.debug(f"Creating constraint: {kind_key}")

        try:
            return kind(**params)
        except TypeError as e:
            raise ConstraintDefinitionError(
                f"Invalid parameters for constraint '{kind_key}': {e}",
                context={"kind": kind.__name__, "params": sorted(params)},
            ) from e

    def build_many(self, configs: List[Dict[str, Any]]) -> List[Any]:
        """Create constraint instances from a list of configurations."""
        return [self.create(**config) for config in configs]


constraint_factory = ConstraintFactory()
