"""Dependency injection wiring.

Every entry in ``PROVIDERS`` is either a concrete provider or a component
base (``__mock_component__`` set) whose subclasses supply the production
and mock implementations.
"""

from typing import Type

from haven.util.di.application import ProdApplicationProvider
from haven.util.di.base import Component, ProviderBase
from haven.util.di.core import ProdConfigProvider
from haven.util.di.domain import ProdDomainProvider
from haven.util.di.infrastructure import (
    IdentityProvider,
    PersistenceProvider,
    ProdIdentityProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    IdentityProvider,
    PersistenceProvider,
]

COMPONENTS: frozenset[Component] = frozenset(
    p.__mock_component__ for p in PROVIDERS if p.__mock_component__
)


def get_provider(
    base: Type[ProviderBase], mocked: frozenset[Component] | set[Component] = frozenset()
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for one ``PROVIDERS`` entry.

    Args:
        base: Entry from ``PROVIDERS``
        mocked: Components that should use their mock implementation

    Raises:
        ValueError: If the component has no implementation of the wanted kind
    """
    component = base.__mock_component__
    if component is None:
        return base

    want_mock = component in mocked
    for impl in base.__subclasses__():
        if impl.__is_mock__ == want_mock:
            return impl
    kind = "mock" if want_mock else "production"
    raise ValueError(f"No {kind} implementation for {component}")


__all__ = [
    "COMPONENTS",
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "get_provider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "IdentityProvider",
    "PersistenceProvider",
    "ProdIdentityProvider",
    "ProdPersistenceProvider",
]
