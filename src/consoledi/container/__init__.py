"""Container mínimo de injeção de dependências.

Uso:
    services = ServiceCollection()
    services.add_scoped(random.Random, factory=lambda _: random.Random(42))
    provider = services.build_provider()

    async with provider.create_scope() as scope:
        app = scope.get_or_create(App)
"""

from consoledi.container.collection import (
    ServiceCollection,
    ServiceDescriptor,
    ServiceLifetime,
)
from consoledi.container.provider import ServiceProvider, ServiceScope

__all__ = [
    "ServiceCollection",
    "ServiceDescriptor",
    "ServiceLifetime",
    "ServiceProvider",
    "ServiceScope",
]
