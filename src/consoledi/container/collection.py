"""Registro de serviços e lifetimes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from consoledi.container.provider import ServiceProvider
    from consoledi.protocols import ServiceScopeProtocol

    ServiceFactory = Callable[[ServiceScopeProtocol], Any]


class ServiceLifetime(StrEnum):
    """Tempo de vida de um serviço registrado."""

    SINGLETON = "SINGLETON"
    SCOPED = "SCOPED"
    TRANSIENT = "TRANSIENT"


@dataclass(frozen=True)
class ServiceDescriptor:
    """Registro de um serviço.

    Exatamente um entre implementation, factory e instance é preenchido.
    """

    service_type: type
    lifetime: ServiceLifetime
    implementation: type | None = None
    factory: ServiceFactory | None = None
    instance: Any = None


class ServiceCollection:
    """Coleção mutável de registros, convertida em ServiceProvider no build."""

    __slots__ = ("_descriptors",)

    def __init__(self) -> None:
        self._descriptors: dict[type, ServiceDescriptor] = {}

    def __contains__(self, service_type: object) -> bool:
        return service_type in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def __iter__(self) -> Iterator[ServiceDescriptor]:
        return iter(self._descriptors.values())

    def add_singleton(
        self,
        service_type: type,
        implementation: type | None = None,
        *,
        factory: ServiceFactory | None = None,
        instance: Any = None,
    ) -> ServiceCollection:
        """Registra serviço com uma instância por provider raiz."""
        return self._add(
            service_type, ServiceLifetime.SINGLETON, implementation, factory, instance
        )

    def add_scoped(
        self,
        service_type: type,
        implementation: type | None = None,
        *,
        factory: ServiceFactory | None = None,
    ) -> ServiceCollection:
        """Registra serviço com uma instância por escopo."""
        return self._add(service_type, ServiceLifetime.SCOPED, implementation, factory, None)

    def add_transient(
        self,
        service_type: type,
        implementation: type | None = None,
        *,
        factory: ServiceFactory | None = None,
    ) -> ServiceCollection:
        """Registra serviço com nova instância a cada resolução."""
        return self._add(
            service_type, ServiceLifetime.TRANSIENT, implementation, factory, None
        )

    def _add(
        self,
        service_type: type,
        lifetime: ServiceLifetime,
        implementation: type | None,
        factory: ServiceFactory | None,
        instance: Any,
    ) -> ServiceCollection:
        provided = sum(item is not None for item in (implementation, factory, instance))
        if provided > 1:
            raise ValueError(
                f"Informe apenas um entre implementation, factory e instance para "
                f"{service_type.__name__}"
            )
        if provided == 0:
            implementation = service_type

        # Último registro vence, como em containers de DI usuais
        self._descriptors[service_type] = ServiceDescriptor(
            service_type=service_type,
            lifetime=lifetime,
            implementation=implementation,
            factory=factory,
            instance=instance,
        )
        return self

    def build_provider(
        self,
        *,
        validate_scopes: bool = True,
        validate_on_build: bool = True,
    ) -> ServiceProvider:
        """Cria o provider raiz a partir dos registros atuais.

        Args:
            validate_scopes: Impede resolver serviços scoped a partir do
                provider raiz (ou de singletons).
            validate_on_build: Verifica na hora do build se as dependências
                de construtor de cada implementação estão registradas.

        Raises:
            ServiceResolutionError: Se validate_on_build encontrar problemas.
        """
        from consoledi.container.provider import ServiceProvider

        return ServiceProvider(
            dict(self._descriptors),
            validate_scopes=validate_scopes,
            validate_on_build=validate_on_build,
        )
