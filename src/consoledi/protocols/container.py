"""Protocolos do container de injeção de dependências.

O motor do menu depende apenas destes contratos: criar escopo a partir
do provider raiz, obter-ou-construir instâncias dentro do escopo e liberar
o escopo (o que descarta tudo que foi construído nele).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

T = TypeVar("T")


@runtime_checkable
class ServiceScopeProtocol(Protocol):
    """Escopo de recursos de uma única invocação."""

    def get(self, service_type: type[T]) -> T | None:
        """Resolve serviço registrado ou retorna None."""
        ...

    def get_required(self, service_type: type[T]) -> T:
        """Resolve serviço registrado ou levanta ServiceResolutionError."""
        ...

    def get_or_create(self, service_type: type[T]) -> T:
        """Resolve serviço registrado ou constrói instância com os serviços do escopo."""
        ...

    async def aclose(self) -> None:
        """Descarta todos os recursos criados no escopo."""
        ...

    async def __aenter__(self) -> Any: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


@runtime_checkable
class ServiceProviderProtocol(Protocol):
    """Provider raiz, compartilhado somente-leitura durante a sessão."""

    def create_scope(self) -> ServiceScopeProtocol:
        """Cria um novo escopo de invocação."""
        ...

    async def aclose(self) -> None:
        """Descarta os singletons do provider."""
        ...
