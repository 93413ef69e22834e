"""Provider raiz e escopos de resolução.

O provider raiz guarda os singletons e os descarta no aclose().
Cada ServiceScope guarda as instâncias scoped e os transients que criou,
descartando-os em ordem inversa de criação no aclose().
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from consoledi.container.activation import constructor_parameters, dispose, is_disposable
from consoledi.container.collection import ServiceDescriptor, ServiceLifetime
from consoledi.errors import ResourceScopeError, ServiceResolutionError
from consoledi.protocols import ServiceScopeProtocol

if TYPE_CHECKING:
    from types import TracebackType

T = TypeVar("T")

logger = logging.getLogger(__name__)


class ServiceScope:
    """Escopo de resolução de serviços."""

    __slots__ = ("_closed", "_disposables", "_instances", "_is_root", "_provider")

    def __init__(self, provider: ServiceProvider, *, is_root: bool = False) -> None:
        self._provider = provider
        self._is_root = is_root
        self._instances: dict[type, Any] = {}
        self._disposables: list[Any] = []
        self._closed = False

    @property
    def closed(self) -> bool:
        """True depois de aclose()."""
        return self._closed

    # ──────────────────────────────────────────────────────────────────────
    # Resolução
    # ──────────────────────────────────────────────────────────────────────

    def get(self, service_type: type[T]) -> T | None:
        """Resolve serviço registrado ou retorna None."""
        self._ensure_open()
        descriptor = self._provider.descriptor_for(service_type)
        if descriptor is None:
            return None
        return self._resolve(descriptor)

    def get_required(self, service_type: type[T]) -> T:
        """Resolve serviço registrado.

        Raises:
            ServiceResolutionError: Se o tipo não estiver registrado.
        """
        self._ensure_open()
        descriptor = self._provider.descriptor_for(service_type)
        if descriptor is None:
            raise ServiceResolutionError(
                f"Nenhum serviço registrado para {service_type.__qualname__}"
            )
        return self._resolve(descriptor)

    def get_or_create(self, service_type: type[T]) -> T:
        """Resolve serviço registrado ou constrói instância nova.

        A instância construída não é registrada nem descartada pelo escopo;
        suas dependências de construtor vêm deste escopo.
        """
        self._ensure_open()
        descriptor = self._provider.descriptor_for(service_type)
        if descriptor is not None:
            return self._resolve(descriptor)
        return self._activate(service_type)

    def _resolve(self, descriptor: ServiceDescriptor) -> Any:
        if descriptor.lifetime is ServiceLifetime.SINGLETON:
            return self._provider.root_scope._resolve_owned(descriptor)

        if descriptor.lifetime is ServiceLifetime.SCOPED and self._is_root:
            if self._provider.validate_scopes:
                raise ServiceResolutionError(
                    f"Serviço scoped {descriptor.service_type.__qualname__} não pode "
                    "ser resolvido a partir do provider raiz"
                )
        return self._resolve_owned(descriptor)

    def _resolve_owned(self, descriptor: ServiceDescriptor) -> Any:
        cache = descriptor.lifetime is not ServiceLifetime.TRANSIENT
        if cache and descriptor.service_type in self._instances:
            return self._instances[descriptor.service_type]

        if descriptor.instance is not None:
            instance = descriptor.instance
        else:
            with self._provider.resolving(descriptor.service_type):
                if descriptor.factory is not None:
                    instance = descriptor.factory(self)
                else:
                    instance = self._activate(descriptor.implementation or descriptor.service_type)
            if is_disposable(instance):
                self._disposables.append(instance)

        if cache:
            self._instances[descriptor.service_type] = instance
        return instance

    def _activate(self, implementation: type[T]) -> T:
        kwargs: dict[str, Any] = {}
        for param in constructor_parameters(implementation):
            if param.annotation in _SELF_TYPES:
                kwargs[param.name] = self
                continue
            descriptor = self._provider.descriptor_for(param.annotation)
            if descriptor is not None:
                kwargs[param.name] = self._resolve(descriptor)
            elif not param.has_default:
                raise ServiceResolutionError(
                    f"Não foi possível resolver '{param.name}: {_type_name(param.annotation)}' "
                    f"ao construir {implementation.__qualname__}"
                )
        return implementation(**kwargs)

    def _ensure_open(self) -> None:
        if self._closed:
            raise ResourceScopeError("Escopo já foi liberado")

    # ──────────────────────────────────────────────────────────────────────
    # Ciclo de vida
    # ──────────────────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        """Descarta as instâncias criadas no escopo (ordem inversa).

        Todas as instâncias são descartadas mesmo que alguma falhe.

        Raises:
            ResourceScopeError: Se algum descarte falhar.
        """
        if self._closed:
            return
        self._closed = True

        first_error: Exception | None = None
        failed = 0
        while self._disposables:
            instance = self._disposables.pop()
            try:
                await dispose(instance)
            except Exception as exc:
                failed += 1
                first_error = first_error or exc
                logger.warning(
                    "service_dispose_failed",
                    extra={
                        "service_type": type(instance).__qualname__,
                        "error_type": type(exc).__name__,
                    },
                )
        self._instances.clear()

        if first_error is not None:
            raise ResourceScopeError(
                f"Falha ao descartar {failed} serviço(s) do escopo"
            ) from first_error

    async def __aenter__(self) -> ServiceScope:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


class ServiceProvider:
    """Provider raiz: fonte de longa duração da qual os escopos derivam."""

    __slots__ = ("_descriptors", "_resolving", "root_scope", "validate_scopes")

    def __init__(
        self,
        descriptors: dict[type, ServiceDescriptor],
        *,
        validate_scopes: bool = True,
        validate_on_build: bool = True,
    ) -> None:
        self._descriptors = descriptors
        self._resolving: list[type] = []
        self.validate_scopes = validate_scopes
        self.root_scope = ServiceScope(self, is_root=True)
        if validate_on_build:
            self._validate()

    def descriptor_for(self, service_type: Any) -> ServiceDescriptor | None:
        """Retorna o registro do tipo, se houver."""
        try:
            return self._descriptors.get(service_type)
        except TypeError:
            # Anotações não-hasheáveis nunca estão registradas
            return None

    def resolving(self, service_type: type) -> _ResolutionGuard:
        """Context manager que detecta dependências circulares."""
        return _ResolutionGuard(self._resolving, service_type)

    def create_scope(self) -> ServiceScope:
        """Cria um novo escopo de invocação.

        Raises:
            ResourceScopeError: Se o provider já foi descartado.
        """
        if self.root_scope.closed:
            raise ResourceScopeError("Provider raiz já foi descartado")
        return ServiceScope(self)

    def get(self, service_type: type[T]) -> T | None:
        """Resolve a partir do escopo raiz."""
        return self.root_scope.get(service_type)

    def get_required(self, service_type: type[T]) -> T:
        """Resolve a partir do escopo raiz (obrigatório)."""
        return self.root_scope.get_required(service_type)

    def get_or_create(self, service_type: type[T]) -> T:
        """Resolve ou constrói a partir do escopo raiz."""
        return self.root_scope.get_or_create(service_type)

    async def aclose(self) -> None:
        """Descarta os singletons criados pelo provider."""
        await self.root_scope.aclose()

    async def __aenter__(self) -> ServiceProvider:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    def _validate(self) -> None:
        errors: list[str] = []
        for descriptor in self._descriptors.values():
            if descriptor.implementation is not None:
                errors.extend(self._validate_descriptor(descriptor, descriptor.implementation))
        if errors:
            details = "\n".join(f"- {error}" for error in errors)
            raise ServiceResolutionError(f"Registros de serviço inválidos:\n{details}")

    def _validate_descriptor(
        self, descriptor: ServiceDescriptor, implementation: type
    ) -> list[str]:
        try:
            parameters = constructor_parameters(implementation)
        except ServiceResolutionError as exc:
            return [str(exc)]

        errors: list[str] = []
        for param in parameters:
            if param.annotation in _SELF_TYPES:
                continue
            dependency = self.descriptor_for(param.annotation)
            if dependency is None:
                if not param.has_default:
                    errors.append(
                        f"{implementation.__qualname__}: dependência "
                        f"'{param.name}: {_type_name(param.annotation)}' não registrada"
                    )
                continue
            if (
                self.validate_scopes
                and descriptor.lifetime is ServiceLifetime.SINGLETON
                and dependency.lifetime is ServiceLifetime.SCOPED
            ):
                errors.append(
                    f"Singleton {implementation.__qualname__} não pode depender do "
                    f"serviço scoped {_type_name(param.annotation)}"
                )
        return errors


class _ResolutionGuard:
    __slots__ = ("_service_type", "_stack")

    def __init__(self, stack: list[type], service_type: type) -> None:
        self._stack = stack
        self._service_type = service_type

    def __enter__(self) -> None:
        if self._service_type in self._stack:
            chain = " -> ".join(_type_name(t) for t in [*self._stack, self._service_type])
            raise ServiceResolutionError(f"Dependência circular detectada: {chain}")
        self._stack.append(self._service_type)

    def __exit__(self, *exc_info: object) -> None:
        self._stack.pop()


def _type_name(annotation: Any) -> str:
    return getattr(annotation, "__qualname__", repr(annotation))


# Parâmetros anotados com o próprio escopo recebem o escopo que está resolvendo
_SELF_TYPES = (ServiceScope, ServiceScopeProtocol)
