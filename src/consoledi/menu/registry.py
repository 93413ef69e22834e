"""Registro explícito de opções de menu (builder).

Alternativa ao scan: o chamador registra cada handler com nome, ordem,
forma de invocação e factory opcional. Também aceita classes decoradas
com @main_menu em lote.

Uso:
    registry = (
        MenuRegistry()
        .add(ImportCustomers, "Importar clientes", sort_order=10)
        .add(Report, "Relatório", kind=InvocationKind.METHOD_SYNC,
             factory=lambda scope: Report(scope.get_required(Database)))
        .add_module(handlers_module)
    )
    descriptors = registry.descriptors()
"""

from __future__ import annotations

import importlib
from typing import TYPE_CHECKING, Any

from consoledi.errors import NoHandlersFoundError
from consoledi.menu.adapter import build_action, resolve_invocation_kind
from consoledi.menu.models import HandlerDescriptor, InvocationKind
from consoledi.menu.ordering import order_descriptors
from consoledi.menu.scanner import iter_descriptors, module_classes, package_classes

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from types import ModuleType

    from consoledi.protocols import ServiceScopeProtocol


class MenuRegistry:
    """Coleção de descritores de handlers, indexada pela classe."""

    __slots__ = ("_descriptors",)

    def __init__(self) -> None:
        self._descriptors: dict[type, HandlerDescriptor] = {}

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, handler_type: object) -> bool:
        return handler_type in self._descriptors

    def add(
        self,
        handler_type: type,
        name: str,
        *,
        sort_order: int = 0,
        kind: InvocationKind | None = None,
        factory: Callable[[ServiceScopeProtocol], Any] | None = None,
    ) -> MenuRegistry:
        """Registra um handler explicitamente.

        Args:
            handler_type: Classe do handler
            name: Nome exibido no menu
            sort_order: Ordem de exibição
            kind: Forma de invocação; se omitida, é detectada agora
            factory: Factory ``factory(scope) -> instância``; se omitida,
                usa ``scope.get_or_create(handler_type)``

        Raises:
            ValueError: Nome vazio ou handler já registrado.
            TypeError: kind omitido e handler sem forma executável.
        """
        if not name:
            raise ValueError("Nome da opção de menu não pode ser vazio")
        resolved = kind or resolve_invocation_kind(handler_type)
        if resolved is None:
            raise TypeError(
                f"{handler_type.__qualname__} não expõe ação executável "
                "(MenuOption ou método run sem argumentos)"
            )
        return self._register(
            HandlerDescriptor(
                handler_type=handler_type,
                name=name,
                sort_order=sort_order,
                kind=resolved,
                action=build_action(handler_type, resolved, factory),
            )
        )

    def add_types(self, candidates: Iterable[object]) -> MenuRegistry:
        """Registra os candidatos decorados com @main_menu que qualificarem."""
        for descriptor in iter_descriptors(candidates):
            if descriptor.handler_type not in self._descriptors:
                self._register(descriptor)
        return self

    def add_module(self, module: ModuleType | str) -> MenuRegistry:
        """Registra as classes decoradas definidas em um módulo."""
        resolved = importlib.import_module(module) if isinstance(module, str) else module
        return self.add_types(module_classes(resolved))

    def add_package(self, package: ModuleType | str) -> MenuRegistry:
        """Registra as classes decoradas de um pacote e seus submódulos."""
        return self.add_types(package_classes(package))

    def descriptors(self) -> tuple[HandlerDescriptor, ...]:
        """Retorna os descritores ordenados.

        Raises:
            NoHandlersFoundError: Se nada foi registrado.
        """
        if not self._descriptors:
            raise NoHandlersFoundError("Nenhum handler de menu registrado")
        return order_descriptors(self._descriptors.values())

    def _register(self, descriptor: HandlerDescriptor) -> MenuRegistry:
        if descriptor.handler_type in self._descriptors:
            raise ValueError(
                f"Handler já registrado: {descriptor.handler_type.__qualname__}"
            )
        self._descriptors[descriptor.handler_type] = descriptor
        return self
