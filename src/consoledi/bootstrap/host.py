"""Pontos de entrada do host de console.

- run_async / run: executa um único handler pré-selecionado (one-shot)
- run_main_menu_async / run_main_menu: apresenta o menu principal

Uso (one-shot):
    asyncio.run(run_async(sys.argv[1:], create_host_builder, App))

Uso (menu):
    asyncio.run(
        run_main_menu_async(sys.argv[1:], create_host_builder, "Minha aplicação")
    )
"""

from __future__ import annotations

import asyncio
import importlib
import logging
import sys
from types import ModuleType
from typing import TYPE_CHECKING, Any

from consoledi.menu.adapter import build_action, build_callable_action, resolve_invocation_kind
from consoledi.menu.metadata import get_menu_metadata
from consoledi.menu.registry import MenuRegistry
from consoledi.menu.scanner import scan_handlers, scan_module, scan_package
from consoledi.menu.scope import ScopeManager
from consoledi.menu.session import MenuSession

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from typing import TextIO

    from consoledi.bootstrap.builder import HostBuilder
    from consoledi.menu.models import HandlerDescriptor

    CreateHostBuilder = Callable[[Sequence[str]], HostBuilder]
    HandlerSource = MenuRegistry | ModuleType | str | Iterable[type]

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# One-shot
# ──────────────────────────────────────────────────────────────────────────────


async def run_async(
    args: Sequence[str],
    create_host_builder: CreateHostBuilder,
    handler_type: type,
    action: Callable[[Any], Any] | None = None,
) -> None:
    """Executa um único handler dentro de um escopo e encerra.

    A instância vem de ``get_or_create`` no escopo criado a partir do
    provider raiz, de modo que dependências de construtor são scoped.

    Args:
        args: Argumentos de linha de comando
        create_host_builder: Factory do HostBuilder da aplicação
        handler_type: Classe do handler
        action: Callback ``action(instância)`` (síncrono ou assíncrono);
            se omitido, usa a forma de execução detectada do handler

    Raises:
        TypeError: Sem action e handler sem forma executável.
        HandlerInvocationError: O handler falhou (causa encadeada).
        ResourceScopeError: Falha ao criar ou liberar o escopo.
    """
    if action is not None:
        handler_action = build_callable_action(handler_type, action)
    else:
        kind = resolve_invocation_kind(handler_type)
        if kind is None:
            raise TypeError(
                f"{handler_type.__qualname__} não expõe ação executável "
                "(MenuOption ou método run sem argumentos)"
            )
        handler_action = build_action(handler_type, kind)

    metadata = get_menu_metadata(handler_type)
    name = metadata.name if metadata is not None else handler_type.__qualname__

    host = create_host_builder(args).build()
    async with host:
        scopes = ScopeManager(host.services, looping=False, output=sys.stdout)
        await scopes.run(handler_action, name=name)


def run(
    args: Sequence[str],
    create_host_builder: CreateHostBuilder,
    handler_type: type,
    action: Callable[[Any], Any] | None = None,
) -> None:
    """Versão síncrona de run_async."""
    asyncio.run(run_async(args, create_host_builder, handler_type, action))


# ──────────────────────────────────────────────────────────────────────────────
# Menu principal
# ──────────────────────────────────────────────────────────────────────────────


def resolve_handlers(handlers: HandlerSource | None = None) -> tuple[HandlerDescriptor, ...]:
    """Obtém os descritores ordenados a partir da fonte informada.

    Args:
        handlers: MenuRegistry, módulo, nome de módulo/pacote ou iterável de
            classes. Padrão: classes do módulo ``__main__``.

    Raises:
        NoHandlersFoundError: Se nenhum handler qualificar.
    """
    if handlers is None:
        return scan_module(sys.modules["__main__"])
    if isinstance(handlers, MenuRegistry):
        return handlers.descriptors()
    if isinstance(handlers, str):
        handlers = importlib.import_module(handlers)
    if isinstance(handlers, ModuleType):
        if hasattr(handlers, "__path__"):
            return scan_package(handlers)
        return scan_module(handlers)
    return scan_handlers(handlers)


async def run_main_menu_async(
    args: Sequence[str],
    create_host_builder: CreateHostBuilder,
    title: str | None = None,
    *,
    handlers: HandlerSource | None = None,
    loop: bool = True,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    invalid_selection_hint: str | None = None,
) -> None:
    """Apresenta o menu principal até a entrada vazia.

    Os handlers são resolvidos antes de construir o host: sem handlers,
    nenhum menu é exibido e nenhum recurso é criado.

    Raises:
        NoHandlersFoundError: Se nenhum handler qualificar.
        HandlerInvocationError: Handler falhou e loop=False.
        ResourceScopeError: Falha no ciclo de vida de um escopo.
    """
    descriptors = resolve_handlers(handlers)

    host = create_host_builder(args).build()
    async with host:
        session = MenuSession(
            descriptors,
            host.services,
            loop=loop,
            title=title,
            stdin=stdin,
            stdout=stdout,
            invalid_selection_hint=invalid_selection_hint,
        )
        await session.run()


def run_main_menu(
    args: Sequence[str],
    create_host_builder: CreateHostBuilder,
    title: str | None = None,
    **options: Any,
) -> None:
    """Versão síncrona de run_main_menu_async."""
    asyncio.run(run_main_menu_async(args, create_host_builder, title, **options))
