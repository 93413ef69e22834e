"""Adaptador de ações — normaliza as formas de execução de um handler.

Precedência (primeira que casar vence):
    1. Subclasse de MenuOption (contrato explícito ``async def run()``)
    2. Método ``run`` sem argumentos obrigatórios que retorna awaitable
    3. Método ``run`` sem argumentos obrigatórios que não retorna nada
    4. Nenhuma: handler não executável (fica fora do menu)

A forma é resolvida uma única vez; a ação construída não reinspeciona
o handler a cada despacho.
"""

from __future__ import annotations

import collections.abc
import inspect
import logging
import re
import typing
from typing import TYPE_CHECKING, Any

from consoledi.errors import ResourceScopeError
from consoledi.menu.models import InvocationKind, InvocationOutcome
from consoledi.protocols import MenuOption

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from consoledi.menu.models import HandlerAction
    from consoledi.protocols import ServiceScopeProtocol

    HandlerFactory = Callable[[ServiceScopeProtocol], Any]

logger = logging.getLogger(__name__)

CONVENTIONAL_METHOD = "run"

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

# Anotação de retorno em string (não avaliável) que indica awaitable
_AWAITABLE_ANNOTATION = re.compile(
    r"^\s*(?:typing\.|collections\.abc\.|abc\.)?(?:Awaitable|Coroutine)\b"
)


# ──────────────────────────────────────────────────────────────────────────────
# Detecção da forma de invocação
# ──────────────────────────────────────────────────────────────────────────────


def resolve_invocation_kind(handler_type: type) -> InvocationKind | None:
    """Determina como o handler é executado.

    Returns:
        InvocationKind ou None se o handler não for executável.
    """
    if issubclass(handler_type, MenuOption):
        return InvocationKind.RUNNABLE

    method = _conventional_method(handler_type)
    if method is None:
        return None

    return_hint = _return_hint(method)
    if inspect.iscoroutinefunction(method) or _is_awaitable_hint(return_hint):
        return InvocationKind.METHOD_ASYNC
    if return_hint is None or return_hint is type(None) or return_hint == "None":
        return InvocationKind.METHOD_SYNC
    return None


def _conventional_method(handler_type: type) -> Callable[..., Any] | None:
    """Retorna ``run`` se puder ser chamado sem argumentos."""
    raw = inspect.getattr_static(handler_type, CONVENTIONAL_METHOD, None)
    if isinstance(raw, staticmethod):
        function, bound = raw.__func__, 0
    elif isinstance(raw, classmethod):
        function, bound = raw.__func__, 1
    elif inspect.isfunction(raw):
        function, bound = raw, 1
    else:
        return None

    try:
        parameters = list(inspect.signature(function).parameters.values())
    except (TypeError, ValueError):
        return None

    if len(parameters) < bound:
        return None
    for param in parameters[bound:]:
        if param.kind in _VARIADIC_KINDS:
            continue
        if param.default is inspect.Parameter.empty:
            return None
    return function


def _return_hint(function: Callable[..., Any]) -> Any:
    """Anotação de retorno avaliada, ou None se ausente.

    Se as anotações não puderem ser avaliadas (ex: tipo importado só sob
    TYPE_CHECKING), retorna a anotação crua, em geral uma string.
    """
    try:
        hints = typing.get_type_hints(function)
    except Exception:
        raw = getattr(function, "__annotations__", {}).get("return")
        logger.debug(
            "menu_handler_return_hint_unresolved",
            extra={
                "function": getattr(function, "__qualname__", repr(function)),
                "annotation": str(raw),
            },
        )
        return raw
    return hints.get("return")


def _is_awaitable_hint(hint: Any) -> bool:
    if isinstance(hint, str):
        return _AWAITABLE_ANNOTATION.match(hint) is not None
    origin = typing.get_origin(hint) or hint
    return inspect.isclass(origin) and issubclass(origin, collections.abc.Awaitable)


# ──────────────────────────────────────────────────────────────────────────────
# Construção da ação normalizada
# ──────────────────────────────────────────────────────────────────────────────


async def _invoke_runnable(instance: MenuOption) -> None:
    await instance.run()


async def _invoke_method_async(instance: Any) -> None:
    await getattr(instance, CONVENTIONAL_METHOD)()


async def _invoke_method_sync(instance: Any) -> None:
    result = getattr(instance, CONVENTIONAL_METHOD)()
    if inspect.isawaitable(result):
        await result


_INVOKERS: dict[InvocationKind, Callable[[Any], Awaitable[None]]] = {
    InvocationKind.RUNNABLE: _invoke_runnable,
    InvocationKind.METHOD_ASYNC: _invoke_method_async,
    InvocationKind.METHOD_SYNC: _invoke_method_sync,
}


def build_action(
    handler_type: type,
    kind: InvocationKind,
    factory: HandlerFactory | None = None,
) -> HandlerAction:
    """Cria a ação normalizada ``action(scope) -> InvocationOutcome``.

    A instância do handler é obtida dentro do escopo recebido, a cada
    chamada: via factory explícita ou ``scope.get_or_create``.

    Args:
        handler_type: Classe do handler
        kind: Forma de invocação já resolvida
        factory: Factory explícita ``factory(scope) -> instância`` (opcional)
    """
    invoke = _INVOKERS[kind]
    return _scoped_action(handler_type, invoke, factory)


def build_callable_action(
    handler_type: type,
    callback: Callable[[Any], Any],
    factory: HandlerFactory | None = None,
) -> HandlerAction:
    """Cria ação que entrega a instância do handler a um callback do chamador.

    Se o callback retornar awaitable, ele é aguardado.
    """

    async def invoke(instance: Any) -> None:
        result = callback(instance)
        if inspect.isawaitable(result):
            await result

    return _scoped_action(handler_type, invoke, factory)


def _scoped_action(
    handler_type: type,
    invoke: Callable[[Any], Awaitable[None]],
    factory: HandlerFactory | None,
) -> HandlerAction:
    def obtain(scope: ServiceScopeProtocol) -> Any:
        if factory is not None:
            return factory(scope)
        return scope.get_or_create(handler_type)

    async def action(scope: ServiceScopeProtocol) -> InvocationOutcome:
        try:
            await invoke(obtain(scope))
        except ResourceScopeError:
            raise
        except Exception as exc:
            return InvocationOutcome(error=exc)
        return InvocationOutcome()

    return action
