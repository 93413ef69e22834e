"""Modelos do motor de menu."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from consoledi.protocols import ServiceScopeProtocol

    HandlerAction = Callable[[ServiceScopeProtocol], Awaitable["InvocationOutcome"]]


class InvocationKind(StrEnum):
    """Forma de execução de um handler, resolvida uma única vez."""

    RUNNABLE = "RUNNABLE"
    METHOD_ASYNC = "METHOD_ASYNC"
    METHOD_SYNC = "METHOD_SYNC"


class MenuState(StrEnum):
    """Estados da sessão de menu."""

    IDLE = "IDLE"
    RENDERING = "RENDERING"
    AWAITING_INPUT = "AWAITING_INPUT"
    DISPATCHING = "DISPATCHING"
    TERMINATED = "TERMINATED"


@dataclass(frozen=True)
class MenuMetadata:
    """Metadados declarados por @main_menu."""

    name: str
    sort_order: int = 0


@dataclass(frozen=True)
class InvocationOutcome:
    """Resultado de uma invocação: sucesso ou falha capturada."""

    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True se a invocação terminou sem erro."""
        return self.error is None


@dataclass(frozen=True)
class HandlerDescriptor:
    """Handler descoberto e normalizado para o menu.

    Attributes:
        handler_type: Classe do handler
        name: Nome exibido no menu
        sort_order: Chave primária de ordenação
        kind: Forma de invocação resolvida no scan/registro
        action: Ação normalizada ``action(scope) -> InvocationOutcome``
    """

    handler_type: type
    name: str
    sort_order: int
    kind: InvocationKind
    action: HandlerAction = field(compare=False, repr=False)
