"""Gerenciador de escopo — um escopo de recursos por despacho.

O escopo é criado a partir do provider raiz, usado por exatamente uma
invocação e liberado incondicionalmente antes de devolver o controle.

Política de falhas:
    - Falha do handler: em loop é formatada na saída e a sessão continua;
      fora do loop propaga como HandlerInvocationError.
    - Falha ao criar/liberar escopo: sempre ResourceScopeError (fatal).
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING

from consoledi.errors import HandlerInvocationError, ResourceScopeError
from consoledi.observability import reset_invocation_id, set_invocation_id

if TYPE_CHECKING:
    from typing import TextIO

    from consoledi.menu.models import HandlerAction, InvocationOutcome
    from consoledi.protocols import ServiceProviderProtocol, ServiceScopeProtocol

logger = logging.getLogger(__name__)


class ScopeManager:
    """Executa ações de handlers dentro de escopos isolados."""

    __slots__ = ("_looping", "_output", "_root_provider")

    def __init__(
        self,
        root_provider: ServiceProviderProtocol,
        *,
        looping: bool,
        output: TextIO,
    ) -> None:
        """Inicializa o gerenciador.

        Args:
            root_provider: Provider raiz, somente leitura
            looping: Se a sessão é em loop (falhas de handler são contidas)
            output: Destino do relatório de falhas
        """
        self._root_provider = root_provider
        self._looping = looping
        self._output = output

    async def run(self, action: HandlerAction, *, name: str) -> None:
        """Executa a ação em um escopo novo.

        Args:
            action: Ação normalizada ``action(scope) -> InvocationOutcome``
            name: Nome do handler para logs e relatório de falha

        Raises:
            HandlerInvocationError: Handler falhou e a sessão não é em loop.
            ResourceScopeError: Falha ao criar ou liberar o escopo.
        """
        token = set_invocation_id()
        try:
            scope = self._create_scope()
            logger.info("handler_dispatched", extra={"handler": name})
            try:
                outcome = await action(scope)
            finally:
                await self._release(scope)
            self._handle_outcome(name, outcome)
        finally:
            reset_invocation_id(token)

    def _create_scope(self) -> ServiceScopeProtocol:
        try:
            return self._root_provider.create_scope()
        except ResourceScopeError:
            raise
        except Exception as exc:
            raise ResourceScopeError("Falha ao criar escopo de invocação") from exc

    async def _release(self, scope: ServiceScopeProtocol) -> None:
        try:
            await scope.aclose()
        except ResourceScopeError:
            raise
        except Exception as exc:
            raise ResourceScopeError("Falha ao liberar escopo de invocação") from exc

    def _handle_outcome(
        self,
        name: str,
        outcome: InvocationOutcome,
    ) -> None:
        if outcome.ok:
            logger.info("handler_completed", extra={"handler": name})
            return

        failure = HandlerInvocationError(name)
        if not self._looping:
            raise failure from outcome.error

        failure.__cause__ = outcome.error
        logger.error(
            "handler_invocation_failed",
            extra={
                "handler": name,
                "error_type": type(outcome.error).__name__,
            },
        )
        self._output.write("".join(traceback.format_exception(failure)))
        self._output.flush()
