"""Sessão interativa do menu principal.

Máquina de estados:
    IDLE → RENDERING → AWAITING_INPUT → DISPATCHING → (RENDERING | TERMINATED)

Regras de entrada:
    - inteiro em [1, N]: despacha a opção escolhida
    - string vazia (ou EOF): encerra a sessão
    - qualquer outra coisa: ignorada, o menu é exibido novamente

Sem loop, a sessão faz exatamente uma iteração e encerra.
"""

from __future__ import annotations

import asyncio
import logging
import re
import sys
from typing import TYPE_CHECKING

from consoledi.errors import NoHandlersFoundError
from consoledi.menu.models import MenuState
from consoledi.menu.ordering import order_descriptors
from consoledi.menu.scope import ScopeManager

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import TextIO

    from consoledi.menu.models import HandlerDescriptor
    from consoledi.protocols import ServiceProviderProtocol

logger = logging.getLogger(__name__)

_SELECTION_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)


def parse_selection(text: str, count: int) -> int | None:
    """Converte a entrada em índice 1-based válido, ou None.

    Aceita somente dígitos ASCII, com sinal opcional.
    """
    candidate = text.strip()
    if _SELECTION_PATTERN.fullmatch(candidate) is None:
        return None
    index = int(candidate)
    return index if 1 <= index <= count else None


class MenuSession:
    """Loop de leitura e despacho do menu principal."""

    def __init__(
        self,
        descriptors: Sequence[HandlerDescriptor],
        root_provider: ServiceProviderProtocol,
        *,
        loop: bool = True,
        title: str | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        invalid_selection_hint: str | None = None,
    ) -> None:
        """Inicializa a sessão.

        Args:
            descriptors: Handlers descobertos (reordenados aqui)
            root_provider: Provider raiz do container
            loop: Se False, executa uma única iteração
            title: Título exibido antes do primeiro menu
            stdin: Origem das linhas de entrada (padrão: sys.stdin)
            stdout: Destino do menu e das falhas (padrão: sys.stdout)
            invalid_selection_hint: Mensagem exibida após entrada inválida
                (padrão: nenhuma, a entrada é ignorada em silêncio)

        Raises:
            NoHandlersFoundError: Se descriptors estiver vazio.
        """
        if not descriptors:
            raise NoHandlersFoundError("Sessão de menu sem handlers")
        self._descriptors = order_descriptors(descriptors)
        self._loop = loop
        self._title = title
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._invalid_selection_hint = invalid_selection_hint
        self._scopes = ScopeManager(root_provider, looping=loop, output=self._stdout)
        self._state = MenuState.IDLE

    @property
    def state(self) -> MenuState:
        """Estado atual da máquina de estados."""
        return self._state

    @property
    def descriptors(self) -> tuple[HandlerDescriptor, ...]:
        """Opções na ordem exibida."""
        return self._descriptors

    async def run(self) -> None:
        """Executa a sessão até a entrada vazia (ou uma iteração sem loop).

        Raises:
            HandlerInvocationError: Handler falhou em sessão sem loop.
            ResourceScopeError: Falha no ciclo de vida de um escopo.
        """
        logger.info(
            "menu_session_started",
            extra={"options": len(self._descriptors), "loop": self._loop},
        )
        try:
            await self._run_loop()
        finally:
            self._state = MenuState.TERMINATED
            logger.info("menu_session_terminated")

    async def _run_loop(self) -> None:
        self._render(with_title=True)
        while True:
            self._state = MenuState.AWAITING_INPUT
            text = await self._read_line()
            if text == "":
                return

            index = parse_selection(text, len(self._descriptors))
            if index is not None:
                descriptor = self._descriptors[index - 1]
                self._state = MenuState.DISPATCHING
                logger.debug(
                    "menu_option_selected",
                    extra={"handler": descriptor.name, "kind": descriptor.kind.value},
                )
                await self._scopes.run(descriptor.action, name=descriptor.name)
                if self._loop:
                    self._write_line("")
            elif self._invalid_selection_hint:
                self._write_line(self._invalid_selection_hint)

            if not self._loop:
                return
            self._render(with_title=False)

    def _render(self, *, with_title: bool) -> None:
        self._state = MenuState.RENDERING
        if with_title and self._title:
            self._write_line(self._title)
        for index, descriptor in enumerate(self._descriptors, start=1):
            self._write_line(f"{index}. {descriptor.name}")
        self._stdout.flush()

    async def _read_line(self) -> str:
        line = await asyncio.to_thread(self._stdin.readline)
        return line.rstrip("\r\n")

    def _write_line(self, text: str) -> None:
        self._stdout.write(f"{text}\n")
