"""Contrato explícito de opção de menu executável."""

from __future__ import annotations

from abc import ABC, abstractmethod


class MenuOption(ABC):
    """Handler que declara explicitamente uma ação assíncrona sem argumentos.

    Tem precedência sobre o método convencional ``run`` na detecção
    da forma de invocação.
    """

    @abstractmethod
    async def run(self) -> None:
        """Executa a ação do handler."""
