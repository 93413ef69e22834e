"""Filters de logging para injeção de contexto.

Campos injetados:
- invocation_id: ID do despacho de menu em andamento
- service: Nome da aplicação de console
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class InvocationContextFilter(logging.Filter):
    """Injeta invocation_id e service em cada record de log.

    Args:
        service_name: Nome da aplicação para identificação nos logs.
        invocation_id_getter: Função que retorna o invocation_id atual.
            Se não fornecida, usa string vazia.
    """

    def __init__(
        self,
        service_name: str,
        invocation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_invocation_id = invocation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona invocation_id e service ao record.

        Se invocation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "invocation_id", None)
        record.invocation_id = existing if existing else self._get_invocation_id()
        record.service = self._service_name
        return True
