"""Configuração centralizada de logging.

Logs vão para stderr em JSON, para não se misturarem com o menu
escrito em stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from consoledi.config.logging.filters import InvocationContextFilter
from consoledi.config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "consoledi"


def configure_logging(
    level: str = "WARNING",
    service_name: str = DEFAULT_SERVICE_NAME,
    invocation_id_getter: Callable[[], str] | None = None,
) -> None:
    """Configura logging JSON estruturado para o processo.

    Deve ser chamada uma vez, pelo HostBuilder, antes de criar o container.

    Args:
        level: Nível de log (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Nome da aplicação para identificação nos logs.
        invocation_id_getter: Função que retorna o invocation_id do
            despacho em andamento (ex: de ContextVar).

    Raises:
        ValueError: Se o nível de log for inválido.
    """
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level_upper)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(InvocationContextFilter(service_name, invocation_id_getter))

    root = logging.getLogger()
    root.setLevel(level_upper)
    # Substituir handlers existentes para evitar duplicação
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    """Retorna logger para o módulo especificado."""
    return logging.getLogger(name)
