"""Execução do programa e mapeamento para exit codes.

Exit codes:
    0: término normal (entrada vazia ou one-shot concluído)
    1: falha não tratada (traceback em stderr)
    2: nenhum handler de menu encontrado (antes de exibir o menu)
"""

from __future__ import annotations

import asyncio
import logging
import sys
import traceback
from typing import TYPE_CHECKING, Any, NoReturn

from consoledi.errors import NoHandlersFoundError

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from typing import TextIO

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NO_HANDLERS = 2


def execute(main: Coroutine[Any, Any, None], *, stderr: TextIO | None = None) -> int:
    """Executa a corrotina principal e retorna o exit code."""
    errors = stderr if stderr is not None else sys.stderr
    try:
        asyncio.run(main)
    except NoHandlersFoundError as exc:
        logger.error("no_menu_handlers", extra={"error": str(exc)})
        errors.write(f"{exc}\n")
        return EXIT_NO_HANDLERS
    except Exception as exc:
        logger.error("host_failed", extra={"error_type": type(exc).__name__})
        errors.write("".join(traceback.format_exception(exc)))
        return EXIT_FAILURE
    return EXIT_OK


def run_and_exit(main: Coroutine[Any, Any, None]) -> NoReturn:
    """Executa a corrotina principal e encerra o processo com o exit code."""
    raise SystemExit(execute(main))
