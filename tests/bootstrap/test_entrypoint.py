"""Testes para execute/run_and_exit (exit codes)."""

from __future__ import annotations

import io

import pytest

from consoledi.bootstrap import EXIT_FAILURE, EXIT_NO_HANDLERS, EXIT_OK, execute, run_and_exit
from consoledi.errors import HandlerInvocationError, NoHandlersFoundError


async def succeed() -> None:
    return None


async def no_handlers() -> None:
    raise NoHandlersFoundError("Nenhum handler de menu encontrado")


async def handler_failed() -> None:
    try:
        raise KeyError("config")
    except KeyError as exc:
        raise HandlerInvocationError("App1") from exc


class TestExecute:
    """Testes para execute."""

    def test_success_is_zero(self) -> None:
        """Término normal retorna 0 sem escrever em stderr."""
        stderr = io.StringIO()
        assert execute(succeed(), stderr=stderr) == EXIT_OK == 0
        assert stderr.getvalue() == ""

    def test_no_handlers_is_two(self) -> None:
        """NoHandlersFoundError retorna 2 com mensagem curta."""
        stderr = io.StringIO()
        assert execute(no_handlers(), stderr=stderr) == EXIT_NO_HANDLERS == 2
        assert stderr.getvalue() == "Nenhum handler de menu encontrado\n"

    def test_failure_is_one_with_traceback(self) -> None:
        """Falha não tratada retorna 1 com traceback encadeado."""
        stderr = io.StringIO()
        assert execute(handler_failed(), stderr=stderr) == EXIT_FAILURE == 1
        report = stderr.getvalue()
        assert "KeyError: 'config'" in report
        assert "HandlerInvocationError: Falha ao executar o handler 'App1'" in report


class TestRunAndExit:
    """Testes para run_and_exit."""

    def test_raises_system_exit_with_code(self) -> None:
        """Encerra o processo com o exit code calculado."""
        with pytest.raises(SystemExit) as exc_info:
            run_and_exit(no_handlers())
        assert exc_info.value.code == EXIT_NO_HANDLERS
