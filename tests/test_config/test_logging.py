"""Testes para config.logging.

Cobre: configure_logging, get_logger, InvocationContextFilter,
create_json_formatter.
"""

from __future__ import annotations

import io
import json
import logging
import sys
from unittest.mock import MagicMock

import pytest

from consoledi.config.logging import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    InvocationContextFilter,
    configure_logging,
    create_json_formatter,
    get_logger,
)
from consoledi.config.logging.config import DEFAULT_SERVICE_NAME, VALID_LOG_LEVELS


def make_record(msg: str = "msg", level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=None,
    )


class TestConfigureLogging:
    """Testes para configure_logging."""

    def test_configure_logging_default_level(self) -> None:
        """Nível padrão é WARNING (menu em stdout fica limpo)."""
        configure_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_configure_logging_case_insensitive(self) -> None:
        """Nível é aceito em minúsculas."""
        configure_logging(level="debug")
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_logging_invalid_level_raises(self) -> None:
        """Nível inválido levanta ValueError."""
        with pytest.raises(ValueError, match="Nível de log inválido"):
            configure_logging(level="INVALID")

    def test_configure_logging_replaces_handlers(self) -> None:
        """configure_logging substitui handlers existentes."""
        root = logging.getLogger()
        root.handlers = [logging.NullHandler(), logging.NullHandler()]
        configure_logging()
        assert len(root.handlers) == 1

    def test_handler_writes_to_stderr_with_context_filter(self) -> None:
        """Handler escreve em stderr e carrega o filtro de contexto."""
        configure_logging(invocation_id_getter=lambda: "inv-1")
        (handler,) = logging.getLogger().handlers
        assert isinstance(handler, logging.StreamHandler)
        assert handler.stream is sys.stderr
        assert any(isinstance(f, InvocationContextFilter) for f in handler.filters)

    def test_constants(self) -> None:
        """Constantes de níveis e nome padrão."""
        assert {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"} == VALID_LOG_LEVELS
        assert DEFAULT_SERVICE_NAME == "consoledi"


class TestGetLogger:
    """Testes para get_logger."""

    def test_same_name_returns_same_instance(self) -> None:
        """Mesmo nome retorna mesma instância."""
        assert get_logger("same.module") is get_logger("same.module")
        assert get_logger("same.module").name == "same.module"


class TestInvocationContextFilter:
    """Testes para InvocationContextFilter."""

    def test_filter_adds_invocation_id_and_service(self) -> None:
        """Filter adiciona invocation_id do getter e service."""
        filter_ = InvocationContextFilter("my_app", lambda: "inv-123")
        record = make_record()
        assert filter_.filter(record) is True
        assert record.invocation_id == "inv-123"
        assert record.service == "my_app"

    def test_filter_preserves_explicit_invocation_id(self) -> None:
        """Filter preserva invocation_id passado via extra."""
        filter_ = InvocationContextFilter("svc", lambda: "from-getter")
        record = make_record()
        record.invocation_id = "explicit-id"
        filter_.filter(record)
        assert record.invocation_id == "explicit-id"

    def test_filter_calls_getter_per_record(self) -> None:
        """Getter é consultado a cada record."""
        getter = MagicMock(return_value="inv-9")
        filter_ = InvocationContextFilter("svc", getter)
        filter_.filter(make_record())
        filter_.filter(make_record())
        assert getter.call_count == 2

    def test_filter_uses_empty_string_when_no_getter(self) -> None:
        """Sem getter, invocation_id é string vazia."""
        record = make_record()
        InvocationContextFilter("svc").filter(record)
        assert record.invocation_id == ""


class TestCreateJsonFormatter:
    """Testes para create_json_formatter e constantes."""

    def test_required_fields(self) -> None:
        """Campos obrigatórios e renomeações."""
        assert {"asctime", "levelname", "name", "message", "invocation_id", "service"} == (
            REQUIRED_LOG_FIELDS
        )
        assert FIELD_RENAME_MAP == {"levelname": "level", "name": "logger"}

    def test_formats_record_as_json(self) -> None:
        """Record vira JSON com campos renomeados e extras."""
        record = make_record("handler_completed")
        record.invocation_id = "abc-123"
        record.service = "consoledi"
        record.handler = "App1"

        payload = json.loads(create_json_formatter().format(record))

        assert payload["message"] == "handler_completed"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "test"
        assert payload["invocation_id"] == "abc-123"
        assert payload["handler"] == "App1"


class TestLoggingIntegration:
    """Fluxo completo: configure, get_logger, log."""

    def test_full_logging_flow(self) -> None:
        """Log passa pelo filtro e sai em JSON."""
        configure_logging(level="INFO", service_name="integration", invocation_id_getter=lambda: "x")
        (handler,) = logging.getLogger().handlers
        stream = io.StringIO()
        handler.setStream(stream)

        get_logger("integration.test").info("menu_session_started", extra={"options": 2})

        payload = json.loads(stream.getvalue())
        assert payload["service"] == "integration"
        assert payload["invocation_id"] == "x"
        assert payload["options"] == 2
