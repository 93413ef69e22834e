"""Configuração de logging estruturado.

Uso:
    from consoledi.config.logging import configure_logging, get_logger

    # No composition root (consoledi.bootstrap)
    configure_logging(level="WARNING", service_name="consoledi")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("handler_dispatched", extra={"handler": "App1"})

Campos obrigatórios em todo log:
- invocation_id
- service
- level
- logger
- message
- asctime
"""

from consoledi.config.logging.config import configure_logging, get_logger
from consoledi.config.logging.filters import InvocationContextFilter
from consoledi.config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "InvocationContextFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
]
