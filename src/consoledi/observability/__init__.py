"""Observabilidade — identificador de invocação para logs estruturados.

Uso:
    from consoledi.observability import get_invocation_id, set_invocation_id
"""

from consoledi.observability.correlation import (
    generate_invocation_id,
    get_invocation_id,
    reset_invocation_id,
    set_invocation_id,
)

__all__ = [
    "generate_invocation_id",
    "get_invocation_id",
    "reset_invocation_id",
    "set_invocation_id",
]
