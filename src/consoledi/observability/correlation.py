"""Gerenciamento do invocation_id de cada despacho do menu.

Cada escopo de invocação recebe um ID próprio, injetado em todos os logs
emitidos enquanto o handler executa. Usa ContextVar para ser async-safe.

Uso:
    token = set_invocation_id()
    try:
        # executar handler
    finally:
        reset_invocation_id(token)
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar, Token

_invocation_id: ContextVar[str] = ContextVar("invocation_id", default="")


def get_invocation_id() -> str:
    """Retorna o invocation_id do contexto atual (ou string vazia)."""
    return _invocation_id.get()


def set_invocation_id(invocation_id: str | None = None) -> Token[str]:
    """Define o invocation_id no contexto atual.

    Args:
        invocation_id: ID a definir. Se None, gera um novo UUID.

    Returns:
        Token para reset posterior via reset_invocation_id().
    """
    value = invocation_id or generate_invocation_id()
    return _invocation_id.set(value)


def reset_invocation_id(token: Token[str]) -> None:
    """Restaura o invocation_id ao valor anterior."""
    _invocation_id.reset(token)


def generate_invocation_id() -> str:
    """Gera um novo invocation_id (UUID v4)."""
    return str(uuid.uuid4())
