"""Exceções de domínio do host de console.

Somente HandlerInvocationError é recuperável, e apenas em sessões de menu
em loop. As demais encerram o processo.
"""

from __future__ import annotations


class ConsoleDIError(RuntimeError):
    """Base para falhas do host de console."""


class NoHandlersFoundError(ConsoleDIError):
    """Nenhum handler com metadados de menu e ação executável foi encontrado."""


class HandlerInvocationError(ConsoleDIError):
    """Falha ao executar a ação de um handler despachado.

    A exceção original fica disponível em ``__cause__``.
    """

    def __init__(self, handler_name: str) -> None:
        super().__init__(f"Falha ao executar o handler '{handler_name}'")
        self.handler_name = handler_name


class ResourceScopeError(ConsoleDIError):
    """Falha ao criar ou liberar um escopo de recursos."""


class ServiceResolutionError(ConsoleDIError):
    """O container não conseguiu construir o serviço solicitado."""


class ConfigurationError(ConsoleDIError):
    """Fonte de configuração obrigatória ausente ou inválida."""
