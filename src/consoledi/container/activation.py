"""Inspeção de construtores e descarte de instâncias."""

from __future__ import annotations

import inspect
import typing
from dataclasses import dataclass
from typing import Any

from consoledi.errors import ServiceResolutionError

_INJECTABLE_KINDS = (
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


@dataclass(frozen=True)
class ConstructorParameter:
    """Parâmetro de construtor candidato a injeção."""

    name: str
    annotation: Any
    has_default: bool


def constructor_parameters(implementation: type) -> list[ConstructorParameter]:
    """Lista os parâmetros injetáveis do construtor de implementation.

    Raises:
        ServiceResolutionError: Se as anotações não puderem ser avaliadas
            ou um parâmetro obrigatório não tiver anotação.
    """
    try:
        signature = inspect.signature(implementation)
    except (TypeError, ValueError):
        # Tipos builtin sem assinatura introspectável: construtor sem argumentos
        return []

    try:
        hints = typing.get_type_hints(implementation.__init__)
    except Exception as exc:
        raise ServiceResolutionError(
            f"Não foi possível avaliar as anotações de {implementation.__qualname__}"
        ) from exc

    parameters: list[ConstructorParameter] = []
    for param in signature.parameters.values():
        if param.kind not in _INJECTABLE_KINDS:
            continue
        has_default = param.default is not inspect.Parameter.empty
        annotation = hints.get(param.name)
        if annotation is None and not has_default:
            raise ServiceResolutionError(
                f"Parâmetro '{param.name}' de {implementation.__qualname__} "
                "precisa de anotação de tipo para ser injetado"
            )
        parameters.append(ConstructorParameter(param.name, annotation, has_default))
    return parameters


def is_disposable(instance: Any) -> bool:
    """True se a instância expõe aclose() ou close()."""
    return callable(getattr(instance, "aclose", None)) or callable(
        getattr(instance, "close", None)
    )


async def dispose(instance: Any) -> None:
    """Descarta a instância, preferindo aclose() assíncrono."""
    aclose = getattr(instance, "aclose", None)
    if callable(aclose):
        await aclose()
        return
    close = getattr(instance, "close", None)
    if callable(close):
        result = close()
        if inspect.isawaitable(result):
            await result
