"""Ordenação determinística das opções do menu."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from consoledi.menu.models import HandlerDescriptor


def sort_key(descriptor: HandlerDescriptor) -> tuple[int, str, str]:
    """(sort_order, nome, caminho da classe): ordem total."""
    handler = descriptor.handler_type
    return (
        descriptor.sort_order,
        descriptor.name,
        f"{handler.__module__}.{handler.__qualname__}",
    )


def order_descriptors(
    descriptors: Iterable[HandlerDescriptor],
) -> tuple[HandlerDescriptor, ...]:
    """Ordena por sort_order crescente e nome (case-sensitive)."""
    return tuple(sorted(descriptors, key=sort_key))
