"""Decorator de metadados de menu.

Uso:
    @main_menu("Importar clientes", sort_order=10)
    class ImportCustomers:
        def __init__(self, db: Database) -> None: ...

        async def run(self) -> None: ...
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from consoledi.menu.models import MenuMetadata

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T", bound=type)

MENU_METADATA_ATTR = "__main_menu__"


def main_menu(name: str, *, sort_order: int = 0) -> Callable[[T], T]:
    """Marca a classe como opção do menu principal.

    Args:
        name: Nome exibido no menu
        sort_order: Ordem de exibição (menor primeiro; empate por nome)

    Raises:
        ValueError: Se name for vazio.
    """
    if not name:
        raise ValueError("Nome da opção de menu não pode ser vazio")
    metadata = MenuMetadata(name=name, sort_order=sort_order)

    def decorator(cls: T) -> T:
        setattr(cls, MENU_METADATA_ATTR, metadata)
        return cls

    return decorator


def get_menu_metadata(cls: type) -> MenuMetadata | None:
    """Retorna os metadados declarados diretamente na classe.

    Subclasses de uma classe decorada não herdam a opção de menu.
    """
    value = vars(cls).get(MENU_METADATA_ATTR)
    return value if isinstance(value, MenuMetadata) else None
