"""consoledi — host de console com injeção de dependências e menu principal.

Uso:
    from consoledi import bootstrap, main_menu

    @main_menu("Importar clientes")
    class ImportCustomers:
        def __init__(self, db: Database) -> None: ...

        async def run(self) -> None: ...
"""

from consoledi.errors import (
    ConsoleDIError,
    HandlerInvocationError,
    NoHandlersFoundError,
    ResourceScopeError,
)
from consoledi.menu import InvocationKind, MenuRegistry, main_menu
from consoledi.protocols import MenuOption

__version__ = "0.1.0"

__all__ = [
    "ConsoleDIError",
    "HandlerInvocationError",
    "InvocationKind",
    "MenuOption",
    "MenuRegistry",
    "NoHandlersFoundError",
    "ResourceScopeError",
    "main_menu",
]
