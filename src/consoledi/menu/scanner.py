"""Scanner de handlers de menu.

Filtra classes concretas com metadados @main_menu e forma de execução
reconhecida. Classes sem metadados são ignoradas silenciosamente.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import TYPE_CHECKING

from consoledi.errors import NoHandlersFoundError
from consoledi.menu.adapter import build_action, resolve_invocation_kind
from consoledi.menu.metadata import get_menu_metadata
from consoledi.menu.models import HandlerDescriptor
from consoledi.menu.ordering import order_descriptors

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

logger = logging.getLogger(__name__)


def iter_descriptors(candidates: Iterable[object]) -> Iterator[HandlerDescriptor]:
    """Gera descritores para os candidatos que qualificam (sem ordenar)."""
    seen: set[type] = set()
    for candidate in candidates:
        if not inspect.isclass(candidate) or candidate in seen:
            continue
        seen.add(candidate)

        if inspect.isabstract(candidate):
            continue
        metadata = get_menu_metadata(candidate)
        if metadata is None:
            continue

        kind = resolve_invocation_kind(candidate)
        if kind is None:
            logger.debug(
                "menu_handler_not_executable",
                extra={"handler": candidate.__qualname__, "menu_name": metadata.name},
            )
            continue

        yield HandlerDescriptor(
            handler_type=candidate,
            name=metadata.name,
            sort_order=metadata.sort_order,
            kind=kind,
            action=build_action(candidate, kind),
        )


def scan_handlers(candidates: Iterable[object]) -> tuple[HandlerDescriptor, ...]:
    """Escaneia candidatos e retorna os descritores ordenados.

    Raises:
        NoHandlersFoundError: Se nenhum candidato qualificar.
    """
    descriptors = order_descriptors(iter_descriptors(candidates))
    if not descriptors:
        raise NoHandlersFoundError("Nenhum handler de menu encontrado")
    logger.debug("menu_handlers_scanned", extra={"count": len(descriptors)})
    return descriptors


def module_classes(module: ModuleType) -> list[type]:
    """Classes definidas no próprio módulo (ignora as importadas)."""
    return [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__
    ]


def package_classes(package: ModuleType | str) -> list[type]:
    """Importa o pacote e todos os submódulos, retornando suas classes."""
    root = importlib.import_module(package) if isinstance(package, str) else package
    classes = module_classes(root)
    search_path = getattr(root, "__path__", None)
    if search_path is None:
        return classes

    for info in pkgutil.walk_packages(search_path, prefix=f"{root.__name__}."):
        module = importlib.import_module(info.name)
        classes.extend(module_classes(module))
    return classes


def scan_module(module: ModuleType) -> tuple[HandlerDescriptor, ...]:
    """Escaneia as classes definidas em um módulo."""
    return scan_handlers(module_classes(module))


def scan_package(package: ModuleType | str) -> tuple[HandlerDescriptor, ...]:
    """Escaneia um pacote inteiro, incluindo subpacotes."""
    return scan_handlers(package_classes(package))
