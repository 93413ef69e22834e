"""Motor de descoberta e despacho do menu principal."""

from consoledi.menu.adapter import (
    CONVENTIONAL_METHOD,
    build_action,
    build_callable_action,
    resolve_invocation_kind,
)
from consoledi.menu.metadata import get_menu_metadata, main_menu
from consoledi.menu.models import (
    HandlerDescriptor,
    InvocationKind,
    InvocationOutcome,
    MenuMetadata,
    MenuState,
)
from consoledi.menu.ordering import order_descriptors
from consoledi.menu.registry import MenuRegistry
from consoledi.menu.scanner import scan_handlers, scan_module, scan_package
from consoledi.menu.scope import ScopeManager
from consoledi.menu.session import MenuSession, parse_selection

__all__ = [
    "CONVENTIONAL_METHOD",
    "HandlerDescriptor",
    "InvocationKind",
    "InvocationOutcome",
    "MenuMetadata",
    "MenuRegistry",
    "MenuSession",
    "MenuState",
    "ScopeManager",
    "build_action",
    "build_callable_action",
    "get_menu_metadata",
    "main_menu",
    "order_descriptors",
    "parse_selection",
    "resolve_invocation_kind",
    "scan_handlers",
    "scan_module",
    "scan_package",
]
