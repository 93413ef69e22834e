"""Protocolos e contratos do core do host de console."""

from .container import ServiceProviderProtocol, ServiceScopeProtocol
from .menu_option import MenuOption

__all__ = [
    "MenuOption",
    "ServiceProviderProtocol",
    "ServiceScopeProtocol",
]
