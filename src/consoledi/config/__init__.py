"""Configuração do host: fontes em camadas, settings e logging."""

from consoledi.config.configuration import Configuration, ConfigurationBuilder
from consoledi.config.settings import HostSettings, get_host_settings

__all__ = [
    "Configuration",
    "ConfigurationBuilder",
    "HostSettings",
    "get_host_settings",
]
