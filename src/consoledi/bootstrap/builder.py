"""HostBuilder — composition root do programa de console.

Monta, nesta ordem:
    1. Configuração do host (env ``CONSOLEDI_*`` + CLI) → ambiente
    2. Configuração da aplicação em camadas (prioridade crescente):
       appsettings → appsettings.<Ambiente> → secrets → env → CLI
    3. Logging estruturado
    4. Container de serviços (configure_services do chamador)

Uso:
    def configure_services(context: HostBuilderContext, services: ServiceCollection) -> None:
        services.add_scoped(Database)

    def create_host_builder(args: Sequence[str]) -> HostBuilder:
        return bootstrap.create_host_builder(args, configure_services)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import TYPE_CHECKING

from consoledi.config.configuration import Configuration, ConfigurationBuilder
from consoledi.config.logging import configure_logging
from consoledi.config.settings import HOST_ENV_PREFIX, HostSettings, get_host_settings
from consoledi.config.sources import find_settings_file
from consoledi.container import ServiceCollection, ServiceProvider
from consoledi.errors import ConfigurationError
from consoledi.observability import get_invocation_id

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from types import TracebackType

    ConfigureServices = Callable[["HostBuilderContext", ServiceCollection], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HostEnvironment:
    """Informações do ambiente de execução."""

    environment_name: str
    application_name: str
    content_root: Path

    @property
    def is_development(self) -> bool:
        """Retorna True se ambiente é Development."""
        return self.environment_name.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é Production."""
        return self.environment_name.lower() == "production"


@dataclass(frozen=True)
class HostBuilderContext:
    """Contexto entregue ao configure_services."""

    configuration: Configuration
    environment: HostEnvironment


class Host:
    """Host construído: configuração, ambiente e provider raiz.

    Descartar o host descarta os singletons do container.
    """

    __slots__ = ("configuration", "environment", "services")

    def __init__(
        self,
        configuration: Configuration,
        environment: HostEnvironment,
        services: ServiceProvider,
    ) -> None:
        self.configuration = configuration
        self.environment = environment
        self.services = services

    async def aclose(self) -> None:
        """Descarta o provider raiz."""
        await self.services.aclose()

    async def __aenter__(self) -> Host:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


class HostBuilder:
    """Builder do Host a partir de argumentos e variáveis de ambiente."""

    def __init__(
        self,
        args: Sequence[str] | None = None,
        *,
        settings: HostSettings | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Inicializa o builder.

        Args:
            args: Argumentos de linha de comando (maior prioridade)
            settings: Settings do host (padrão: lidas do ambiente)
            environ: Variáveis de ambiente (padrão: os.environ)
        """
        self._args = list(args or [])
        self._settings = settings or get_host_settings()
        self._environ = environ
        self._configure_services: list[ConfigureServices] = []
        self._validate_scopes = True
        self._validate_on_build = True
        self._setup_logging = True

    def configure_services(self, configure: ConfigureServices) -> HostBuilder:
        """Adiciona callback de registro de serviços."""
        self._configure_services.append(configure)
        return self

    def use_service_provider_options(
        self,
        *,
        validate_scopes: bool = True,
        validate_on_build: bool = True,
    ) -> HostBuilder:
        """Ajusta as validações do container."""
        self._validate_scopes = validate_scopes
        self._validate_on_build = validate_on_build
        return self

    def use_logging(self, enabled: bool = True) -> HostBuilder:
        """Liga/desliga a configuração de logging no build."""
        self._setup_logging = enabled
        return self

    def build(self) -> Host:
        """Constrói o Host.

        Raises:
            ConfigurationError: Settings do host ou fonte de configuração inválidas.
            ServiceResolutionError: Registros de serviço inválidos.
        """
        environment = self._build_environment()
        self._validate_settings(environment)
        configuration = self._build_configuration(environment)

        if self._setup_logging:
            configure_logging(
                level=configuration.get("Logging:LogLevel", self._settings.log_level),
                service_name=environment.application_name,
                invocation_id_getter=get_invocation_id,
            )

        context = HostBuilderContext(configuration=configuration, environment=environment)
        services = ServiceCollection()
        services.add_singleton(Configuration, instance=configuration)
        services.add_singleton(HostEnvironment, instance=environment)
        for configure in self._configure_services:
            configure(context, services)

        provider = services.build_provider(
            validate_scopes=self._validate_scopes,
            validate_on_build=self._validate_on_build,
        )
        logger.info(
            "host_built",
            extra={
                "environment": environment.environment_name,
                "services": len(services),
                "config_keys": len(configuration),
            },
        )
        return Host(configuration, environment, provider)

    def _build_environment(self) -> HostEnvironment:
        host_configuration = (
            ConfigurationBuilder()
            .add_environment_variables(HOST_ENV_PREFIX, self._environ)
            .add_command_line(self._args)
            .build()
        )
        return HostEnvironment(
            environment_name=host_configuration.get("environment", self._settings.environment),
            application_name=host_configuration.get(
                "applicationName", self._settings.service_name
            ),
            content_root=Path(
                host_configuration.get("contentRoot", str(self._settings.content_root))
            ),
        )

    def _validate_settings(self, environment: HostEnvironment) -> None:
        # Valida os valores efetivos, já com os overrides de env/CLI do host
        effective = replace(
            self._settings,
            environment=environment.environment_name,
            service_name=environment.application_name,
        )
        errors = effective.validate()
        if errors:
            details = "\n".join(f"- {error}" for error in errors)
            raise ConfigurationError(f"Settings do host inválidas:\n{details}")

    def _build_configuration(self, environment: HostEnvironment) -> Configuration:
        builder = ConfigurationBuilder()
        basename = self._settings.settings_basename

        base_file = find_settings_file(environment.content_root, basename)
        if base_file is not None:
            builder.add_file(base_file)
        env_file = find_settings_file(
            environment.content_root, f"{basename}.{environment.environment_name}"
        )
        if env_file is not None:
            builder.add_file(env_file)
        if self._settings.secrets_file is not None:
            builder.add_file(self._settings.secrets_file, optional=True)

        return (
            builder.add_environment_variables(environ=self._environ)
            .add_command_line(self._args)
            .build()
        )


def create_host_builder(
    args: Sequence[str] | None,
    configure_services: ConfigureServices,
) -> HostBuilder:
    """Cria HostBuilder com a configuração em camadas padrão."""
    return HostBuilder(args).configure_services(configure_services)
