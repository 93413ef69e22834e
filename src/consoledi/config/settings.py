"""Settings do próprio host de console.

Valores lidos de variáveis de ambiente antes de montar a configuração
em camadas da aplicação (arquivos, secrets, env, CLI).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

DEFAULT_ENVIRONMENT = "Production"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_SERVICE_NAME = "consoledi"
DEFAULT_SETTINGS_BASENAME = "appsettings"
HOST_ENV_PREFIX = "CONSOLEDI_"

_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class HostSettings:
    """Configurações do host.

    Attributes:
        environment: Nome do ambiente (Production, Development, ...)
        service_name: Nome da aplicação para logs
        log_level: Nível de log do processo
        content_root: Diretório onde ficam os arquivos appsettings.*
        settings_basename: Nome base dos arquivos de configuração
        secrets_file: Arquivo de secrets local (opcional)
    """

    environment: str = DEFAULT_ENVIRONMENT
    service_name: str = DEFAULT_SERVICE_NAME
    log_level: str = DEFAULT_LOG_LEVEL
    content_root: Path = Path()
    settings_basename: str = DEFAULT_SETTINGS_BASENAME
    secrets_file: Path | None = None

    def validate(self) -> list[str]:
        """Valida configurações do host.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.environment:
            errors.append("CONSOLEDI_ENVIRONMENT não pode ser vazio")

        if not self.service_name:
            errors.append("CONSOLEDI_SERVICE_NAME não pode ser vazio")

        if self.log_level.upper() not in _VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")

        return errors


def default_secrets_file(service_name: str) -> Path:
    """Caminho padrão do arquivo de secrets do usuário para a aplicação."""
    return Path.home() / ".consoledi" / "secrets" / f"{service_name}.yaml"


def _load_host_settings_from_env() -> HostSettings:
    """Carrega HostSettings de variáveis de ambiente."""
    service_name = os.getenv(f"{HOST_ENV_PREFIX}SERVICE_NAME", DEFAULT_SERVICE_NAME)
    secrets = os.getenv(f"{HOST_ENV_PREFIX}SECRETS_FILE", "")
    return HostSettings(
        environment=os.getenv(f"{HOST_ENV_PREFIX}ENVIRONMENT", DEFAULT_ENVIRONMENT),
        service_name=service_name,
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        content_root=Path(os.getenv(f"{HOST_ENV_PREFIX}CONTENT_ROOT", "") or Path.cwd()),
        settings_basename=os.getenv(
            f"{HOST_ENV_PREFIX}SETTINGS_BASENAME", DEFAULT_SETTINGS_BASENAME
        ),
        secrets_file=Path(secrets) if secrets else default_secrets_file(service_name),
    )


@lru_cache(maxsize=1)
def get_host_settings() -> HostSettings:
    """Retorna instância cacheada de HostSettings."""
    return _load_host_settings_from_env()
