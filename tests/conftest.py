"""Configuração do pytest para o projeto consoledi."""

import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

_HOST_ENV_VARS = (
    "CONSOLEDI_ENVIRONMENT",
    "CONSOLEDI_SERVICE_NAME",
    "CONSOLEDI_SECRETS_FILE",
    "CONSOLEDI_CONTENT_ROOT",
    "CONSOLEDI_SETTINGS_BASENAME",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_host_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Evita que settings/secrets reais da máquina vazem para os testes."""
    from consoledi.config.settings import get_host_settings

    for name in _HOST_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("CONSOLEDI_SECRETS_FILE", str(tmp_path / "secrets.yaml"))
    get_host_settings.cache_clear()
    yield
    get_host_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logger() -> Iterator[None]:
    """configure_logging substitui os handlers do root; restaura após o teste."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
