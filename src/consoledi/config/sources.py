"""Fontes de configuração — arquivos, variáveis de ambiente e argumentos.

Toda fonte produz um dict plano de chaves no formato de caminho
(``"Config:Seed"``) para valores string. Estruturas aninhadas são
achatadas: mapeamentos viram ``A:B`` e listas viram ``A:0``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from consoledi.errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

logger = logging.getLogger(__name__)

KEY_DELIMITER = ":"
ENV_KEY_DELIMITER = "__"

_YAML_SUFFIXES = frozenset({".yaml", ".yml"})
_JSON_SUFFIXES = frozenset({".json"})


def flatten(data: Mapping[str, Any], prefix: str = "") -> dict[str, str]:
    """Achata estrutura aninhada em chaves de caminho.

    Args:
        data: Mapeamento (possivelmente aninhado) vindo de YAML/JSON
        prefix: Prefixo de caminho já acumulado

    Returns:
        Dict plano ``{"A:B": "valor"}``
    """
    flat: dict[str, str] = {}
    for key, value in data.items():
        path = f"{prefix}{KEY_DELIMITER}{key}" if prefix else str(key)
        flat.update(_flatten_value(value, path))
    return flat


def _flatten_value(value: Any, path: str) -> dict[str, str]:
    if isinstance(value, dict):
        return flatten(value, path)
    if isinstance(value, list):
        flat: dict[str, str] = {}
        for index, item in enumerate(value):
            flat.update(_flatten_value(item, f"{path}{KEY_DELIMITER}{index}"))
        return flat
    if value is None:
        return {path: ""}
    if isinstance(value, bool):
        # YAML/JSON booleans seguem a grafia usada nas variáveis de ambiente
        return {path: "true" if value else "false"}
    return {path: str(value)}


def load_file(path: Path, *, optional: bool = True) -> dict[str, str]:
    """Carrega arquivo de configuração YAML ou JSON.

    Args:
        path: Caminho do arquivo (.yaml, .yml ou .json)
        optional: Se True, arquivo ausente resulta em dict vazio

    Returns:
        Valores achatados do arquivo

    Raises:
        ConfigurationError: Arquivo obrigatório ausente, formato não suportado
            ou conteúdo que não é um mapeamento
    """
    if not path.is_file():
        if optional:
            logger.debug("config_file_skipped", extra={"path": str(path)})
            return {}
        raise ConfigurationError(f"Arquivo de configuração não encontrado: {path}")

    suffix = path.suffix.lower()
    try:
        with path.open("r", encoding="utf-8") as f:
            if suffix in _YAML_SUFFIXES:
                data = yaml.safe_load(f)
            elif suffix in _JSON_SUFFIXES:
                data = json.load(f)
            else:
                raise ConfigurationError(f"Formato de configuração não suportado: {path}")
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Arquivo de configuração inválido: {path}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Arquivo de configuração deve ser um mapeamento: {path}")

    logger.debug("config_file_loaded", extra={"path": str(path), "keys": len(data)})
    return flatten(data)


def find_settings_file(directory: Path, basename: str) -> Path | None:
    """Retorna o primeiro ``basename.{yaml,yml,json}`` existente em directory."""
    for suffix in (".yaml", ".yml", ".json"):
        candidate = directory / f"{basename}{suffix}"
        if candidate.is_file():
            return candidate
    return None


def load_environment(
    environ: Mapping[str, str] | None = None,
    prefix: str = "",
) -> dict[str, str]:
    """Lê variáveis de ambiente como configuração.

    ``Config__Seed`` vira ``Config:Seed``. Com prefix, somente variáveis
    que começam com ele são lidas, e o prefix é removido da chave.
    """
    source = os.environ if environ is None else environ
    prefix_folded = prefix.casefold()
    values: dict[str, str] = {}
    for name, value in source.items():
        if prefix and not name.casefold().startswith(prefix_folded):
            continue
        key = name[len(prefix):].replace(ENV_KEY_DELIMITER, KEY_DELIMITER)
        if key:
            values[key] = value
    return values


def load_command_line(args: Sequence[str] | None) -> dict[str, str]:
    """Interpreta argumentos de linha de comando como configuração.

    Formatos aceitos:
        --Key=Value, /Key=Value, Key=Value, --Key Value, /Key Value

    Argumentos sem valor associado são ignorados.
    """
    values: dict[str, str] = {}
    if not args:
        return values

    index = 0
    while index < len(args):
        arg = args[index]
        index += 1
        key, separator, value = _strip_switch(arg).partition("=")
        if separator:
            if key:
                values[key.replace(ENV_KEY_DELIMITER, KEY_DELIMITER)] = value
            continue
        if not _is_switch(arg) or not key:
            continue
        # Switch sem "=": o valor é o próximo argumento, desde que não seja outro switch
        if index < len(args) and not _starts_new_switch(args[index]):
            values[key.replace(ENV_KEY_DELIMITER, KEY_DELIMITER)] = args[index]
            index += 1
    return values


def _is_switch(arg: str) -> bool:
    return arg.startswith(("--", "/"))


def _starts_new_switch(arg: str) -> bool:
    # "/caminho" sozinho é valor (caminho POSIX); "/Key=Value" é switch
    return arg.startswith("--") or (arg.startswith("/") and "=" in arg)


def _strip_switch(arg: str) -> str:
    if arg.startswith("--"):
        return arg[2:]
    if arg.startswith("/"):
        return arg[1:]
    return arg


def merge(layers: Iterable[Mapping[str, str]]) -> dict[str, str]:
    """Mescla camadas em ordem crescente de prioridade (a última vence).

    Chaves são comparadas sem diferenciar maiúsculas; a grafia da camada
    de maior prioridade é mantida.
    """
    merged: dict[str, tuple[str, str]] = {}
    for layer in layers:
        for key, value in layer.items():
            merged[key.casefold()] = (key, value)
    return dict(merged.values())
