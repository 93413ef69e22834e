"""Configuração imutável em camadas.

A configuração é montada uma única vez na inicialização e passada
explicitamente para quem precisa dela (HostBuilderContext, container).

Uso:
    configuration = (
        ConfigurationBuilder()
        .add_file(Path("appsettings.yaml"))
        .add_environment_variables()
        .add_command_line(sys.argv[1:])
        .build()
    )
    seed = configuration.get("Config:Seed")
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

from consoledi.config.sources import (
    KEY_DELIMITER,
    load_command_line,
    load_environment,
    load_file,
    merge,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


class Configuration(Mapping[str, str]):
    """Mapeamento imutável de chaves de caminho para valores string.

    Chaves não diferenciam maiúsculas de minúsculas:
    ``config["config:seed"]`` e ``config["Config:Seed"]`` são equivalentes.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Mapping[str, str] | None = None) -> None:
        self._values: dict[str, tuple[str, str]] = {
            key.casefold(): (key, value) for key, value in (values or {}).items()
        }

    def __getitem__(self, key: str) -> str:
        try:
            return self._values[key.casefold()][1]
        except KeyError:
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[str]:
        return (original for original, _ in self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._values

    def __repr__(self) -> str:
        return f"Configuration({len(self)} keys)"

    def get_section(self, prefix: str) -> Configuration:
        """Retorna a subárvore sob ``prefix`` com as chaves relativas.

        Exemplo:
            Configuration({"Config:Seed": "1"}).get_section("Config")["Seed"]
        """
        folded = prefix.casefold().rstrip(KEY_DELIMITER) + KEY_DELIMITER
        return Configuration(
            {
                original[len(folded):]: value
                for key, (original, value) in self._values.items()
                if key.startswith(folded)
            }
        )

    def as_dict(self) -> dict[str, str]:
        """Cópia plana dos valores com a grafia original das chaves."""
        return dict(self._values.values())


class ConfigurationBuilder:
    """Acumula fontes de configuração em ordem crescente de prioridade."""

    def __init__(self) -> None:
        self._sources: list[Callable[[], Mapping[str, str]]] = []

    def add_file(self, path: Path | str, *, optional: bool = True) -> ConfigurationBuilder:
        """Adiciona arquivo YAML/JSON."""
        file_path = Path(path)
        self._sources.append(lambda: load_file(file_path, optional=optional))
        return self

    def add_environment_variables(
        self,
        prefix: str = "",
        environ: Mapping[str, str] | None = None,
    ) -> ConfigurationBuilder:
        """Adiciona variáveis de ambiente (``__`` separa níveis)."""
        self._sources.append(lambda: load_environment(environ, prefix))
        return self

    def add_command_line(self, args: Sequence[str] | None) -> ConfigurationBuilder:
        """Adiciona argumentos de linha de comando."""
        captured = list(args or [])
        self._sources.append(lambda: load_command_line(captured))
        return self

    def add_mapping(self, values: Mapping[str, str]) -> ConfigurationBuilder:
        """Adiciona valores em memória (útil em testes e defaults)."""
        captured = dict(values)
        self._sources.append(lambda: captured)
        return self

    def build(self) -> Configuration:
        """Lê todas as fontes e produz a Configuration final."""
        return Configuration(merge(source() for source in self._sources))
