"""Demonstração one-shot: número aleatório via injeção de dependências.

Uso:
    python -m consoledi.demo.console_app --Config:Seed=42
"""

from __future__ import annotations

import random
import sys
from typing import TYPE_CHECKING, NoReturn

from consoledi import bootstrap

if TYPE_CHECKING:
    from collections.abc import Sequence

    from consoledi.bootstrap import HostBuilder, HostBuilderContext
    from consoledi.config import Configuration
    from consoledi.container import ServiceCollection


class App:
    """Aplicação principal; recebe serviços pelo construtor."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    async def run(self) -> None:
        print(f"Generating a random number via Dependency Injection: {self._rng.randint(1, 99)}")


def create_random(configuration: Configuration) -> random.Random:
    """Random com seed de ``Config:Seed`` quando for um inteiro válido."""
    seed = configuration.get("Config:Seed")
    try:
        return random.Random(int(seed))
    except (TypeError, ValueError):
        return random.Random()


def configure_services(context: HostBuilderContext, services: ServiceCollection) -> None:
    # Registre aqui os serviços com lifetime scoped (conexões, sessões de banco)
    services.add_scoped(random.Random, factory=lambda _: create_random(context.configuration))


def create_host_builder(args: Sequence[str]) -> HostBuilder:
    return bootstrap.create_host_builder(args, configure_services)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    args = list(sys.argv[1:] if argv is None else argv)
    bootstrap.run_and_exit(
        bootstrap.run_async(args, create_host_builder, App, lambda app: app.run())
    )


if __name__ == "__main__":
    main()
