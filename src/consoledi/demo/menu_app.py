"""Demonstração do menu principal com duas opções.

Uso:
    python -m consoledi.demo.menu_app
"""

from __future__ import annotations

import random
import sys
from typing import TYPE_CHECKING, NoReturn

from consoledi import bootstrap
from consoledi.demo.console_app import configure_services
from consoledi.menu import main_menu
from consoledi.protocols import MenuOption

if TYPE_CHECKING:
    from collections.abc import Sequence

    from consoledi.bootstrap import HostBuilder

MENU_TITLE = "Demonstration console app with menu"


@main_menu("App1")
class App:
    def __init__(self, rng: random.Random) -> None:
        self._rng = rng

    async def run(self) -> None:
        print(f"Generating a random number via Dependency Injection: {self._rng.randint(1, 99)}")


@main_menu("App2")
class App2(MenuOption):
    async def run(self) -> None:
        print("This is an alternate program")


def create_host_builder(args: Sequence[str]) -> HostBuilder:
    return bootstrap.create_host_builder(args, configure_services)


def main(argv: Sequence[str] | None = None) -> NoReturn:
    args = list(sys.argv[1:] if argv is None else argv)
    bootstrap.run_and_exit(
        bootstrap.run_main_menu_async(
            args,
            create_host_builder,
            MENU_TITLE,
            handlers=sys.modules[__name__],
        )
    )


if __name__ == "__main__":
    main()
