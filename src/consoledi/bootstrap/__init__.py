"""Bootstrap do host de console — inicialização e wiring.

Uso:
    from consoledi import bootstrap

    def create_host_builder(args):
        return bootstrap.create_host_builder(args, configure_services)

    bootstrap.run_and_exit(bootstrap.run_main_menu_async(sys.argv[1:], create_host_builder))
"""

from consoledi.bootstrap.builder import (
    Host,
    HostBuilder,
    HostBuilderContext,
    HostEnvironment,
    create_host_builder,
)
from consoledi.bootstrap.entrypoint import (
    EXIT_FAILURE,
    EXIT_NO_HANDLERS,
    EXIT_OK,
    execute,
    run_and_exit,
)
from consoledi.bootstrap.host import (
    resolve_handlers,
    run,
    run_async,
    run_main_menu,
    run_main_menu_async,
)

__all__ = [
    "EXIT_FAILURE",
    "EXIT_NO_HANDLERS",
    "EXIT_OK",
    "Host",
    "HostBuilder",
    "HostBuilderContext",
    "HostEnvironment",
    "create_host_builder",
    "execute",
    "resolve_handlers",
    "run",
    "run_and_exit",
    "run_async",
    "run_main_menu",
    "run_main_menu_async",
]
