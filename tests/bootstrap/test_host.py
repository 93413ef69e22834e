"""Testes para os pontos de entrada run_async e run_main_menu_async."""

from __future__ import annotations

import io
import sys
from typing import TYPE_CHECKING

import pytest

from consoledi import bootstrap
from consoledi.bootstrap import HostBuilder, resolve_handlers
from consoledi.config import HostSettings
from consoledi.errors import HandlerInvocationError, NoHandlersFoundError
from consoledi.menu import MenuRegistry, main_menu

if TYPE_CHECKING:
    from collections.abc import Sequence

    from consoledi.bootstrap import HostBuilderContext
    from consoledi.container import ServiceCollection

EVENTS: list[str] = []


class Database:
    instances = 0

    def __init__(self) -> None:
        Database.instances += 1
        self.id = Database.instances

    async def aclose(self) -> None:
        EVENTS.append(f"db{self.id}:closed")


@main_menu("Listar")
class ListItems:
    def __init__(self, db: Database) -> None:
        self._db = db

    def run(self) -> None:
        EVENTS.append(f"list:db{self._db.id}")


@main_menu("Falhar")
class Fail:
    async def run(self) -> None:
        raise LookupError("sem registro")


class Plain:
    def __init__(self, db: Database) -> None:
        self.db = db


def configure_services(_context: HostBuilderContext, services: ServiceCollection) -> None:
    services.add_scoped(Database)


def create_host_builder(args: Sequence[str]) -> HostBuilder:
    EVENTS.append("host_built")
    return HostBuilder(args, settings=HostSettings(), environ={}).configure_services(
        configure_services
    )


@pytest.fixture(autouse=True)
def _reset() -> None:
    EVENTS.clear()
    Database.instances = 0


class TestRunAsync:
    """Testes para o modo one-shot."""

    @pytest.mark.asyncio
    async def test_detected_action_runs_in_scope(self) -> None:
        """Handler roda uma vez e o escopo é liberado ao final."""
        await bootstrap.run_async([], create_host_builder, ListItems)
        assert EVENTS == ["host_built", "list:db1", "db1:closed"]

    @pytest.mark.asyncio
    async def test_custom_action_receives_instance(self) -> None:
        """Callback recebe a instância construída no escopo."""
        received: list[Plain] = []

        await bootstrap.run_async([], create_host_builder, Plain, received.append)

        assert received[0].db.id == 1
        assert EVENTS == ["host_built", "db1:closed"]

    @pytest.mark.asyncio
    async def test_failure_propagates_with_cause(self) -> None:
        """Falha do handler propaga como HandlerInvocationError."""
        with pytest.raises(HandlerInvocationError) as exc_info:
            await bootstrap.run_async([], create_host_builder, Fail)

        assert exc_info.value.handler_name == "Falhar"
        assert isinstance(exc_info.value.__cause__, LookupError)

    @pytest.mark.asyncio
    async def test_not_executable_without_action_rejected(self) -> None:
        """Handler sem forma executável e sem callback levanta TypeError."""
        with pytest.raises(TypeError):
            await bootstrap.run_async([], create_host_builder, Plain)
        assert EVENTS == []


class TestResolveHandlers:
    """Testes para resolve_handlers."""

    def test_from_iterable(self) -> None:
        """Iterável de classes é escaneado."""
        assert [d.name for d in resolve_handlers([Fail, ListItems])] == ["Falhar", "Listar"]

    def test_from_registry(self) -> None:
        """MenuRegistry é usado como está."""
        registry = MenuRegistry().add(ListItems, "Via registro")
        assert resolve_handlers(registry) == registry.descriptors()

    def test_from_module_name(self) -> None:
        """Nome de módulo é importado e escaneado."""
        assert [d.name for d in resolve_handlers("consoledi.demo.menu_app")] == ["App1", "App2"]

    def test_from_module_object(self) -> None:
        """Módulo é escaneado pelas classes que define."""
        names = [d.name for d in resolve_handlers(sys.modules[__name__])]
        assert names == ["Falhar", "Listar"]

    def test_nothing_found(self) -> None:
        """Fonte sem handlers levanta NoHandlersFoundError."""
        with pytest.raises(NoHandlersFoundError):
            resolve_handlers([Plain])


class TestRunMainMenuAsync:
    """Testes para o modo menu."""

    @pytest.mark.asyncio
    async def test_each_selection_gets_own_scope(self) -> None:
        """Cada seleção tem seu próprio escopo e recursos."""
        stdout = io.StringIO()

        await bootstrap.run_main_menu_async(
            [],
            create_host_builder,
            "Ferramentas",
            handlers=[ListItems, Fail],
            stdin=io.StringIO("2\n2\n\n"),
            stdout=stdout,
        )

        assert EVENTS == [
            "host_built",
            "list:db1",
            "db1:closed",
            "list:db2",
            "db2:closed",
        ]
        assert stdout.getvalue().startswith("Ferramentas\n1. Falhar\n2. Listar\n")

    @pytest.mark.asyncio
    async def test_failure_in_loop_does_not_end_session(self) -> None:
        """Falha de handler em loop é relatada e a sessão segue."""
        stdout = io.StringIO()

        await bootstrap.run_main_menu_async(
            [],
            create_host_builder,
            handlers=[ListItems, Fail],
            stdin=io.StringIO("1\n2\n\n"),
            stdout=stdout,
        )

        assert "LookupError: sem registro" in stdout.getvalue()
        assert EVENTS == ["host_built", "list:db1", "db1:closed"]

    @pytest.mark.asyncio
    async def test_registry_source(self) -> None:
        """MenuRegistry com factory explícita."""
        registry = MenuRegistry().add(
            ListItems, "Via registro", factory=lambda scope: ListItems(scope.get_required(Database))
        )
        stdout = io.StringIO()

        await bootstrap.run_main_menu_async(
            [],
            create_host_builder,
            handlers=registry,
            stdin=io.StringIO("1\n\n"),
            stdout=stdout,
        )

        assert stdout.getvalue().startswith("1. Via registro\n")
        assert "list:db1" in EVENTS

    @pytest.mark.asyncio
    async def test_no_handlers_before_host_is_built(self) -> None:
        """Sem handlers, nada é exibido e o host não é construído."""
        stdout = io.StringIO()

        with pytest.raises(NoHandlersFoundError):
            await bootstrap.run_main_menu_async(
                [], create_host_builder, handlers=[Plain], stdout=stdout
            )

        assert stdout.getvalue() == ""
        assert EVENTS == []

    def test_sync_wrapper(self) -> None:
        """run_main_menu executa a versão assíncrona."""
        stdout = io.StringIO()

        bootstrap.run_main_menu(
            [],
            create_host_builder,
            handlers=[ListItems],
            stdin=io.StringIO("1\n\n"),
            stdout=stdout,
        )

        assert EVENTS == ["host_built", "list:db1", "db1:closed"]
