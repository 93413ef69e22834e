"""Testes para MenuRegistry (registro explícito)."""

from __future__ import annotations

import pytest

from consoledi.errors import NoHandlersFoundError
from consoledi.menu import InvocationKind, MenuRegistry, main_menu
from tests.fakes.fake_container import FakeScope


class Report:
    def __init__(self, title: str = "padrão") -> None:
        self.title = title
        self.ran = False

    def run(self) -> None:
        self.ran = True


class Cleanup:
    async def run(self) -> None:
        return None


class NotExecutable:
    pass


@main_menu("Decorado", sort_order=5)
class Decorated:
    def run(self) -> None:
        return None


class TestMenuRegistry:
    """Testes para MenuRegistry."""

    def test_add_resolves_kind_when_omitted(self) -> None:
        """kind omitido é detectado no registro."""
        registry = MenuRegistry().add(Cleanup, "Limpeza")
        (descriptor,) = registry.descriptors()
        assert descriptor.kind is InvocationKind.METHOD_ASYNC

    def test_explicit_kind_is_kept(self) -> None:
        """kind explícito é usado sem inspeção."""
        registry = MenuRegistry().add(Report, "Relatório", kind=InvocationKind.METHOD_SYNC)
        assert registry.descriptors()[0].kind is InvocationKind.METHOD_SYNC

    @pytest.mark.asyncio
    async def test_factory_builds_instance(self) -> None:
        """Factory explícita recebe o escopo e constrói o handler."""
        built: list[Report] = []

        def factory(_scope: object) -> Report:
            report = Report("mensal")
            built.append(report)
            return report

        registry = MenuRegistry().add(Report, "Relatório", factory=factory)
        scope = FakeScope()

        outcome = await registry.descriptors()[0].action(scope)

        assert outcome.ok
        assert built[0].ran
        assert built[0].title == "mensal"
        assert scope.created == []

    def test_descriptors_are_ordered(self) -> None:
        """Descritores saem ordenados por (ordem, nome)."""
        registry = (
            MenuRegistry()
            .add(Report, "Relatório", sort_order=1)
            .add(Cleanup, "Limpeza", sort_order=1)
            .add_types([Decorated])
        )
        assert [d.name for d in registry.descriptors()] == ["Limpeza", "Relatório", "Decorado"]

    def test_duplicate_add_rejected(self) -> None:
        """Mesmo handler registrado duas vezes levanta ValueError."""
        registry = MenuRegistry().add(Report, "Relatório")
        with pytest.raises(ValueError, match="já registrado"):
            registry.add(Report, "Outro nome")

    def test_add_types_skips_already_registered(self) -> None:
        """Registro em lote não duplica handler já registrado."""
        registry = MenuRegistry().add(Decorated, "Nome explícito").add_types([Decorated])
        assert len(registry) == 1
        assert registry.descriptors()[0].name == "Nome explícito"

    def test_not_executable_rejected(self) -> None:
        """Registro explícito de handler sem ação levanta TypeError."""
        with pytest.raises(TypeError, match="não expõe ação executável"):
            MenuRegistry().add(NotExecutable, "Nada")

    def test_empty_name_rejected(self) -> None:
        """Nome vazio levanta ValueError."""
        with pytest.raises(ValueError):
            MenuRegistry().add(Report, "")

    def test_empty_registry_raises(self) -> None:
        """Registro vazio levanta NoHandlersFoundError."""
        with pytest.raises(NoHandlersFoundError):
            MenuRegistry().descriptors()

    def test_add_module_by_name(self) -> None:
        """add_module aceita nome de módulo."""
        registry = MenuRegistry().add_module("consoledi.demo.menu_app")
        assert [d.name for d in registry.descriptors()] == ["App1", "App2"]
        assert len(registry) == 2
