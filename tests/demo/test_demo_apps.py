"""Testes das aplicações de demonstração."""

from __future__ import annotations

import io
import random

import pytest

from consoledi import bootstrap
from consoledi.config import Configuration
from consoledi.demo import console_app, menu_app


def expected_number(seed: int) -> int:
    return random.Random(seed).randint(1, 99)


class TestConsoleApp:
    """Testes do one-shot com número aleatório."""

    def test_create_random_uses_seed(self) -> None:
        """Config:Seed inteiro gera sequência determinística."""
        rng = console_app.create_random(Configuration({"Config:Seed": "42"}))
        assert rng.randint(1, 99) == expected_number(42)

    def test_create_random_ignores_invalid_seed(self) -> None:
        """Seed inválido ou ausente não falha."""
        assert isinstance(console_app.create_random(Configuration({"Config:Seed": "x"})), random.Random)
        assert isinstance(console_app.create_random(Configuration()), random.Random)

    def test_main_prints_number_and_exits_zero(self, capsys: pytest.CaptureFixture[str]) -> None:
        """main imprime o número e encerra com 0."""
        with pytest.raises(SystemExit) as exc_info:
            console_app.main(["--Config:Seed=42"])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out == (
            f"Generating a random number via Dependency Injection: {expected_number(42)}\n"
        )


class TestMenuApp:
    """Testes do menu de demonstração."""

    @pytest.mark.asyncio
    async def test_menu_lists_and_runs_options(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Menu lista App1 e App2 e executa a escolha."""
        stdout = io.StringIO()

        await bootstrap.run_main_menu_async(
            ["--Config:Seed=7"],
            menu_app.create_host_builder,
            menu_app.MENU_TITLE,
            handlers=menu_app,
            stdin=io.StringIO("2\n1\n\n"),
            stdout=stdout,
        )

        assert stdout.getvalue().startswith(
            "Demonstration console app with menu\n1. App1\n2. App2\n"
        )
        assert capsys.readouterr().out == (
            "This is an alternate program\n"
            f"Generating a random number via Dependency Injection: {expected_number(7)}\n"
        )

    def test_main_empty_input_exits_zero(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Entrada vazia encerra o menu com exit code 0."""
        monkeypatch.setattr("sys.stdin", io.StringIO("\n"))

        with pytest.raises(SystemExit) as exc_info:
            menu_app.main([])

        assert exc_info.value.code == 0
        assert capsys.readouterr().out == (
            "Demonstration console app with menu\n1. App1\n2. App2\n"
        )
