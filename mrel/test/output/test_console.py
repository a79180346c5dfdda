"""Tests for mrel.output.console module."""

from __future__ import annotations

import pytest

from mrel.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()

        console.step("Publishing @remotion/cli")
        console.success("Publishing @remotion/cli")
        console.warning("build exited with code 1, continuing")
        console.error("boom")
        console.header("1. Bump version")

        assert console.messages == [
            "> Publishing @remotion/cli...",
            "OK Publishing @remotion/cli",
            "warning: build exited with code 1, continuing",
            "error: boom",
            "1. Bump version",
        ]
        assert console.count(Style.STEP) == 1
        assert console.has_warning()
        assert console.has_error()

    def test_find_and_clear(self) -> None:
        console = MockConsole()
        console.info("Releasing 4.0.1")
        console.print("bun install", Style.DIM)

        assert len(console.find("4.0.1")) == 1
        assert "bun install" in console.text

        console.clear()
        assert console.messages == []
        assert not console.has_error()

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.newline()


def test_rich_console_escapes_markup(capsys: pytest.CaptureFixture[str]) -> None:
    console = RichConsole()

    console.success("Tagging @remotion/cli@4.0.1 as latest")
    console.print("[bold]literal[/bold]", Style.DIM)

    out = capsys.readouterr().out
    assert "Tagging @remotion/cli@4.0.1 as latest" in out
    assert "[bold]literal[/bold]" in out


def test_style_str() -> None:
    assert str(Style.WARNING) == "warning"
