"""Console output abstraction.

The pipeline never prints directly: the orchestrator holds a console and
hands it to every stage. ``RichConsole`` renders color-coded progress lines
for operators, ``MockConsole`` records them so tests run silently.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()  # green, step or stage completed
    ERROR = auto()  # red, fatal halt
    WARNING = auto()  # yellow, tolerated failure
    INFO = auto()  # cyan
    STEP = auto()  # blue, a step is about to run
    DIM = auto()  # command lines
    BOLD = auto()
    HEADER = auto()  # numbered stage header

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for operator-facing output.

    Stages and services only see this protocol, so the same pipeline code
    drives a Rich terminal in production and a recording console in tests.
    """

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling.

        Args:
            message: Plain text; never interpreted as markup.
            style: How to render it.
        """
        ...

    def success(self, message: str) -> None:
        """Report a completed step or stage."""
        ...

    def error(self, message: str) -> None:
        """Report a fatal error."""
        ...

    def warning(self, message: str) -> None:
        """Report a tolerated failure; the release continues."""
        ...

    def info(self, message: str) -> None:
        """Print an informational line."""
        ...

    def step(self, message: str) -> None:
        """Announce a step that is about to run."""
        ...

    def header(self, message: str) -> None:
        """Print a numbered stage header."""
        ...

    def newline(self) -> None:
        """Print an empty line."""
        ...


class RichConsole:
    """Console implementation using Rich library.

    Messages are escaped before being wrapped in style markup, so registry
    specs such as ``@remotion/cli@4.0.1`` print verbatim.
    """

    def __init__(self) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(highlight=False)
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.STEP: "blue",
            Style.DIM: "dim",
            Style.BOLD: "bold",
            Style.HEADER: "yellow bold",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def success(self, message: str) -> None:
        self._console.print(f"[green]OK[/green] {_escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]warning:[/yellow] {_escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def step(self, message: str) -> None:
        self._console.print(f"[blue]>[/blue] {_escape(message)}...")

    def header(self, message: str) -> None:
        self._console.print(f"\n[yellow bold]{_escape(message)}[/yellow bold]")

    def newline(self) -> None:
        self._console.print()


def _escape(message: str) -> str:
    # Package names like "@remotion/cli@4.0.1" must not be read as markup.
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing.

    Records every line with its style instead of printing, so tests can
    assert on what an operator would have seen.
    """

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"OK {message}", Style.SUCCESS))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def step(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"> {message}...", Style.STEP))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    # Test helpers

    def clear(self) -> None:
        """Forget everything captured so far."""
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        """Captured lines, in order, without styles."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Captured lines joined with newlines."""
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Records whose message contains substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
