"""Console output abstraction.

Rendering code talks to a ConsoleProtocol so that the report printer can be
exercised in tests with MockConsole while the CLI uses Rich.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    PASS = auto()  # Green badge
    WARN = auto()  # Yellow badge
    FAIL = auto()  # Red badge
    DIM = auto()  # Details and remediation notes
    BOLD = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def badge(self, label: str, message: str, style: Style) -> None:
        """Print a message prefixed by a styled status badge, e.g. "[PASS] git"."""
        ...

    def header(self, message: str) -> None:
        """Print a section header."""
        ...

    def newline(self) -> None:
        """Print an empty line."""
        ...


class RichConsole:
    """Console implementation using Rich.

    Messages are printed without markup interpretation: they carry paths and
    PATH listings that may contain square brackets.
    """

    _STYLE_MAP = {
        Style.DEFAULT: "",
        Style.PASS: "green bold",
        Style.WARN: "yellow bold",
        Style.FAIL: "red bold",
        Style.DIM: "dim",
        Style.BOLD: "bold",
        Style.HEADER: "blue bold",
    }

    def __init__(self, console: Console | None = None) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = console if console is not None else Console(highlight=False)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._STYLE_MAP.get(style, "")
        self._console.print(message, style=rich_style or None, markup=False)

    def badge(self, label: str, message: str, style: Style) -> None:
        from rich.text import Text

        text = Text()
        text.append(f"[{label}]", style=self._STYLE_MAP.get(style, ""))
        text.append(f" {message}")
        self._console.print(text)

    def header(self, message: str) -> None:
        self._console.print()
        self._console.print(message, style=self._STYLE_MAP[Style.HEADER], markup=False)

    def newline(self) -> None:
        self._console.print()


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    """Factory for empty outputs list (helps type inference)."""
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def badge(self, label: str, message: str, style: Style) -> None:
        self.outputs.append(OutputRecord(f"[{label}] {message}", style))

    def header(self, message: str) -> None:
        self.outputs.append(OutputRecord(message, Style.HEADER))

    def newline(self) -> None:
        self.outputs.append(OutputRecord("", Style.DEFAULT))

    @property
    def messages(self) -> list[str]:
        """Get all output messages as a list of strings."""
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        """Get all output as a single newline-separated string."""
        return "\n".join(self.messages)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        """Count outputs with a specific style."""
        return sum(1 for o in self.outputs if o.style == style)
