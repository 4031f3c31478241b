"""Shared utility functions for phpdock.

Provides JSON/YAML input loading, path helpers, and Rich-based console
reporting used by the CLI.
"""

from __future__ import annotations

import json
import posixpath
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Structured input
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def load_yaml(path: str | Path) -> Any:
    """Load and parse a YAML file with the safe loader."""
    raw = Path(path).read_text(encoding="utf-8")
    return yaml.safe_load(raw)


def load_data_file(path: str | Path) -> Any:
    """Load a JSON or YAML document, choosing the parser by file suffix.

    ``.yaml`` and ``.yml`` go through PyYAML; anything else is parsed as JSON.
    """
    suffix = Path(path).suffix.lower()
    if suffix in (".yaml", ".yml"):
        return load_yaml(path)
    return load_json(path)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def normalize_relative(path: str) -> str:
    """Normalise a relative POSIX path, mapping the empty path to ``"."``.

    Examples::

        normalize_relative("src//app1/") -> "src/app1"
        normalize_relative("./public")   -> "public"
        normalize_relative("")           -> "."
    """
    if not path:
        return "."
    return posixpath.normpath(path.replace("\\", "/"))


def path_segments(path: str) -> list[str]:
    """Split a path on either separator, dropping empty segments."""
    return [seg for seg in path.replace("\\", "/").split("/") if seg]


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
