"""Rich rendering for the ``tools`` command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from stellar_tools.tools.schema import EnumField, IntegerField, StringField

if TYPE_CHECKING:
    from stellar_tools.tools.registry import ToolRegistry
    from stellar_tools.tools.schema import FieldConstraint


def describe_field(name: str, constraint: FieldConstraint) -> str:
    """One-line summary of a parameter, e.g. ``tokenId: int>=0``."""
    match constraint:
        case StringField(min_length=min_length):
            kind = "str" if min_length is None else f"str(len>={min_length})"
        case EnumField(choices=choices, default=default):
            kind = "|".join(choices)
            if default is not None:
                kind += f"={default}"
        case IntegerField(non_negative=non_negative):
            kind = "int>=0" if non_negative else "int"
    return f"{name}: {kind}"


def render_tools(registry: ToolRegistry, console: Console | None = None) -> None:
    """Print a table of every registered tool and its parameters."""
    console = console or Console()
    table = Table(title="Tools", show_lines=True)
    table.add_column("Name", style="bold cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Parameters", style="dim")
    for spec in registry:
        params = "\n".join(describe_field(n, c) for n, c in spec.parameters.items())
        table.add_row(spec.name, spec.title, params or "-")
    console.print(table)
