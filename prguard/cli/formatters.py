"""Output formatters for single pricing record results."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Mapping, Sequence, TextIO

from rich.box import SIMPLE
from rich.console import Console
from rich.table import Table
from rich.text import Text

FORMATS = ("table", "jsonl")


def _select(row: Mapping[str, object], fields: Sequence[str] | None) -> dict[str, object]:
    if not fields:
        return dict(row)
    return {name: row.get(name) for name in fields}


class OutputFormatter:
    """Base class for formatters writing one result object per command."""

    name: str

    def render(
        self,
        row: Mapping[str, object],
        *,
        stream: TextIO,
        fields: Sequence[str] | None = None,
    ) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class TableFormatter(OutputFormatter):
    """Render a result as a two-column field/value table.

    Records are wide (the signature alone is 128 hex digits), so fields are laid
    out vertically and long values fold instead of being truncated.
    """

    name: str = "table"
    no_color: bool = False

    def render(
        self,
        row: Mapping[str, object],
        *,
        stream: TextIO,
        fields: Sequence[str] | None = None,
    ) -> None:
        console = Console(file=stream, color_system=None if self.no_color else "auto", no_color=self.no_color)
        table = Table(box=SIMPLE, show_header=False)
        table.add_column("field", style="" if self.no_color else "bold")
        table.add_column("value", overflow="fold")
        for name, value in _select(row, fields).items():
            table.add_row(name, self._format_value(name, value))
        console.print(table)

    def _format_value(self, name: str, value: object) -> Text | str:
        if value is None:
            return "-"
        if name == "accepted" and not self.no_color:
            return Text(str(value), style="green" if value else "red")
        return str(value)


@dataclass(slots=True)
class JSONLFormatter(OutputFormatter):
    """Render a result as one compact JSON line."""

    name: str = "jsonl"

    def render(
        self,
        row: Mapping[str, object],
        *,
        stream: TextIO,
        fields: Sequence[str] | None = None,
    ) -> None:
        stream.write(json.dumps(_select(row, fields), ensure_ascii=False, default=str))
        stream.write("\n")
        stream.flush()


def create_formatter(name: str, *, no_color: bool = False) -> OutputFormatter:
    normalized = name.strip().lower()
    if normalized == "table":
        return TableFormatter(no_color=no_color)
    if normalized == "jsonl":
        return JSONLFormatter()
    raise ValueError(f"Unsupported format '{name}'. Available formats: {', '.join(FORMATS)}.")


__all__ = ["FORMATS", "OutputFormatter", "TableFormatter", "JSONLFormatter", "create_formatter"]
