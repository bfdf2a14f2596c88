"""Helpers shared by the record commands: options, input, output and errors."""

from __future__ import annotations

import json
import sys
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Mapping, NoReturn, Sequence, TextIO

import typer

from prguard.core.exceptions import DomainError

from .constants import SYSTEM_EXIT_CODE, VALIDATION_EXIT_CODE
from .formatters import OutputFormatter, create_formatter


@dataclass(slots=True)
class CLIOptions:
    """Global options stored on the Typer context by the root callback."""

    format: str = "table"
    output_path: Path | None = None
    no_color: bool = False
    config_path: Path | None = None


def get_cli_options(ctx: typer.Context) -> CLIOptions:
    data = ctx.ensure_object(dict)
    return CLIOptions(
        format=str(data.get("format", "table")),
        output_path=data.get("output_path"),
        no_color=bool(data.get("no_color", False)),
        config_path=data.get("config_path"),
    )


@contextmanager
def open_output(options: CLIOptions) -> Iterator[tuple[OutputFormatter, TextIO]]:
    """Yield the formatter and the stream (``--output`` file or stdout) to write to."""

    formatter = create_formatter(options.format, no_color=options.no_color)
    if options.output_path is None:
        yield formatter, sys.stdout
        return

    try:
        stream = open(options.output_path, "w", encoding="utf-8")
    except OSError as exc:
        emit_error(f"Unable to open '{options.output_path}': {exc}", "OUTPUT_WRITE_ERROR")
        raise typer.Exit(code=SYSTEM_EXIT_CODE) from exc
    with stream:
        yield formatter, stream


def write_result(ctx: typer.Context, row: Mapping[str, object], fields: Sequence[str] | None = None) -> None:
    """Render one result row with the formatter selected by ``--format``."""

    with open_output(get_cli_options(ctx)) as (formatter, stream):
        formatter.render(row, stream=stream, fields=fields)


def read_text_source(source: str) -> str:
    """Read a file path, or stdin when ``source`` is ``-``."""

    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.is_file():
        raise OSError(f"Input file '{source}' does not exist or is not a file.")
    return path.read_text(encoding="utf-8")


def emit_error(message: str, code: str, *, details: Mapping[str, object] | None = None) -> None:
    """Print a structured error payload to stderr."""

    payload: dict[str, object] = {"code": code, "message": message}
    if details:
        payload["details"] = dict(details)
    typer.echo(json.dumps(payload, ensure_ascii=False, default=str), err=True)


def fail(error: DomainError, code: int = VALIDATION_EXIT_CODE) -> NoReturn:
    """Report ``error`` on stderr and stop the command with exit ``code``."""

    emit_error(error.message, error.error_code, details=error.context)
    raise typer.Exit(code=code) from error


__all__ = [
    "CLIOptions",
    "emit_error",
    "fail",
    "get_cli_options",
    "open_output",
    "read_text_source",
    "write_result",
]
