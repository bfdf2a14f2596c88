"""Root of the prguard command line interface."""

from __future__ import annotations

import sys
from pathlib import Path

import typer

from prguard.core.config.settings import ConfigManager
from prguard.core.exceptions import ConfigurationError
from prguard.core.logging import LogConfig, StructuredLogger

from .formatters import FORMATS
from .record import register as register_record_commands
from .utils import fail

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _print_version(value: bool) -> None:
    if value:
        from prguard import __version__

        typer.echo(f"prguard {__version__}")
        raise typer.Exit()


def _choice(value: str, allowed: tuple[str, ...], param_hint: str, *, upper: bool = False) -> str:
    normalized = value.strip().upper() if upper else value.strip().lower()
    if normalized not in allowed:
        raise typer.BadParameter(
            f"Unsupported value '{value}'. Allowed values: {', '.join(allowed)}",
            param_hint=param_hint,
        )
    return normalized


def create_app() -> typer.Typer:
    """Build the Typer application with the global options and the record commands."""

    app = typer.Typer(add_completion=False, help="Validate and convert oracle pricing records.")

    @app.callback()
    def main(
        ctx: typer.Context,
        output_format: str = typer.Option("table", "--format", "-f", help="Output format (table or jsonl)."),
        output: Path | None = typer.Option(None, "--output", "-o", help="Write the result to a file."),
        log_level: str | None = typer.Option(
            None, "--log-level", help="Minimum level of JSON log lines on stderr [default: logging.level]."
        ),
        no_color: bool = typer.Option(False, "--no-color", help="Plain table output."),
        config: Path | None = typer.Option(
            None, "--config", help="Configuration file (defaults to ~/.prguard/config.toml)."
        ),
        version: bool = typer.Option(
            False, "--version", callback=_print_version, is_eager=True, help="Show the version and exit."
        ),
    ) -> None:
        output_format = _choice(output_format, FORMATS, "--format")
        try:
            settings = ConfigManager(config).get_config().logging
        except ConfigurationError as error:
            fail(error)
        level = _choice(log_level or settings.level, _LOG_LEVELS, "--log-level", upper=True)
        # stdout carries command results only
        StructuredLogger(LogConfig.from_settings(settings, level=level, console_stream=sys.stderr))

        ctx.ensure_object(dict).update(
            {
                "format": output_format,
                "output_path": output,
                "no_color": no_color,
                "config_path": config,
            }
        )

    register_record_commands(app)
    return app


app = create_app()
