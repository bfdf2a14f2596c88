"""Pricing record CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer

from prguard.core.codec import from_blob_hex, from_json, to_blob_hex, to_wire
from prguard.core.config.settings import ConfigManager
from prguard.core.crypto import build_message
from prguard.core.exceptions import DomainError
from prguard.core.models.network import NetworkType
from prguard.core.models.record import PricingRecord
from prguard.core.validation import PricingRecordPolicy

from .constants import REJECTED_EXIT_CODE, VALIDATION_EXIT_CODE
from .utils import emit_error, fail, get_cli_options, read_text_source, write_result

record_app = typer.Typer(help="Pricing record utilities.")

VERDICT_COLUMNS = ["accepted", "reason", "message", "network", "pr_version", "spot", "moving_average", "timestamp"]
WIRE_COLUMNS = ["pr_version", "spot", "moving_average", "timestamp", "signature"]


def register(app: typer.Typer) -> None:
    """Register record commands on the root CLI application."""

    app.add_typer(record_app, name="record", help="Validate and convert pricing records")


def get_policy(config_path: Path | None, network: NetworkType, public_key_file: Path | None) -> PricingRecordPolicy:
    """Factory hook building the policy from configuration and an optional key file."""

    config = ConfigManager(config_path).get_config()
    if public_key_file is None:
        return PricingRecordPolicy.from_config(config)

    pem = public_key_file.read_text(encoding="utf-8")
    return PricingRecordPolicy({network: pem}, config.policy_settings())


@record_app.command("validate")
def validate_command(
    ctx: typer.Context,
    source: str = typer.Argument("-", help="Wire JSON record file, or '-' for stdin."),
    network: str = typer.Option("mainnet", "--network", help="Network whose oracle key is trusted."),
    protocol_version: int = typer.Option(..., "--protocol-version", min=0, help="Block protocol version."),
    block_timestamp: int = typer.Option(..., "--block-timestamp", min=0, help="Block timestamp (seconds)."),
    previous_block_timestamp: int = typer.Option(
        ..., "--previous-block-timestamp", min=0, help="Previous block timestamp (seconds)."
    ),
    public_key_file: Path | None = typer.Option(
        None,
        "--public-key-file",
        help="PEM oracle key overriding the configured key for --network.",
    ),
) -> None:
    """Decide whether a pricing record is admissible for a block."""

    network_type = _parse_network(network)
    record = _load_record(source)
    options = get_cli_options(ctx)

    try:
        policy = get_policy(options.config_path, network_type, public_key_file)
        verdict = policy.evaluate(record, network_type, protocol_version, block_timestamp, previous_block_timestamp)
    except OSError as error:
        emit_error(f"Unable to read public key file: {error}", "KEY_FILE_ERROR")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error
    except DomainError as error:
        fail(error)

    row = {**verdict.to_dict(), "network": network_type.value, **_record_fields(record)}
    write_result(ctx, row, VERDICT_COLUMNS)

    if not verdict.accepted:
        raise typer.Exit(code=REJECTED_EXIT_CODE)


@record_app.command("decode-blob")
def decode_blob_command(
    ctx: typer.Context,
    blob_hex: str = typer.Argument(..., help="Hex encoded 96-byte record blob."),
) -> None:
    """Decode a binary record blob into its wire fields."""

    try:
        record = from_blob_hex(blob_hex)
    except DomainError as error:
        fail(error)

    write_result(ctx, to_wire(record).model_dump(), WIRE_COLUMNS)


@record_app.command("encode-blob")
def encode_blob_command(
    ctx: typer.Context,
    source: str = typer.Argument("-", help="Wire JSON record file, or '-' for stdin."),
) -> None:
    """Encode a wire JSON record into its hex binary blob."""

    record = _load_record(source)
    write_result(ctx, {"blob": to_blob_hex(record)})


@record_app.command("message")
def message_command(
    ctx: typer.Context,
    source: str = typer.Argument("-", help="Wire JSON record file, or '-' for stdin."),
) -> None:
    """Print the exact message the oracle signs for a record."""

    record = _load_record(source)
    write_result(ctx, {"message": build_message(record).decode("ascii")})


def _load_record(source: str) -> PricingRecord:
    try:
        payload = read_text_source(source)
    except OSError as error:
        emit_error(str(error), "INPUT_READ_ERROR")
        raise typer.Exit(code=VALIDATION_EXIT_CODE) from error

    try:
        return from_json(payload)
    except DomainError as error:
        fail(error)


def _parse_network(value: str) -> NetworkType:
    try:
        return NetworkType(value.lower())
    except ValueError as exc:
        allowed = ", ".join(network.value for network in NetworkType)
        raise typer.BadParameter(
            f"Unsupported network '{value}'. Allowed values: {allowed}",
            param_hint="--network",
        ) from exc


def _record_fields(record: PricingRecord) -> dict[str, object]:
    return {
        "pr_version": record.pr_version,
        "spot": record.spot,
        "moving_average": record.moving_average,
        "timestamp": record.timestamp,
    }


__all__ = ["register", "record_app", "validate_command", "get_policy"]
