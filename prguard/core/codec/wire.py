"""Transport representation of a pricing record.

On the wire the four integers travel as plain unsigned integers and the
signature as lowercase hex text::

    {"pr_version": 1, "spot": 100, "moving_average": 95, "timestamp": 1000,
     "signature": "<128 hex digits>"}
"""

from __future__ import annotations

from typing import Annotated, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from prguard.core.codec.hexsig import signature_from_hex, signature_to_hex
from prguard.core.exceptions.domain import WireFormatError
from prguard.core.models.record import U64_MAX, PricingRecord

U64 = Annotated[int, Field(ge=0, le=U64_MAX, strict=True)]


class WireRecord(BaseModel):
    """Structured container exchanged with oracle feeds and RPC peers."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pr_version: U64
    spot: U64
    moving_average: U64
    timestamp: U64
    signature: str = Field(strict=True)


def _validation_errors(error: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": ".".join(str(part) for part in item["loc"]), "type": item["type"], "msg": item["msg"]}
        for item in error.errors()
    ]


def to_wire(record: PricingRecord) -> WireRecord:
    """Map ``record`` to its wire container."""

    return WireRecord(
        pr_version=record.pr_version,
        spot=record.spot,
        moving_average=record.moving_average,
        timestamp=record.timestamp,
        signature=signature_to_hex(record.signature),
    )


def from_wire(wire: WireRecord | Mapping[str, Any]) -> PricingRecord:
    """Rebuild a :class:`PricingRecord` from a wire container or plain mapping.

    Raises:
        WireFormatError: a field is missing, unknown or outside the u64 range.
        MalformedSignatureEncodingError: the signature is not 64 bytes of hex.
    """

    if not isinstance(wire, WireRecord):
        try:
            wire = WireRecord.model_validate(wire)
        except ValidationError as error:
            raise WireFormatError("Wire record failed validation", _validation_errors(error)) from error

    signature = signature_from_hex(wire.signature)
    return PricingRecord(
        pr_version=wire.pr_version,
        spot=wire.spot,
        moving_average=wire.moving_average,
        timestamp=wire.timestamp,
        signature=signature,
    )


def to_json(record: PricingRecord) -> str:
    """Serialise ``record`` as compact wire JSON."""

    return to_wire(record).model_dump_json()


def from_json(payload: str | bytes) -> PricingRecord:
    """Parse wire JSON text into a :class:`PricingRecord`."""

    try:
        wire = WireRecord.model_validate_json(payload)
    except ValidationError as error:
        raise WireFormatError("Wire record JSON failed validation", _validation_errors(error)) from error
    return from_wire(wire)


__all__ = ["WireRecord", "to_wire", "from_wire", "to_json", "from_json"]
