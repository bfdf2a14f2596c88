"""Fixed-layout pricing record value type."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from prguard.core.exceptions.domain import RecordFieldError

U64_MAX = 2**64 - 1
SIGNATURE_SIZE = 64

_EMPTY_SIGNATURE = bytes(SIGNATURE_SIZE)
_INTEGER_FIELDS = ("pr_version", "spot", "moving_average", "timestamp")


@dataclass(slots=True, frozen=True)
class PricingRecord:
    """Signed spot/moving-average quote carried by a block.

    The instance is immutable: copies never share mutable state, and a record is
    populated wholesale by one of the codecs rather than field by field. The
    all-zero instance is the canonical empty record, meaning "no price data".
    """

    pr_version: int = 0
    spot: int = 0
    moving_average: int = 0
    timestamp: int = 0
    signature: bytes = _EMPTY_SIGNATURE

    def __post_init__(self) -> None:
        for name in _INTEGER_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise RecordFieldError(f"{name} must be an unsigned 64-bit integer", name, value)
            if value < 0 or value > U64_MAX:
                raise RecordFieldError(f"{name} is outside the unsigned 64-bit range", name, value)

        signature = self.signature
        if not isinstance(signature, (bytes, bytearray, memoryview)):
            raise RecordFieldError("signature must be a bytes-like object", "signature", signature)
        signature = bytes(signature)
        if len(signature) != SIGNATURE_SIZE:
            raise RecordFieldError(
                f"signature must be exactly {SIGNATURE_SIZE} bytes, got {len(signature)}",
                "signature",
                signature.hex(),
            )
        # frozen dataclass: normalise bytearray/memoryview input to immutable bytes
        object.__setattr__(self, "signature", signature)

    @classmethod
    def empty(cls) -> PricingRecord:
        """Return the canonical empty record."""

        return cls()

    def is_empty(self) -> bool:
        """Return whether this record carries no price data."""

        return self == _EMPTY_RECORD

    def has_missing_rates(self) -> bool:
        return self.spot == 0 or self.moving_average == 0

    def equals(self, other: object) -> bool:
        """Field-wise comparison including the full signature."""

        if not isinstance(other, PricingRecord):
            return False
        return self == other

    def replace(self, **changes: Any) -> PricingRecord:
        """Return an independent copy with ``changes`` applied and re-validated."""

        return dataclasses.replace(self, **changes)

    def __repr__(self) -> str:
        return (
            f"PricingRecord(pr_version={self.pr_version}, spot={self.spot}, "
            f"moving_average={self.moving_average}, timestamp={self.timestamp}, "
            f"signature={self.signature.hex()[:16]}...)"
        )


_EMPTY_RECORD = PricingRecord()


__all__ = ["PricingRecord", "SIGNATURE_SIZE", "U64_MAX"]
