"""Fixed-size binary blob used for on-chain storage of pricing records.

Layout (96 bytes, little-endian)::

    offset  size  field
    0       8     pr_version      u64
    8       8     spot            u64
    16      8     moving_average  u64
    24      8     timestamp       u64
    32      64    signature       raw bytes
"""

from __future__ import annotations

import binascii
import struct

from prguard.core.exceptions.domain import TruncatedInputError, WireFormatError
from prguard.core.models.record import PricingRecord

_LAYOUT = struct.Struct("<QQQQ64s")

RECORD_SIZE = _LAYOUT.size


def to_blob(record: PricingRecord) -> bytes:
    """Pack ``record`` into its 96-byte storage form."""

    return _LAYOUT.pack(
        record.pr_version,
        record.spot,
        record.moving_average,
        record.timestamp,
        record.signature,
    )


def unpack_from(data: bytes | bytearray | memoryview, offset: int = 0) -> tuple[PricingRecord, int]:
    """Decode one record at ``offset`` and return it with the offset just past it."""

    if offset < 0:
        raise ValueError(f"offset must be non-negative: {offset}")
    available = max(len(data) - offset, 0)
    if available < RECORD_SIZE:
        raise TruncatedInputError(expected=RECORD_SIZE, actual=available, offset=offset)

    pr_version, spot, moving_average, timestamp, signature = _LAYOUT.unpack_from(data, offset)
    record = PricingRecord(
        pr_version=pr_version,
        spot=spot,
        moving_average=moving_average,
        timestamp=timestamp,
        signature=signature,
    )
    return record, offset + RECORD_SIZE


def from_blob(data: bytes | bytearray | memoryview) -> PricingRecord:
    """Decode the leading 96 bytes of ``data``; trailing bytes are left untouched."""

    record, _ = unpack_from(data)
    return record


def to_blob_hex(record: PricingRecord) -> str:
    return to_blob(record).hex()


def from_blob_hex(text: str) -> PricingRecord:
    """Decode a blob carried as hex text inside a text archive."""

    try:
        data = binascii.unhexlify(text.strip())
    except (binascii.Error, ValueError) as error:
        raise WireFormatError(f"Pricing record blob is not valid hex: {error}") from error
    return from_blob(data)


__all__ = ["RECORD_SIZE", "to_blob", "from_blob", "unpack_from", "to_blob_hex", "from_blob_hex"]
