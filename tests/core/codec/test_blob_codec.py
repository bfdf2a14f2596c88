"""Tests for the fixed-size binary blob codec."""

from __future__ import annotations

import struct

import pytest

from prguard.core.codec import RECORD_SIZE, from_blob, from_blob_hex, to_blob, to_blob_hex, unpack_from
from prguard.core.exceptions import ErrorCode, TruncatedInputError, WireFormatError
from prguard.core.models import U64_MAX, PricingRecord


@pytest.fixture
def record() -> PricingRecord:
    return PricingRecord(pr_version=1, spot=100, moving_average=95, timestamp=1000, signature=bytes(range(64)))


def test_blob_is_96_bytes_little_endian(record: PricingRecord) -> None:
    blob = to_blob(record)

    assert RECORD_SIZE == 96
    assert len(blob) == RECORD_SIZE
    assert blob[:8] == (1).to_bytes(8, "little")
    assert blob[8:16] == (100).to_bytes(8, "little")
    assert blob[16:24] == (95).to_bytes(8, "little")
    assert blob[24:32] == (1000).to_bytes(8, "little")
    assert blob[32:] == bytes(range(64))


def test_empty_record_blob_is_all_zero() -> None:
    assert to_blob(PricingRecord()) == bytes(RECORD_SIZE)
    assert from_blob(bytes(RECORD_SIZE)).is_empty()


def test_blob_round_trip(record: PricingRecord) -> None:
    assert from_blob(to_blob(record)) == record
    extreme = PricingRecord(
        pr_version=U64_MAX, spot=U64_MAX, moving_average=1, timestamp=U64_MAX, signature=b"\xff" * 64
    )
    assert from_blob(to_blob(extreme)) == extreme


def test_from_blob_accepts_memoryview_and_bytearray(record: PricingRecord) -> None:
    blob = to_blob(record)

    assert from_blob(memoryview(blob)) == record
    assert from_blob(bytearray(blob)) == record


def test_from_blob_ignores_trailing_bytes(record: PricingRecord) -> None:
    assert from_blob(to_blob(record) + b"trailing") == record


@pytest.mark.parametrize("size", [0, 1, 32, RECORD_SIZE - 1])
def test_from_blob_rejects_truncated_input(record: PricingRecord, size: int) -> None:
    with pytest.raises(TruncatedInputError) as exc_info:
        from_blob(to_blob(record)[:size])

    error = exc_info.value
    assert error.code is ErrorCode.TRUNCATED_INPUT
    assert error.expected == RECORD_SIZE
    assert error.actual == size


def test_unpack_from_walks_consecutive_records(record: PricingRecord) -> None:
    second = record.replace(timestamp=2000)
    buffer = b"\x00\x01" + to_blob(record) + to_blob(second)

    first_decoded, offset = unpack_from(buffer, 2)
    second_decoded, end = unpack_from(buffer, offset)

    assert first_decoded == record
    assert second_decoded == second
    assert end == len(buffer)

    with pytest.raises(TruncatedInputError) as exc_info:
        unpack_from(buffer, end)
    assert exc_info.value.context["offset"] == end


def test_unpack_from_rejects_negative_offset(record: PricingRecord) -> None:
    with pytest.raises(ValueError):
        unpack_from(to_blob(record), -1)


def test_blob_hex_round_trip(record: PricingRecord) -> None:
    text = to_blob_hex(record)

    assert len(text) == RECORD_SIZE * 2
    assert from_blob_hex(text) == record
    assert from_blob_hex(f"  {text.upper()}\n") == record


def test_from_blob_hex_rejects_bad_hex() -> None:
    with pytest.raises(WireFormatError):
        from_blob_hex("xyz")


def test_from_blob_hex_rejects_short_blob(record: PricingRecord) -> None:
    with pytest.raises(TruncatedInputError):
        from_blob_hex(to_blob_hex(record)[:-2])


def test_layout_matches_struct_definition(record: PricingRecord) -> None:
    values = struct.unpack("<QQQQ64s", to_blob(record))

    assert values == (1, 100, 95, 1000, bytes(range(64)))
