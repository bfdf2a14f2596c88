"""Tests for pricing record signature verification."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519

from prguard.core.crypto import (
    SignatureStatus,
    build_message,
    check_signature,
    load_public_key,
    sign_record,
    verify_signature,
)
from prguard.core.crypto import verifier as verifier_module
from prguard.core.exceptions import ErrorCode, PublicKeyError
from prguard.core.models import PricingRecord
from prguard.core.monitoring.metrics import MetricsCollector


def _flip_bit(data: bytes, bit: int) -> bytes:
    buffer = bytearray(data)
    buffer[bit // 8] ^= 1 << (bit % 8)
    return bytes(buffer)


def test_build_message_is_compact_json_in_fixed_order() -> None:
    record = PricingRecord(pr_version=1, spot=100, moving_average=95, timestamp=1000, signature=b"\x07" * 64)

    assert build_message(record) == b'{"pr_version":1,"spot":100,"moving_average":95,"timestamp":1000}'


def test_build_message_ignores_signature() -> None:
    record = PricingRecord(pr_version=2, spot=3, moving_average=4, timestamp=5)

    assert build_message(record) == build_message(record.replace(signature=b"\xff" * 64))


def test_build_message_uses_plain_decimal_for_large_values() -> None:
    record = PricingRecord(pr_version=1, spot=2**64 - 1, moving_average=10**18, timestamp=2_000_000_000_000)

    assert build_message(record) == (
        b'{"pr_version":1,"spot":18446744073709551615,"moving_average":1000000000000000000,'
        b'"timestamp":2000000000000}'
    )


def test_valid_signature_verifies(signed_record: PricingRecord, oracle_public_pem: str) -> None:
    assert check_signature(signed_record, oracle_public_pem) is SignatureStatus.VALID
    assert verify_signature(signed_record, oracle_public_pem.encode("ascii"))


def test_signature_from_other_key_is_a_mismatch(signed_record: PricingRecord, other_public_pem: str) -> None:
    assert check_signature(signed_record, other_public_pem) is SignatureStatus.MISMATCH
    assert not verify_signature(signed_record, other_public_pem)


@pytest.mark.parametrize("bit", [0, 7, 255, 256, 300, 511])
def test_flipped_signature_bit_fails(signed_record: PricingRecord, oracle_public_pem: str, bit: int) -> None:
    tampered = signed_record.replace(signature=_flip_bit(signed_record.signature, bit))

    assert not verify_signature(tampered, oracle_public_pem)


@pytest.mark.parametrize("field", ["pr_version", "spot", "moving_average", "timestamp"])
def test_modified_field_without_resigning_fails(
    signed_record: PricingRecord, oracle_public_pem: str, field: str
) -> None:
    tampered = signed_record.replace(**{field: getattr(signed_record, field) ^ 1})

    assert check_signature(tampered, oracle_public_pem) is SignatureStatus.MISMATCH


def test_all_zero_signature_fails(signed_record: PricingRecord, oracle_public_pem: str) -> None:
    assert not verify_signature(signed_record.replace(signature=bytes(64)), oracle_public_pem)


def test_sign_record_produces_raw_64_byte_signature(oracle_private_key: ec.EllipticCurvePrivateKey) -> None:
    record = sign_record(PricingRecord(pr_version=1, spot=2, moving_average=3, timestamp=4), oracle_private_key)

    assert len(record.signature) == 64
    assert record.spot == 2


@pytest.mark.parametrize("key", [None, "", b""])
def test_empty_public_key_is_a_precondition_violation(signed_record: PricingRecord, key: object) -> None:
    with pytest.raises(PublicKeyError) as exc_info:
        check_signature(signed_record, key)  # type: ignore[arg-type]

    assert exc_info.value.code is ErrorCode.INVALID_PUBLIC_KEY
    assert exc_info.value.layer == "crypto"


def test_malformed_pem_is_rejected() -> None:
    with pytest.raises(PublicKeyError):
        load_public_key("-----BEGIN PUBLIC KEY-----\nnot a key\n-----END PUBLIC KEY-----\n")


def test_non_ec_key_is_rejected() -> None:
    pem = (
        ed25519.Ed25519PrivateKey.generate()
        .public_key()
        .public_bytes(serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo)
    )

    with pytest.raises(PublicKeyError, match="EC public key"):
        load_public_key(pem)


def test_curve_too_large_for_signature_is_rejected() -> None:
    pem = (
        ec.generate_private_key(ec.SECP384R1())
        .public_key()
        .public_bytes(serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo)
    )

    with pytest.raises(PublicKeyError, match="does not fit"):
        load_public_key(pem)


def test_backend_failure_is_reported_as_distinct_status(
    signed_record: PricingRecord,
    oracle_public_pem: str,
    metrics: MetricsCollector,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _broken_encode(r: int, s: int) -> bytes:
        raise ValueError("backend unavailable")

    monkeypatch.setattr(verifier_module, "encode_dss_signature", _broken_encode)

    status = check_signature(signed_record, oracle_public_pem, metrics=metrics)

    assert status is SignatureStatus.BACKEND_FAILURE
    assert metrics.registry.get_sample_value(
        "prguard_signature_checks_total", {"status": "backend_failure"}
    ) == 1.0


def test_signature_checks_are_counted(
    signed_record: PricingRecord, oracle_public_pem: str, other_public_pem: str, metrics: MetricsCollector
) -> None:
    check_signature(signed_record, oracle_public_pem, metrics=metrics)
    check_signature(signed_record, other_public_pem, metrics=metrics)

    registry = metrics.registry
    assert registry.get_sample_value("prguard_signature_checks_total", {"status": "valid"}) == 1.0
    assert registry.get_sample_value("prguard_signature_checks_total", {"status": "mismatch"}) == 1.0
    assert registry.get_sample_value("prguard_signature_verification_seconds_count") == 2.0
