"""Signature verification binding pricing record fields to the oracle key.

Records are signed with ECDSA over NIST P-256 using SHA-256. The 64-byte
signature stored in a record is the raw ``r || s`` pair, each a 32-byte
big-endian integer. The signed message is the compact JSON text of the four
numeric fields, in this exact order and without whitespace::

    {"pr_version":1,"spot":100,"moving_average":95,"timestamp":1000}

Keys are parsed on every call; nothing is cached between verifications.
"""

from __future__ import annotations

import time
from enum import Enum

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import decode_dss_signature, encode_dss_signature

from prguard.core.exceptions.codes import ErrorCode
from prguard.core.exceptions.domain import PublicKeyError
from prguard.core.logging import logger
from prguard.core.models.record import SIGNATURE_SIZE, PricingRecord
from prguard.core.monitoring.metrics import MetricsCollector, get_metrics_collector

_SCALAR_SIZE = SIGNATURE_SIZE // 2


class SignatureStatus(str, Enum):
    """Outcome of a single signature check."""

    VALID = "valid"
    MISMATCH = "mismatch"
    BACKEND_FAILURE = "backend_failure"


def build_message(record: PricingRecord) -> bytes:
    """Return the exact byte string the oracle signed for ``record``."""

    return (
        f'{{"pr_version":{record.pr_version},'
        f'"spot":{record.spot},'
        f'"moving_average":{record.moving_average},'
        f'"timestamp":{record.timestamp}}}'
    ).encode("ascii")


def load_public_key(public_key: str | bytes | None) -> ec.EllipticCurvePublicKey:
    """Parse a PEM ``SubjectPublicKeyInfo`` into an EC public key.

    Raises:
        PublicKeyError: the key is empty, not PEM, not an EC key, or on a curve
            whose scalars do not fit the 64-byte signature.
    """

    if not public_key:
        raise PublicKeyError("Pricing record verification failed: empty public key")

    data = public_key.encode("utf-8") if isinstance(public_key, str) else bytes(public_key)
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as error:
        raise PublicKeyError(f"Pricing record verification failed: unreadable public key ({error})") from error

    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise PublicKeyError(
            f"Pricing record verification failed: expected an EC public key, got {type(key).__name__}"
        )
    if key.curve.key_size > _SCALAR_SIZE * 8:
        raise PublicKeyError(
            f"Pricing record verification failed: curve {key.curve.name} does not fit {SIGNATURE_SIZE}-byte signatures"
        )
    return key


def check_signature(
    record: PricingRecord,
    public_key: str | bytes | None,
    *,
    metrics: MetricsCollector | None = None,
) -> SignatureStatus:
    """Verify ``record.signature`` over :func:`build_message` with ``public_key``.

    An empty or unusable key raises :class:`PublicKeyError` before any
    verification happens. Mismatches and crypto backend failures are logged and
    reported through the returned status.
    """

    key = load_public_key(public_key)
    message = build_message(record)
    r = int.from_bytes(record.signature[:_SCALAR_SIZE], "big")
    s = int.from_bytes(record.signature[_SCALAR_SIZE:], "big")

    started = time.perf_counter()
    try:
        key.verify(encode_dss_signature(r, s), message, ec.ECDSA(hashes.SHA256()))
    except InvalidSignature:
        status = SignatureStatus.MISMATCH
        logger.bind(error_code=ErrorCode.INVALID_SIGNATURE.value, pr_timestamp=record.timestamp).warning(
            "Pricing record signature does not match the oracle key"
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as error:
        status = SignatureStatus.BACKEND_FAILURE
        logger.bind(error_code=ErrorCode.INVALID_SIGNATURE.value, backend_error=str(error)).error(
            "Pricing record signature verification could not run"
        )
    else:
        status = SignatureStatus.VALID
    elapsed = time.perf_counter() - started

    (metrics or get_metrics_collector()).observe_signature_check(status.value, elapsed)
    return status


def verify_signature(
    record: PricingRecord,
    public_key: str | bytes | None,
    *,
    metrics: MetricsCollector | None = None,
) -> bool:
    """Return ``True`` only when the signature is valid for ``public_key``."""

    return check_signature(record, public_key, metrics=metrics) is SignatureStatus.VALID


def sign_record(record: PricingRecord, private_key: ec.EllipticCurvePrivateKey) -> PricingRecord:
    """Return a copy of ``record`` signed with ``private_key`` (tooling and tests)."""

    der = private_key.sign(build_message(record), ec.ECDSA(hashes.SHA256()))
    r, s = decode_dss_signature(der)
    signature = r.to_bytes(_SCALAR_SIZE, "big") + s.to_bytes(_SCALAR_SIZE, "big")
    return record.replace(signature=signature)


__all__ = [
    "SignatureStatus",
    "build_message",
    "load_public_key",
    "check_signature",
    "verify_signature",
    "sign_record",
]
