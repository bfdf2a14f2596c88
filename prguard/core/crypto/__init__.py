"""Cryptographic verification of pricing record signatures."""

from prguard.core.crypto.verifier import (
    SignatureStatus,
    build_message,
    check_signature,
    load_public_key,
    sign_record,
    verify_signature,
)

__all__ = [
    "SignatureStatus",
    "build_message",
    "check_signature",
    "load_public_key",
    "sign_record",
    "verify_signature",
]
