"""Strict conversion between raw 64-byte signatures and their hex wire form."""

from __future__ import annotations

import string

from prguard.core.exceptions.domain import MalformedSignatureEncodingError
from prguard.core.models.record import SIGNATURE_SIZE

SIGNATURE_HEX_LENGTH = SIGNATURE_SIZE * 2

_HEX_DIGITS = frozenset(string.hexdigits)


def signature_to_hex(signature: bytes) -> str:
    """Render ``signature`` as 128 lowercase hex digits, high nibble first."""

    if len(signature) != SIGNATURE_SIZE:
        raise MalformedSignatureEncodingError(
            f"signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}",
            reason="wrong_length",
            length=len(signature),
        )
    return bytes(signature).hex()


def signature_from_hex(text: str) -> bytes:
    """Parse 128 hex characters into the 64 raw signature bytes.

    Raises:
        MalformedSignatureEncodingError: ``reason`` is one of ``not_text``,
            ``odd_length``, ``wrong_length`` or ``non_hex``. Nothing is ever
            zero-filled or truncated.
    """

    if not isinstance(text, str):
        raise MalformedSignatureEncodingError(
            f"signature must be hex text, got {type(text).__name__}",
            reason="not_text",
        )

    length = len(text)
    if length % 2:
        raise MalformedSignatureEncodingError(
            f"signature hex has odd length {length}",
            reason="odd_length",
            length=length,
        )
    if length != SIGNATURE_HEX_LENGTH:
        raise MalformedSignatureEncodingError(
            f"signature hex must be {SIGNATURE_HEX_LENGTH} characters, got {length}",
            reason="wrong_length",
            length=length,
        )

    for offset, character in enumerate(text):
        if character not in _HEX_DIGITS:
            raise MalformedSignatureEncodingError(
                f"signature hex has non-hex character {character!r} at offset {offset}",
                reason="non_hex",
                offset=offset,
            )

    return bytes.fromhex(text)


__all__ = ["SIGNATURE_HEX_LENGTH", "signature_to_hex", "signature_from_hex"]
