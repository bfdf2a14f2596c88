"""Codecs converting pricing records between binary, hex and wire forms."""

from prguard.core.codec.blob import RECORD_SIZE, from_blob, from_blob_hex, to_blob, to_blob_hex, unpack_from
from prguard.core.codec.hexsig import SIGNATURE_HEX_LENGTH, signature_from_hex, signature_to_hex
from prguard.core.codec.wire import WireRecord, from_json, from_wire, to_json, to_wire

__all__ = [
    "RECORD_SIZE",
    "SIGNATURE_HEX_LENGTH",
    "WireRecord",
    "from_blob",
    "from_blob_hex",
    "from_json",
    "from_wire",
    "signature_from_hex",
    "signature_to_hex",
    "to_blob",
    "to_blob_hex",
    "to_json",
    "to_wire",
    "unpack_from",
]
