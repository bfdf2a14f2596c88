"""Data models module."""

from prguard.core.models.network import BlockContext, NetworkType
from prguard.core.models.record import SIGNATURE_SIZE, U64_MAX, PricingRecord
from prguard.core.models.verdict import Verdict

__all__ = [
    "PricingRecord",
    "SIGNATURE_SIZE",
    "U64_MAX",
    "NetworkType",
    "BlockContext",
    "Verdict",
]
