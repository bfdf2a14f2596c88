"""Chain network types and block context passed to the admissibility policy."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class NetworkType(str, Enum):
    """Chain networks, each with its own trusted oracle key."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    STAGENET = "stagenet"
    FAKECHAIN = "fakechain"


@dataclass(slots=True, frozen=True)
class BlockContext:
    """Block-level inputs a pricing record is judged against."""

    network: NetworkType
    protocol_version: int
    block_timestamp: int
    previous_block_timestamp: int

    def __post_init__(self) -> None:
        if not isinstance(self.network, NetworkType):
            object.__setattr__(self, "network", NetworkType(self.network))
        for name in ("protocol_version", "block_timestamp", "previous_block_timestamp"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
            if value < 0:
                raise ValueError(f"{name} must be non-negative: {value}")


__all__ = ["NetworkType", "BlockContext"]
