"""prguard - 区块定价记录准入校验库

Decodes oracle pricing records, verifies their signatures against the trusted
oracle key of each network and decides whether a record is admissible for a
given block.
"""

from typing import Any

from prguard.core.codec import from_blob, from_json, from_wire, to_blob, to_json, to_wire
from prguard.core.config.settings import ConfigManager
from prguard.core.crypto import build_message, verify_signature
from prguard.core.exceptions import ErrorCode, PRGuardError
from prguard.core.models import BlockContext, NetworkType, PricingRecord, Verdict
from prguard.core.validation import PolicySettings, PricingRecordPolicy

# 全局策略实例
_policy: PricingRecordPolicy | None = None


def get_policy() -> PricingRecordPolicy:
    """获取全局定价记录准入策略实例 (基于 ~/.prguard/config.toml 与环境变量)"""
    global _policy
    if _policy is None:
        _policy = PricingRecordPolicy.from_config(ConfigManager().get_config())
    return _policy


def configure(**config: Any) -> PricingRecordPolicy:
    """更新配置并重建全局策略

    Args:
        **config: 配置段, 例如 ``oracle={"public_keys": {"mainnet": PEM}}``

    Returns:
        新的全局策略实例
    """
    global _policy
    manager = ConfigManager()
    manager.update_config(**config)
    _policy = PricingRecordPolicy.from_config(manager.get_config())
    return _policy


def evaluate(
    record: PricingRecord,
    network: NetworkType | str,
    protocol_version: int,
    block_timestamp: int,
    previous_block_timestamp: int,
) -> Verdict:
    """使用全局策略判定定价记录, 返回带原因的结果"""
    return get_policy().evaluate(record, network, protocol_version, block_timestamp, previous_block_timestamp)


def valid(
    record: PricingRecord,
    network: NetworkType | str,
    protocol_version: int,
    block_timestamp: int,
    previous_block_timestamp: int,
) -> bool:
    """使用全局策略判定定价记录是否可被区块接受

    Examples:
        >>> import prguard
        >>> prguard.valid(prguard.PricingRecord(), "mainnet", 20, 1010, 999)
        True
    """
    return evaluate(record, network, protocol_version, block_timestamp, previous_block_timestamp).accepted


# 版本信息
__version__ = "0.1.0"

__all__ = [
    "BlockContext",
    "ErrorCode",
    "NetworkType",
    "PRGuardError",
    "PolicySettings",
    "PricingRecord",
    "PricingRecordPolicy",
    "Verdict",
    "build_message",
    "configure",
    "evaluate",
    "from_blob",
    "from_json",
    "from_wire",
    "get_policy",
    "to_blob",
    "to_json",
    "to_wire",
    "valid",
    "verify_signature",
]
