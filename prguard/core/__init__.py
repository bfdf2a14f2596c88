"""prguard 核心模块"""

from prguard.core.config.settings import ConfigManager, PRGuardConfig
from prguard.core.models.network import BlockContext, NetworkType
from prguard.core.models.record import PricingRecord
from prguard.core.models.verdict import Verdict
from prguard.core.validation.policy import PolicySettings, PricingRecordPolicy

__all__ = [
    "ConfigManager",
    "PRGuardConfig",
    "BlockContext",
    "NetworkType",
    "PricingRecord",
    "Verdict",
    "PolicySettings",
    "PricingRecordPolicy",
]
