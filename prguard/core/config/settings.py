"""配置管理模块 - 处理prguard的预言机密钥与准入策略配置"""

from __future__ import annotations

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from prguard.core.exceptions.domain import ConfigurationError
from prguard.core.models.network import NetworkType

if TYPE_CHECKING:
    from prguard.core.validation.policy import PolicySettings

DEFAULT_ACTIVATION_VERSION = 21
DEFAULT_MAX_FUTURE_SKEW = 120


@dataclass
class OracleConfig:
    """预言机配置: 网络名称 -> PEM 公钥"""

    public_keys: dict[str, str] = field(default_factory=dict)


@dataclass
class PolicyConfig:
    """准入策略配置"""

    activation_version: int = DEFAULT_ACTIVATION_VERSION
    max_future_skew: int = DEFAULT_MAX_FUTURE_SKEW


@dataclass
class LoggingConfig:
    """日志配置"""

    level: str = "INFO"
    file: str | None = None


@dataclass
class PRGuardConfig:
    """prguard主配置"""

    oracle: OracleConfig = field(default_factory=OracleConfig)
    policy: PolicyConfig = field(default_factory=PolicyConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> PRGuardConfig:
        """从字典创建配置"""
        try:
            oracle_config = OracleConfig(**config_dict.get("oracle", {}))
            policy_config = PolicyConfig(**config_dict.get("policy", {}))
            logging_config = LoggingConfig(**config_dict.get("logging", {}))
        except TypeError as error:
            raise ConfigurationError(f"Unknown configuration key: {error}") from error

        return cls(oracle=oracle_config, policy=policy_config, logging=logging_config)

    def to_dict(self) -> dict[str, Any]:
        """转换为字典"""
        return {
            "oracle": asdict(self.oracle),
            "policy": asdict(self.policy),
            "logging": asdict(self.logging),
        }

    def oracle_public_keys(self) -> dict[NetworkType, str]:
        """Return the trusted PEM key table keyed by :class:`NetworkType`."""

        keys: dict[NetworkType, str] = {}
        for name, pem in self.oracle.public_keys.items():
            try:
                network = NetworkType(name.lower())
            except ValueError as error:
                allowed = ", ".join(network.value for network in NetworkType)
                raise ConfigurationError(
                    f"Unknown network '{name}' in oracle.public_keys. Allowed values: {allowed}",
                    network=name,
                ) from error
            keys[network] = pem
        return keys

    def policy_settings(self) -> PolicySettings:
        """Return the consensus constants as validated :class:`PolicySettings`."""
        from prguard.core.validation.policy import PolicySettings

        try:
            return PolicySettings(
                activation_version=self.policy.activation_version,
                max_future_skew=self.policy.max_future_skew,
            )
        except (TypeError, ValueError) as error:
            raise ConfigurationError(f"Invalid policy configuration: {error}") from error


class ConfigManager:
    """配置管理器"""

    def __init__(self, config_path: Path | None = None):
        """初始化配置管理器

        Args:
            config_path: 配置文件路径，如果为None则使用默认路径
        """
        self.config_path = config_path or Path.home() / ".prguard" / "config.toml"
        self.config = self._load_config()

    def _load_config(self) -> PRGuardConfig:
        """加载配置: 文件在前, 环境变量覆盖"""
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as error:
                raise ConfigurationError(
                    f"Failed to load config from {self.config_path}: {error}",
                    path=str(self.config_path),
                ) from error

        deep_update(config_dict, load_config_from_env())
        return PRGuardConfig.from_dict(config_dict)

    def get_config(self) -> PRGuardConfig:
        """获取当前配置"""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """更新配置"""
        config_dict = self.config.to_dict()
        deep_update(config_dict, updates)
        self.config = PRGuardConfig.from_dict(config_dict)


def deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    """深度更新字典"""
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


def get_default_config() -> PRGuardConfig:
    """获取默认配置"""
    return PRGuardConfig()


def _env_int(name: str) -> int | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError as error:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}", variable=name) from error


def load_config_from_env() -> dict[str, Any]:
    """从环境变量加载配置"""
    config: dict[str, Any] = {}

    # 策略配置
    policy_config: dict[str, Any] = {}
    activation_version = _env_int("PRGUARD_ACTIVATION_VERSION")
    if activation_version is not None:
        policy_config["activation_version"] = activation_version
    max_future_skew = _env_int("PRGUARD_MAX_FUTURE_SKEW")
    if max_future_skew is not None:
        policy_config["max_future_skew"] = max_future_skew

    if policy_config:
        config["policy"] = policy_config

    # 预言机公钥: PEM 文本优先于文件路径
    public_keys: dict[str, str] = {}
    for network in NetworkType:
        suffix = network.value.upper()
        key_file = os.getenv(f"PRGUARD_ORACLE_KEY_FILE_{suffix}")
        if key_file:
            try:
                public_keys[network.value] = Path(key_file).read_text(encoding="utf-8")
            except OSError as error:
                raise ConfigurationError(
                    f"Unable to read oracle key file '{key_file}': {error}",
                    network=network.value,
                ) from error
        pem = os.getenv(f"PRGUARD_ORACLE_KEY_{suffix}")
        if pem:
            public_keys[network.value] = pem

    if public_keys:
        config["oracle"] = {"public_keys": public_keys}

    # 日志配置
    logging_config: dict[str, Any] = {}
    log_level = os.getenv("PRGUARD_LOG_LEVEL")
    if log_level is not None:
        logging_config["level"] = log_level
    log_file = os.getenv("PRGUARD_LOG_FILE")
    if log_file is not None:
        logging_config["file"] = log_file

    if logging_config:
        config["logging"] = logging_config

    return config
