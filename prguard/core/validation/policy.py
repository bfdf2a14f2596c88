"""Admissibility policy deciding whether a pricing record may enter a block.

Rules run as a strict sequence and the first failing rule decides the verdict:

1. before the activation version a record must be empty;
2. an empty record is always admissible;
3. spot and moving average must both be non-zero;
4. the signature must verify against the network's oracle key;
5. the record may not be dated more than ``max_future_skew`` past the block;
6. the record must be newer than the previous block.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from prguard.core.config.settings import DEFAULT_ACTIVATION_VERSION, DEFAULT_MAX_FUTURE_SKEW
from prguard.core.crypto.verifier import SignatureStatus, check_signature
from prguard.core.exceptions.codes import ErrorCode
from prguard.core.exceptions.domain import PublicKeyError
from prguard.core.logging import log_context, logger
from prguard.core.models.network import BlockContext, NetworkType
from prguard.core.models.record import PricingRecord
from prguard.core.models.verdict import Verdict
from prguard.core.monitoring.metrics import MetricsCollector, get_metrics_collector

if TYPE_CHECKING:
    from prguard.core.config.settings import PRGuardConfig


@dataclass(slots=True, frozen=True)
class PolicySettings:
    """Consensus constants the policy is evaluated with."""

    activation_version: int = DEFAULT_ACTIVATION_VERSION
    max_future_skew: int = DEFAULT_MAX_FUTURE_SKEW

    def __post_init__(self) -> None:
        if self.activation_version < 0:
            raise ValueError(f"activation_version must be non-negative: {self.activation_version}")
        if self.max_future_skew < 0:
            raise ValueError(f"max_future_skew must be non-negative: {self.max_future_skew}")


def _resolve_public_key(public_keys: Mapping[NetworkType, str], network: NetworkType) -> str:
    pem = public_keys.get(network)
    if not pem:
        raise PublicKeyError(f"No oracle public key configured for network '{network.value}'", network=network.value)
    return pem


def _reject(reason: ErrorCode, record: PricingRecord, **template_values: Any) -> Verdict:
    verdict = Verdict.reject(reason, **template_values)
    logger.bind(error_code=reason.value, pr_timestamp=record.timestamp).warning(verdict.message)
    return verdict


def evaluate_record(
    record: PricingRecord,
    context: BlockContext,
    *,
    public_keys: Mapping[NetworkType, str],
    settings: PolicySettings | None = None,
    metrics: MetricsCollector | None = None,
) -> Verdict:
    """Run the admissibility rules for ``record`` in ``context``.

    Rejections never raise. The only exception is :class:`PublicKeyError` when a
    non-empty record must be verified on a network that has no configured key,
    which is a wiring error in the caller.
    """

    settings = settings or PolicySettings()
    collector = metrics or get_metrics_collector()

    with log_context(network=context.network.value):
        verdict = _evaluate(record, context, public_keys, settings, collector)
    collector.record_verdict(verdict.accepted, verdict.reason)
    return verdict


def _evaluate(
    record: PricingRecord,
    context: BlockContext,
    public_keys: Mapping[NetworkType, str],
    settings: PolicySettings,
    metrics: MetricsCollector,
) -> Verdict:
    empty = record.is_empty()

    if context.protocol_version < settings.activation_version and not empty:
        return _reject(
            ErrorCode.UNEXPECTED_RECORD_BEFORE_ACTIVATION,
            record,
            activation_version=settings.activation_version,
            protocol_version=context.protocol_version,
        )

    if empty:
        return Verdict.accept("No pricing record present")

    if record.has_missing_rates():
        return _reject(ErrorCode.MISSING_RATES, record)

    public_key = _resolve_public_key(public_keys, context.network)
    try:
        status = check_signature(record, public_key, metrics=metrics)
    except PublicKeyError as error:
        logger.bind(error_code=error.error_code).error(error.message)
        return _reject(ErrorCode.INVALID_SIGNATURE, record)
    if status is not SignatureStatus.VALID:
        return _reject(ErrorCode.INVALID_SIGNATURE, record)

    if record.timestamp > context.block_timestamp + settings.max_future_skew:
        return _reject(
            ErrorCode.TIMESTAMP_TOO_FAR_IN_FUTURE,
            record,
            timestamp=record.timestamp,
            block_timestamp=context.block_timestamp,
            max_future_skew=settings.max_future_skew,
        )

    if record.timestamp <= context.previous_block_timestamp:
        return _reject(
            ErrorCode.TIMESTAMP_NOT_ADVANCING,
            record,
            timestamp=record.timestamp,
            previous_block_timestamp=context.previous_block_timestamp,
        )

    return Verdict.accept()


class PricingRecordPolicy:
    """Admissibility policy bound to a per-network oracle key table.

    The key table is passed in explicitly and never mutated, so one instance can
    be shared between threads validating different blocks.
    """

    def __init__(
        self,
        public_keys: Mapping[NetworkType, str],
        settings: PolicySettings | None = None,
        *,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self._public_keys = {NetworkType(network): pem for network, pem in public_keys.items()}
        self.settings = settings or PolicySettings()
        self._metrics = metrics

    @classmethod
    def from_config(cls, config: PRGuardConfig, *, metrics: MetricsCollector | None = None) -> PricingRecordPolicy:
        return cls(config.oracle_public_keys(), config.policy_settings(), metrics=metrics)

    @property
    def networks(self) -> frozenset[NetworkType]:
        return frozenset(self._public_keys)

    def public_key_for(self, network: NetworkType | str) -> str:
        """Return the trusted PEM key for ``network``."""

        return _resolve_public_key(self._public_keys, NetworkType(network))

    def evaluate(
        self,
        record: PricingRecord,
        network: NetworkType | str,
        protocol_version: int,
        block_timestamp: int,
        previous_block_timestamp: int,
    ) -> Verdict:
        """Decide admissibility and return the verdict with its reason."""

        context = BlockContext(
            network=NetworkType(network),
            protocol_version=protocol_version,
            block_timestamp=block_timestamp,
            previous_block_timestamp=previous_block_timestamp,
        )
        return evaluate_record(
            record,
            context,
            public_keys=self._public_keys,
            settings=self.settings,
            metrics=self._metrics,
        )

    def valid(
        self,
        record: PricingRecord,
        network: NetworkType | str,
        protocol_version: int,
        block_timestamp: int,
        previous_block_timestamp: int,
    ) -> bool:
        return self.evaluate(record, network, protocol_version, block_timestamp, previous_block_timestamp).accepted


def valid(
    record: PricingRecord,
    network: NetworkType | str,
    protocol_version: int,
    block_timestamp: int,
    previous_block_timestamp: int,
    *,
    public_keys: Mapping[NetworkType, str],
    settings: PolicySettings | None = None,
) -> bool:
    """Return whether ``record`` is admissible for the given block."""

    policy = PricingRecordPolicy(public_keys, settings)
    return policy.valid(record, network, protocol_version, block_timestamp, previous_block_timestamp)


__all__ = ["PolicySettings", "PricingRecordPolicy", "evaluate_record", "valid"]
