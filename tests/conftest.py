"""Pytest configuration for the prguard test suite."""

from __future__ import annotations

import io

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from prometheus_client import CollectorRegistry

from prguard.core.crypto import sign_record
from prguard.core.logging import configure_logging
from prguard.core.models import NetworkType, PricingRecord
from prguard.core.monitoring.metrics import MetricsCollector
from prguard.core.validation import PolicySettings, PricingRecordPolicy

ACTIVE_VERSION = 21

_PRGUARD_ENV_VARS = [
    "PRGUARD_ACTIVATION_VERSION",
    "PRGUARD_MAX_FUTURE_SKEW",
    "PRGUARD_LOG_LEVEL",
    "PRGUARD_LOG_FILE",
    *(f"PRGUARD_ORACLE_KEY_{network.value.upper()}" for network in NetworkType),
    *(f"PRGUARD_ORACLE_KEY_FILE_{network.value.upper()}" for network in NetworkType),
]


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host configuration and log output out of the tests."""

    for name in _PRGUARD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    configure_logging(level="DEBUG", console_stream=io.StringIO())


@pytest.fixture(scope="session")
def oracle_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def oracle_public_pem(oracle_private_key: ec.EllipticCurvePrivateKey) -> str:
    return (
        oracle_private_key.public_key()
        .public_bytes(serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo)
        .decode("ascii")
    )


@pytest.fixture(scope="session")
def other_public_pem() -> str:
    """A well-formed key that did not sign anything in the suite."""

    return (
        ec.generate_private_key(ec.SECP256R1())
        .public_key()
        .public_bytes(serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo)
        .decode("ascii")
    )


@pytest.fixture
def sign(oracle_private_key: ec.EllipticCurvePrivateKey):
    """Return a helper signing a record with the suite's oracle key."""

    def _sign(record: PricingRecord) -> PricingRecord:
        return sign_record(record, oracle_private_key)

    return _sign


@pytest.fixture
def signed_record(sign) -> PricingRecord:
    return sign(PricingRecord(pr_version=1, spot=100, moving_average=95, timestamp=1000))


@pytest.fixture
def metrics() -> MetricsCollector:
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def policy(oracle_public_pem: str, metrics: MetricsCollector) -> PricingRecordPolicy:
    return PricingRecordPolicy(
        {NetworkType.MAINNET: oracle_public_pem},
        PolicySettings(activation_version=ACTIVE_VERSION, max_future_skew=120),
        metrics=metrics,
    )
