"""Domain-level error hierarchy definitions."""

from __future__ import annotations

from typing import Any, Mapping

from prguard.core.exceptions.base import PRGuardError
from prguard.core.exceptions.codes import ErrorCode


class DomainError(PRGuardError):
    """领域错误基类，携带标准化错误上下文."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        layer: str,
        retryable: bool = False,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        """构造领域错误实例."""

        payload = dict(context or {})
        details = {**payload, "layer": layer, "retryable": retryable}
        super().__init__(message, code.value, details)
        self.code = code
        self.layer = layer
        self.retryable = retryable
        self.context = payload

    def to_payload(self) -> dict[str, Any]:
        """Return a serializable payload representing the error."""

        return {
            "code": self.code.value,
            "message": self.message,
            "layer": self.layer,
            "retryable": self.retryable,
            "context": dict(self.context),
        }


class RecordFieldError(DomainError):
    """Raised when a pricing record field is outside its fixed-width domain."""

    def __init__(self, message: str, field: str, value: Any = None) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_RECORD_FIELD,
            layer="model",
            context={"field": field, "value": repr(value)},
        )
        self.field = field


class MalformedSignatureEncodingError(DomainError):
    """Raised when hex signature text cannot be parsed into exactly 64 bytes."""

    def __init__(self, message: str, reason: str, **context: Any) -> None:
        super().__init__(
            message,
            ErrorCode.MALFORMED_SIGNATURE_ENCODING,
            layer="codec",
            context={"reason": reason, **context},
        )
        self.reason = reason


class TruncatedInputError(DomainError):
    """Raised when a binary blob is shorter than the fixed record layout."""

    def __init__(self, expected: int, actual: int, offset: int = 0) -> None:
        super().__init__(
            f"Pricing record blob truncated: need {expected} bytes at offset {offset}, {actual} available",
            ErrorCode.TRUNCATED_INPUT,
            layer="codec",
            context={"expected": expected, "actual": actual, "offset": offset},
        )
        self.expected = expected
        self.actual = actual


class WireFormatError(DomainError):
    """Raised when a wire payload does not describe a pricing record."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        context: dict[str, Any] = {}
        if errors:
            context["validation_errors"] = errors
        super().__init__(message, ErrorCode.WIRE_FORMAT_ERROR, layer="codec", context=context)
        self.errors = errors or []


class PublicKeyError(DomainError):
    """Raised when the trusted public key is missing or unusable."""

    def __init__(self, message: str, network: str | None = None) -> None:
        context: dict[str, Any] = {}
        if network is not None:
            context["network"] = network
        super().__init__(message, ErrorCode.INVALID_PUBLIC_KEY, layer="crypto", context=context)


class ConfigurationError(DomainError):
    """Raised when configuration cannot be loaded or is inconsistent."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, layer="config", context=context)


__all__ = [
    "DomainError",
    "RecordFieldError",
    "MalformedSignatureEncodingError",
    "TruncatedInputError",
    "WireFormatError",
    "PublicKeyError",
    "ConfigurationError",
]
