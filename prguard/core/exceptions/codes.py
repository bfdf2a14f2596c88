"""Standardised error codes shared by exceptions and policy verdicts."""

from enum import Enum


class ErrorCode(str, Enum):
    """错误代码枚举."""

    # 通用错误
    GENERAL_ERROR = "GENERAL_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # 记录与编解码错误
    INVALID_RECORD_FIELD = "INVALID_RECORD_FIELD"
    MALFORMED_SIGNATURE_ENCODING = "MALFORMED_SIGNATURE_ENCODING"
    TRUNCATED_INPUT = "TRUNCATED_INPUT"
    WIRE_FORMAT_ERROR = "WIRE_FORMAT_ERROR"

    # 密钥错误
    INVALID_PUBLIC_KEY = "INVALID_PUBLIC_KEY"

    # 准入策略拒绝原因
    UNEXPECTED_RECORD_BEFORE_ACTIVATION = "UNEXPECTED_RECORD_BEFORE_ACTIVATION"
    MISSING_RATES = "MISSING_RATES"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    TIMESTAMP_TOO_FAR_IN_FUTURE = "TIMESTAMP_TOO_FAR_IN_FUTURE"
    TIMESTAMP_NOT_ADVANCING = "TIMESTAMP_NOT_ADVANCING"


REJECTION_CODES = frozenset(
    {
        ErrorCode.UNEXPECTED_RECORD_BEFORE_ACTIVATION,
        ErrorCode.MISSING_RATES,
        ErrorCode.INVALID_SIGNATURE,
        ErrorCode.TIMESTAMP_TOO_FAR_IN_FUTURE,
        ErrorCode.TIMESTAMP_NOT_ADVANCING,
    }
)


__all__ = ["ErrorCode", "REJECTION_CODES"]
