"""Exception handling module."""

from prguard.core.exceptions.base import PRGuardError
from prguard.core.exceptions.codes import REJECTION_CODES, ErrorCode
from prguard.core.exceptions.domain import (
    ConfigurationError,
    DomainError,
    MalformedSignatureEncodingError,
    PublicKeyError,
    RecordFieldError,
    TruncatedInputError,
    WireFormatError,
)
from prguard.core.exceptions.messages import ErrorMessageTemplate

__all__ = [
    "PRGuardError",
    "DomainError",
    "RecordFieldError",
    "MalformedSignatureEncodingError",
    "TruncatedInputError",
    "WireFormatError",
    "PublicKeyError",
    "ConfigurationError",
    "ErrorCode",
    "REJECTION_CODES",
    "ErrorMessageTemplate",
]
