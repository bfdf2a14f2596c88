"""标准化错误消息模板."""

from typing import Any

from prguard.core.exceptions.codes import ErrorCode


class ErrorMessageTemplate:
    """错误消息模板管理器."""

    _templates: dict[ErrorCode, str] = {
        # 通用错误
        ErrorCode.GENERAL_ERROR: "Unexpected error",
        # 准入策略 (拒绝原因)
        ErrorCode.UNEXPECTED_RECORD_BEFORE_ACTIVATION: (
            "Pricing record present before activation version {activation_version} "
            "(protocol version {protocol_version})"
        ),
        ErrorCode.MISSING_RATES: "Pricing record has missing rates",
        ErrorCode.INVALID_SIGNATURE: "Invalid pricing record signature",
        ErrorCode.TIMESTAMP_TOO_FAR_IN_FUTURE: (
            "Pricing record timestamp {timestamp} is too far in the future "
            "(block timestamp {block_timestamp}, max skew {max_future_skew}s)"
        ),
        ErrorCode.TIMESTAMP_NOT_ADVANCING: (
            "Pricing record timestamp {timestamp} is too old "
            "(previous block timestamp {previous_block_timestamp})"
        ),
    }

    @classmethod
    def get_message(cls, error_code: ErrorCode, **kwargs: Any) -> str:
        """Render the template for ``error_code``; missing values fall back to a generic message."""
        template = cls._templates.get(error_code, cls._templates[ErrorCode.GENERAL_ERROR])
        try:
            return template.format(**kwargs)
        except KeyError:
            # 缺少模板变量时返回带错误代码的通用消息
            return f"{cls._templates[ErrorCode.GENERAL_ERROR]} (error code: {error_code.value})"
