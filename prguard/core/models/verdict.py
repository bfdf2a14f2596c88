"""Outcome of an admissibility decision."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from prguard.core.exceptions.codes import REJECTION_CODES, ErrorCode
from prguard.core.exceptions.messages import ErrorMessageTemplate


@dataclass(slots=True, frozen=True)
class Verdict:
    """Accept/reject decision plus a diagnostic reason."""

    accepted: bool
    reason: ErrorCode | None = None
    message: str = ""

    def __post_init__(self) -> None:
        if self.accepted and self.reason is not None:
            raise ValueError("Accepted verdicts cannot carry a rejection reason.")
        if not self.accepted and self.reason not in REJECTION_CODES:
            raise ValueError(f"Rejected verdicts require a rejection reason, got {self.reason!r}.")

    def __bool__(self) -> bool:
        return self.accepted

    @classmethod
    def accept(cls, message: str = "Pricing record accepted") -> Verdict:
        return cls(accepted=True, reason=None, message=message)

    @classmethod
    def reject(cls, reason: ErrorCode, **template_values: Any) -> Verdict:
        """Build a rejection whose message comes from :class:`ErrorMessageTemplate`."""

        message = ErrorMessageTemplate.get_message(reason, **template_values)
        return cls(accepted=False, reason=reason, message=message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "accepted": self.accepted,
            "reason": self.reason.value if self.reason is not None else None,
            "message": self.message,
        }


__all__ = ["Verdict"]
