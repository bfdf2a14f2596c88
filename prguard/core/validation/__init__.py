"""Pricing record admissibility policy."""

from prguard.core.validation.policy import PolicySettings, PricingRecordPolicy, evaluate_record, valid

__all__ = ["PolicySettings", "PricingRecordPolicy", "evaluate_record", "valid"]
