"""
Rules Package

Provides the ordered validation rule chain, the shared trackers it
threads through a batch, and the card account reconciliation pass.
"""

from .checks import DeclineReason
from .context import ReferenceData, ValidationContext
from .reconciliation import reconcile_accounts
from .rule_engine import (
    RuleEngine,
    Rule,
    RuleOutcome,
    default_rules,
)

__all__ = [
    "DeclineReason",
    "ReferenceData",
    "ValidationContext",
    "reconcile_accounts",
    "RuleEngine",
    "Rule",
    "RuleOutcome",
    "default_rules",
]
