"""
Transaction Ledger

This package provides:
- Record types for users, transactions, BIN mappings and verdict events
- An append-only event log keyed by batch position
- The balance ledger applied after all verdicts are final
- CSV readers and writers for the batch tables

The batch processor lives in ledger.service.
"""

from .models import (
    TransactionType,
    PaymentMethod,
    EventStatus,
    User,
    Transaction,
    BinMapping,
    Event,
    UserBalance,
)
from .event_log import EventLog
from .balances import BalanceLedger

__all__ = [
    "TransactionType",
    "PaymentMethod",
    "EventStatus",
    "User",
    "Transaction",
    "BinMapping",
    "Event",
    "UserBalance",
    "EventLog",
    "BalanceLedger",
]
