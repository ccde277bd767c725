"""
Account reuse reconciliation.

A user may only keep operating one CARD account. When a user has used
several card accounts and one of them already saw a declined transaction,
that account is disputed: its first use stands and every later use is
declined.
"""

from typing import Sequence

from core.logging import get_logger
from ledger.event_log import EventLog
from ledger.models import Event, EventStatus, Transaction

from .checks import DeclineReason
from .context import ValidationContext

logger = get_logger(__name__)


def card_accounts_by_user(transactions: Sequence[Transaction]) -> dict[str, list[str]]:
    """Distinct CARD accounts per user, in the order they first appear."""
    accounts: dict[str, list[str]] = {}
    for transaction in transactions:
        if not transaction.is_card:
            continue
        seen = accounts.setdefault(transaction.user_id, [])
        if transaction.account_number not in seen:
            seen.append(transaction.account_number)
    return accounts


def find_disputed_accounts(transactions: Sequence[Transaction], context: ValidationContext) -> list[str]:
    """For each user with several card accounts, the first one that already had a decline."""
    declined = context.declined_account_numbers()
    disputed: list[str] = []
    for user_id, accounts in card_accounts_by_user(transactions).items():
        if len(accounts) < 2:
            continue
        for account in accounts:
            if account in declined:
                if account not in disputed:
                    disputed.append(account)
                logger.debug("disputed_account", user_id=user_id, account_number=account)
                break
    return disputed


def reconcile_accounts(
    transactions: Sequence[Transaction],
    context: ValidationContext,
    event_log: EventLog,
) -> int:
    """Decline repeat uses of disputed accounts. Returns the number of new declines.

    Only approved transactions get a new event; declined ones already carry
    their final verdict.
    """
    disputed = set(find_disputed_accounts(transactions, context))
    if not disputed:
        return 0

    first_use_seen: set[str] = set()
    newly_declined = 0
    for position, transaction in enumerate(transactions):
        account = transaction.account_number
        if account not in disputed:
            continue
        if account not in first_use_seen:
            first_use_seen.add(account)
            continue
        if not event_log.is_approved(position):
            continue
        event_log.record(position, Event(
            transaction_id=transaction.id,
            status=EventStatus.DECLINED,
            message=DeclineReason.NEW_ACCOUNT_AFTER_DECLINE.value,
        ))
        newly_declined += 1

    return newly_declined
