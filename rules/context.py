from dataclasses import dataclass, field
from typing import Optional

from core.config import ProcessingConfig
from ledger.models import BinMapping, Transaction, TransactionType, User


@dataclass
class ReferenceData:
    """Read-only lookup tables for one batch."""

    users: dict[str, User]
    bin_mappings: list[BinMapping]
    user_countries: frozenset[str]

    @classmethod
    def build(cls, users: list[User], bin_mappings: list[BinMapping]) -> "ReferenceData":
        by_id: dict[str, User] = {}
        for user in users:
            # First row wins when an id repeats
            by_id.setdefault(user.id, user)
        return cls(
            users=by_id,
            bin_mappings=list(bin_mappings),
            user_countries=frozenset(user.country for user in users),
        )

    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)


@dataclass
class ValidationContext:
    """Running trackers shared by every rule across one batch.

    Rules read and update these left to right, so a transaction's outcome
    may depend on the ones before it.
    """

    reference: ReferenceData
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    used_transaction_ids: set[str] = field(default_factory=set)
    # account_number -> user_id that last had an approved transaction on it
    accepted_accounts: dict[str, str] = field(default_factory=dict)
    # user_id -> accounts with at least one approved DEPOSIT
    deposited_accounts: dict[str, set[str]] = field(default_factory=dict)
    # transaction_id -> account numbers of declined transactions with that id
    declined_accounts: dict[str, list[str]] = field(default_factory=dict)

    def record_approval(self, transaction: Transaction) -> None:
        self.accepted_accounts[transaction.account_number] = transaction.user_id
        if transaction.type == TransactionType.DEPOSIT.value:
            self.deposited_accounts.setdefault(transaction.user_id, set()).add(transaction.account_number)

    def record_decline(self, transaction: Transaction) -> None:
        self.declined_accounts.setdefault(transaction.id, []).append(transaction.account_number)

    def has_deposited(self, user_id: str, account_number: str) -> bool:
        return account_number in self.deposited_accounts.get(user_id, ())

    def declined_account_numbers(self) -> set[str]:
        return {account for accounts in self.declined_accounts.values() for account in accounts}
