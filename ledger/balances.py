from typing import Sequence

from .event_log import EventLog
from .models import Transaction, TransactionType, User, UserBalance


class BalanceLedger:
    """Applies approved deposits and withdrawals to user balances.

    Runs once every verdict is final, walking the batch in input order.
    """

    def __init__(self, users: Sequence[User]):
        self.users = list(users)
        self._by_id: dict[str, User] = {}
        for user in self.users:
            self._by_id.setdefault(user.id, user)

    def apply(self, transactions: Sequence[Transaction], event_log: EventLog) -> int:
        """Returns how many transactions moved a balance."""
        applied = 0
        for position, transaction in enumerate(transactions):
            if not event_log.is_approved(position):
                continue
            user = self._by_id.get(transaction.user_id)
            if user is None:
                continue
            if transaction.type == TransactionType.DEPOSIT.value:
                user.balance += transaction.amount
            elif transaction.type == TransactionType.WITHDRAW.value:
                user.balance -= transaction.amount
            else:
                continue
            applied += 1
        return applied

    def get_balance(self, user_id: str) -> float:
        user = self._by_id.get(user_id)
        if user is None:
            raise KeyError(user_id)
        return user.balance

    def balances(self, decimals: int = 2) -> list[UserBalance]:
        return [UserBalance(user_id=u.id, balance=round(u.balance, decimals)) for u in self.users]
