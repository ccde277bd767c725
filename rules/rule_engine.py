from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from core.logging import get_logger
from ledger.event_log import EventLog
from ledger.models import Event, EventStatus, Transaction

from .checks import (
    DeclineReason,
    check_account_ownership,
    check_amount_limits,
    check_identity,
    check_payment_method,
)
from .context import ValidationContext

logger = get_logger(__name__)

APPROVED_MESSAGE = "OK"

RuleCheck = Callable[[Transaction, ValidationContext], Optional[DeclineReason]]


@dataclass(frozen=True)
class Rule:
    name: str
    check: RuleCheck
    description: str = ""

    def evaluate(self, transaction: Transaction, context: ValidationContext) -> Optional[DeclineReason]:
        return self.check(transaction, context)


@dataclass(frozen=True)
class RuleOutcome:
    status: EventStatus
    message: str
    rule: Optional[str] = None

    @property
    def approved(self) -> bool:
        return self.status == EventStatus.APPROVED

    def to_event(self, transaction: Transaction) -> Event:
        return Event(transaction_id=transaction.id, status=self.status, message=self.message)


def default_rules() -> list[Rule]:
    return [
        Rule(
            name="account_ownership", check=check_account_ownership,
            description="Account already approved for a different user",
        ),
        Rule(
            name="identity", check=check_identity,
            description="Unique transaction id, known and active user",
        ),
        Rule(
            name="amount_limits", check=check_amount_limits,
            description="Positive amount within the user's deposit or withdraw limits",
        ),
        Rule(
            name="payment_method", check=check_payment_method,
            description="Valid IBAN for transfers, debit card in a known BIN range for cards",
        ),
    ]


class RuleEngine:
    """Runs rules in order; the first rule that declines ends the chain."""

    def __init__(self, rules: Optional[Sequence[Rule]] = None):
        self.rules: list[Rule] = list(rules) if rules is not None else default_rules()

    def add_rule(self, rule: Rule) -> None:
        self.rules.append(rule)

    def remove_rule(self, name: str) -> None:
        self.rules = [r for r in self.rules if r.name != name]

    def get_rule(self, name: str) -> Optional[Rule]:
        return next((r for r in self.rules if r.name == name), None)

    def list_rules(self) -> list[Rule]:
        return list(self.rules)

    def evaluate(self, transaction: Transaction, context: ValidationContext) -> RuleOutcome:
        for rule in self.rules:
            reason = rule.evaluate(transaction, context)
            if reason is not None:
                message = reason.value if isinstance(reason, DeclineReason) else str(reason)
                return RuleOutcome(status=EventStatus.DECLINED, message=message, rule=rule.name)
        return RuleOutcome(status=EventStatus.APPROVED, message=APPROVED_MESSAGE)

    def process(
        self,
        transactions: Sequence[Transaction],
        context: ValidationContext,
        event_log: Optional[EventLog] = None,
    ) -> EventLog:
        """Give every transaction a verdict, updating the context trackers as it goes."""
        event_log = event_log if event_log is not None else EventLog()
        for position, transaction in enumerate(transactions):
            outcome = self.evaluate(transaction, context)
            if outcome.approved:
                context.record_approval(transaction)
            else:
                context.record_decline(transaction)
                logger.debug(
                    "transaction_declined",
                    transaction_id=transaction.id,
                    rule=outcome.rule,
                    reason=outcome.message,
                )
            event_log.record(position, outcome.to_event(transaction))
        return event_log
