from dataclasses import dataclass
from typing import Optional, Sequence

from core.config import ProcessingConfig
from core.logging import get_logger
from rules.context import ReferenceData, ValidationContext
from rules.reconciliation import reconcile_accounts
from rules.rule_engine import RuleEngine

from .balances import BalanceLedger
from .event_log import EventLog
from .models import (
    BatchRequest,
    BatchResponse,
    BinMapping,
    Event,
    EventStatus,
    Transaction,
    User,
)

logger = get_logger(__name__)


@dataclass
class ProcessingResult:
    events: list[Event]
    users: list[User]
    event_log: EventLog
    ledger: BalanceLedger

    @property
    def approved_count(self) -> int:
        return self.event_log.count(EventStatus.APPROVED)

    @property
    def declined_count(self) -> int:
        return self.event_log.count(EventStatus.DECLINED)


class TransactionProcessor:
    """Validates a batch and updates balances.

    Three phases, strictly in order: the rule chain gives every transaction
    a verdict, reconciliation may decline repeat uses of disputed card
    accounts, and only then the ledger moves balances.
    """

    def __init__(self, engine: Optional[RuleEngine] = None, config: Optional[ProcessingConfig] = None):
        self.engine = engine or RuleEngine()
        self.config = config or ProcessingConfig()

    def process(
        self,
        users: Sequence[User],
        transactions: Sequence[Transaction],
        bin_mappings: Sequence[BinMapping],
    ) -> ProcessingResult:
        context = ValidationContext(
            reference=ReferenceData.build(list(users), list(bin_mappings)),
            processing=self.config,
        )

        event_log = self.engine.process(transactions, context)
        logger.info(
            "rule_chain_complete",
            transactions=len(transactions),
            approved=event_log.count(EventStatus.APPROVED),
            declined=event_log.count(EventStatus.DECLINED),
        )

        reconciled = reconcile_accounts(transactions, context, event_log)
        if reconciled:
            logger.info("reconciliation_declined", count=reconciled)

        ledger = BalanceLedger(users)
        applied = ledger.apply(transactions, event_log)
        logger.info("balances_updated", applied=applied, users=len(ledger.users))

        return ProcessingResult(
            events=event_log.final_events(),
            users=ledger.users,
            event_log=event_log,
            ledger=ledger,
        )

    def process_batch(self, request: BatchRequest) -> BatchResponse:
        # Work on copies so the caller's models keep their original balances
        users = [user.model_copy() for user in request.users]
        result = self.process(users, request.transactions, request.bin_mappings)
        return BatchResponse(
            events=result.events,
            balances=result.ledger.balances(self.config.balance_decimals),
            approved_count=result.approved_count,
            declined_count=result.declined_count,
            message="Batch processed successfully",
        )
