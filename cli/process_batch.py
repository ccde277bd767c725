"""Validate a transaction batch from CSV files.

Usage:
    process-transactions users.csv transactions.csv bins.csv balances.csv events.csv

Reads the three input tables, runs the rule chain, the card account
reconciliation and the balance update, then writes the balances and
events tables. Any file error aborts the run before outputs are written.
"""

from __future__ import annotations

import argparse
import sys

from core.config import LogLevel, get_settings
from core.errors import TransactionProcessingError
from core.logging import get_logger, setup_logging
from ledger.csv_io import (
    read_bin_mappings,
    read_transactions,
    read_users,
    write_results,
)
from ledger.service import TransactionProcessor

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="process-transactions",
        description="Validate transactions and update user balances",
    )
    parser.add_argument("users", help="Users CSV file")
    parser.add_argument("transactions", help="Transactions CSV file")
    parser.add_argument("bin_mappings", help="BIN mappings CSV file")
    parser.add_argument("balances_out", help="Where to write the updated balances")
    parser.add_argument("events_out", help="Where to write one event per transaction")
    parser.add_argument(
        "--log-level",
        choices=[level.value for level in LogLevel],
        default=None,
        help="Override APP_LOG_LEVEL",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the batch. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    if args.log_level:
        settings = settings.model_copy(
            update={"app": settings.app.model_copy(update={"log_level": LogLevel(args.log_level)})}
        )
    setup_logging(settings)

    try:
        users = read_users(args.users)
        transactions = read_transactions(args.transactions)
        bin_mappings = read_bin_mappings(args.bin_mappings)
        logger.info(
            "inputs_loaded",
            users=len(users),
            transactions=len(transactions),
            bin_mappings=len(bin_mappings),
        )

        result = TransactionProcessor(config=settings.processing).process(users, transactions, bin_mappings)

        write_results(
            args.balances_out,
            result.users,
            args.events_out,
            result.events,
            settings.processing.balance_decimals,
        )
    except TransactionProcessingError as e:
        logger.error("batch_failed", error=e.message, **e.details)
        return 1

    logger.info(
        "batch_complete",
        approved=result.approved_count,
        declined=result.declined_count,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
