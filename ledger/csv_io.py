"""
Readers and writers for the batch tables.

Inputs have a header row that is skipped. Any unreadable file or
malformed line raises InputFileError; outputs are written to temporary
siblings and renamed into place so a failed run leaves no partial output.
"""

import csv
import os
from pathlib import Path
from typing import Callable, Iterable, TypeVar, Union

from pydantic import BaseModel, ValidationError

from core.errors import InputFileError, OutputFileError

from .models import BinMapping, Event, Transaction, User

PathLike = Union[str, Path]
ModelT = TypeVar("ModelT", bound=BaseModel)

USER_COLUMNS = (
    "id", "username", "balance", "country", "frozen",
    "deposit_min", "deposit_max", "withdraw_min", "withdraw_max",
)
TRANSACTION_COLUMNS = ("id", "user_id", "type", "amount", "method", "account_number")
BIN_MAPPING_COLUMNS = ("name", "range_from", "range_to", "card_type", "country")

BALANCES_HEADER = ("USER_ID", "BALANCE")
EVENTS_HEADER = ("transaction_id", "status", "message")


def _read_table(path: PathLike, columns: tuple[str, ...], build: Callable[..., ModelT]) -> list[ModelT]:
    records: list[ModelT] = []
    try:
        with open(path, newline="", encoding="utf-8") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for row in reader:
                line = reader.line_num
                if not row or all(not cell.strip() for cell in row):
                    continue
                if len(row) != len(columns):
                    raise InputFileError(path, f"expected {len(columns)} columns, got {len(row)}", line)
                values = dict(zip(columns, (cell.strip() for cell in row)))
                try:
                    records.append(build(**values))
                except ValidationError as e:
                    raise InputFileError(path, f"invalid record: {e.errors()[0]['msg']}", line) from e
    except OSError as e:
        raise InputFileError(path, e.strerror or str(e)) from e
    except (csv.Error, UnicodeDecodeError) as e:
        raise InputFileError(path, str(e)) from e
    return records


def read_users(path: PathLike) -> list[User]:
    return _read_table(path, USER_COLUMNS, User)


def read_transactions(path: PathLike) -> list[Transaction]:
    return _read_table(path, TRANSACTION_COLUMNS, Transaction)


def read_bin_mappings(path: PathLike) -> list[BinMapping]:
    return _read_table(path, BIN_MAPPING_COLUMNS, BinMapping)


def _tmp_path(path: PathLike) -> Path:
    target = Path(path)
    return target.with_name(target.name + ".tmp")


def _write_rows(tmp: Path, header: tuple[str, ...], rows: Iterable[Iterable[str]]) -> None:
    with open(tmp, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle, lineterminator="\n")
        writer.writerow(header)
        writer.writerows(rows)


def _write_tables(tables: list[tuple[PathLike, tuple[str, ...], Iterable[Iterable[str]]]]) -> None:
    """Write every table or none of them.

    All tables go to temporary siblings first and are renamed into place
    only once every write succeeded. On failure the temporaries and any
    table already renamed are removed.
    """
    pending = [(Path(path), _tmp_path(path), header, rows) for path, header, rows in tables]
    committed: list[Path] = []
    current = pending[0][0] if pending else None
    try:
        for target, tmp, header, rows in pending:
            current = target
            _write_rows(tmp, header, rows)
        for target, tmp, _, _ in pending:
            current = target
            os.replace(tmp, target)
            committed.append(target)
    except OSError as e:
        for _, tmp, _, _ in pending:
            tmp.unlink(missing_ok=True)
        for target in committed:
            target.unlink(missing_ok=True)
        raise OutputFileError(current, e.strerror or str(e)) from e


def _balance_rows(users: Iterable[User], decimals: int) -> Iterable[tuple[str, str]]:
    return ((u.id, f"{u.balance:.{decimals}f}") for u in users)


def _event_rows(events: Iterable[Event]) -> Iterable[tuple[str, str, str]]:
    return ((e.transaction_id, e.status.value, e.message) for e in events)


def write_balances(path: PathLike, users: Iterable[User], decimals: int = 2) -> None:
    _write_tables([(path, BALANCES_HEADER, _balance_rows(users, decimals))])


def write_events(path: PathLike, events: Iterable[Event]) -> None:
    _write_tables([(path, EVENTS_HEADER, _event_rows(events))])


def write_results(
    balances_path: PathLike,
    users: Iterable[User],
    events_path: PathLike,
    events: Iterable[Event],
    decimals: int = 2,
) -> None:
    """Write the balances and events tables together; a failure leaves neither behind."""
    _write_tables([
        (balances_path, BALANCES_HEADER, _balance_rows(users, decimals)),
        (events_path, EVENTS_HEADER, _event_rows(events)),
    ])
