"""Statement CSV → :class:`~bankcsv.models.Transaction` parsing.

Input files are bank exports with one or more statement sections. Each section
starts with a header marker row whose second field is
``" Posted Transactions Date"``; its first field selects the layout:

- ``"Masked Card Number"`` → credit card layout
- ``"Posted Account"`` → debit (checking) layout

Data rows (0-based fields):

=====  ===========  ==============================================
field  credit       debit
=====  ===========  ==============================================
1      date         date (``DD/MM/YYYY``)
2      description  description
3      amount       -
4      debit column -
5      -            amount
6      -            debit column
=====  ===========  ==============================================

When the amount field is empty or ``"0.00"`` the value is taken from the
debit column instead, negated.

Transaction ids are ``YYYYMMDDCC`` where ``CC`` counts transactions sharing
a date. The count runs across every input file of a run, which makes both
file order and row order significant. Any structural problem aborts the run.

Inputs are decoded as UTF-8 (a leading BOM is dropped). Bytes that are not
valid UTF-8, such as Latin-1 exports, become lone surrogates via
``surrogateescape`` and are written back out unchanged by the ledger.
"""

from __future__ import annotations

import csv
from collections.abc import Iterable, Iterator, Sequence
from datetime import date, datetime
from os import PathLike
from pathlib import Path

from .errors import InputFileError, MalformedRowError, UnknownFormatError
from .logging_setup import get_logger
from .models import ParserState, StatementLayout, Transaction

logger = get_logger("bankcsv.parser")

HEADER_MARKER = " Posted Transactions Date"
DATE_FORMAT = "%d/%m/%Y"

# (amount field, fallback debit field) per layout
_VALUE_FIELDS: dict[StatementLayout, tuple[int, int]] = {
    StatementLayout.CREDIT: (3, 4),
    StatementLayout.DEBIT: (5, 6),
}

# Layout in effect before the first header marker of a file.
DEFAULT_LAYOUT = StatementLayout.DEBIT


def _field(row: Sequence[str], idx: int) -> str:
    try:
        return row[idx]
    except IndexError:
        raise MalformedRowError(
            f"expected at least {idx + 1} fields, got {len(row)}: {list(row)!r}"
        ) from None


def is_header(row: Sequence[str]) -> bool:
    return len(row) > 1 and row[1] == HEADER_MARKER


def detect_layout(row: Sequence[str], *, source: str = "<input>") -> StatementLayout:
    """Return the layout named by header marker ``row``."""

    try:
        return StatementLayout(row[0])
    except ValueError:
        raise UnknownFormatError(
            f"unknown input format for {source}: header starts with {row[0]!r}"
        ) from None


def parse_date(text: str) -> date:
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError as exc:
        raise MalformedRowError(f"invalid DD/MM/YYYY date: {text!r}") from exc


def parse_value(row: Sequence[str], layout: StatementLayout) -> str:
    """Return the signed value string of ``row`` for ``layout``."""

    primary, fallback = _VALUE_FIELDS[layout]
    value = _field(row, primary).strip()
    if value == "" or value == "0.00":
        value = "-" + _field(row, fallback).strip()
    return value


def format_id(tx_date: date, counter: int) -> str:
    return f"{tx_date.year:04d}{tx_date.month:02d}{tx_date.day:02d}{counter:02d}"


def parse_row(row: Sequence[str], layout: StatementLayout, state: ParserState) -> Transaction:
    """Convert one data row; advances ``state`` only when the row is valid."""

    tx_date = parse_date(_field(row, 1))
    description = _field(row, 2)
    value = parse_value(row, layout)
    counter = state.advance(tx_date)
    return Transaction(
        id=format_id(tx_date, counter),
        date=tx_date,
        description=description,
        value=value,
    )


def parse_rows(
    rows: Iterable[Sequence[str]],
    state: ParserState,
    *,
    source: str = "<input>",
) -> Iterator[Transaction]:
    """Yield the transactions of one file's rows, top to bottom.

    Header marker rows switch the layout and are not yielded. Blank rows are
    skipped. Errors are re-raised with ``source`` and the row number attached.
    """

    layout = DEFAULT_LAYOUT
    for rowno, row in enumerate(rows, start=1):
        if not row:
            continue
        if is_header(row):
            layout = detect_layout(row, source=source)
            logger.debug("%s:%d: %s layout", source, rowno, layout.name.lower())
            continue
        try:
            tx = parse_row(row, layout, state)
        except MalformedRowError as exc:
            raise MalformedRowError(f"{source}:{rowno}: {exc}") from exc
        yield tx


def iter_transactions(
    paths: Iterable[str | PathLike[str]],
    state: ParserState | None = None,
) -> Iterator[Transaction]:
    """Yield transactions from every file in ``paths``, in the order given.

    A single :class:`ParserState` spans all files so the per-date counter
    carries over from one file to the next.
    """

    if state is None:
        state = ParserState()
    for path in paths:
        p = Path(path)
        try:
            f = p.open(encoding="utf-8-sig", errors="surrogateescape", newline="")
        except OSError as exc:
            raise InputFileError(f"cannot open input {p}: {exc}") from exc
        with f:
            reader = csv.reader(f, strict=True)
            count = 0
            try:
                for tx in parse_rows(reader, state, source=str(p)):
                    count += 1
                    yield tx
            except csv.Error as exc:
                raise MalformedRowError(f"{p}:{reader.line_num}: {exc}") from exc
            except OSError as exc:
                raise InputFileError(f"cannot read input {p}: {exc}") from exc
        logger.debug("parsed %d transaction(s) from %s", count, p)


__all__ = [
    "DEFAULT_LAYOUT",
    "HEADER_MARKER",
    "detect_layout",
    "format_id",
    "is_header",
    "iter_transactions",
    "parse_date",
    "parse_row",
    "parse_rows",
    "parse_value",
]
