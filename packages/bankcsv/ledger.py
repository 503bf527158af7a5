"""Double-entry CSV ledger writer.

Each transaction produces a *source* row carrying the full detail against the
run's source account. A classified transaction also produces a *destination*
row with blank id/date/description and the value negated, so that each pair
balances to zero::

    "id","date","description","withdrawal","account"
    2020020101,2020-02-01,Coffee Shop,-8.00,Assets:Checking
    ,,,8.00,Expenses:Coffee

Rows are written as they arrive; nothing is buffered beyond the underlying
stream.
"""

from __future__ import annotations

from typing import IO

from .errors import OutputError
from .models import Transaction

HEADER = '"id","date","description","withdrawal","account"\n'


def invert_value(value: str) -> str:
    """Flip the sign of a decimal string without reformatting the digits."""

    if value.startswith("-"):
        return value[1:]
    return "-" + value


def source_row(tx: Transaction) -> list[str]:
    return [tx.id, tx.date.isoformat(), tx.description, tx.value, tx.src_account]


def destination_row(tx: Transaction) -> list[str] | None:
    if not tx.account:
        return None
    return ["", "", "", invert_value(tx.value), tx.account]


def _needs_quotes(field: str) -> bool:
    if field == "":
        return False
    # A lone `\.` is the PostgreSQL COPY end-of-data marker.
    if field == "\\." or field[0] in " \t":
        return True
    return any(c in field for c in ',"\r\n')


def format_row(fields: list[str]) -> str:
    """Render one CSV line.

    Quoting is minimal, except that a field starting with a space or tab is
    quoted as well so surrounding blanks survive readers that trim them.
    """

    out = []
    for f in fields:
        if _needs_quotes(f):
            f = '"' + f.replace('"', '""') + '"'
        out.append(f)
    return ",".join(out) + "\n"


class LedgerWriter:
    """Stream transactions to ``stream`` as ledger CSV rows.

    The header is written on construction. Call :meth:`finish` once all
    transactions have been added to flush the stream and surface any deferred
    write error.
    """

    def __init__(self, stream: IO[str]) -> None:
        self._stream = stream
        self.rows_written = 0
        try:
            stream.write(HEADER)
        except OSError as exc:
            raise OutputError(f"error writing csv header: {exc}") from exc

    def _write(self, row: list[str], kind: str) -> None:
        try:
            self._stream.write(format_row(row))
        except (OSError, UnicodeEncodeError) as exc:
            raise OutputError(f"error writing {kind} record to csv: {exc}") from exc
        self.rows_written += 1

    def add(self, tx: Transaction) -> None:
        self._write(source_row(tx), "src")
        dst = destination_row(tx)
        if dst is not None:
            self._write(dst, "dst")

    def finish(self) -> None:
        try:
            self._stream.flush()
        except OSError as exc:
            raise OutputError(f"error flushing csv output: {exc}") from exc


__all__ = [
    "HEADER",
    "LedgerWriter",
    "destination_row",
    "format_row",
    "invert_value",
    "source_row",
]
