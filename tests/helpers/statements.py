"""Builders for statement CSV fixtures and rule files used across tests.

Rows are rendered as raw CSV text (quoted the way bank exports quote them) so
the parser sees realistic input, including the leading space in the header
marker field.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from pathlib import Path

CREDIT_HEADER = (
    "Masked Card Number, Posted Transactions Date, Description, Credit Amount, Debit Amount"
)
DEBIT_HEADER = (
    "Posted Account, Posted Transactions Date, Description1, Description2, Description3,"
    " Credit Amount, Debit Amount"
)


def _q(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def credit_row(date: str, description: str, amount: str = "", debit: str = "") -> str:
    return ",".join(["************1234", _q(date), _q(description), _q(amount), _q(debit)])


def debit_row(date: str, description: str, amount: str = "", debit: str = "") -> str:
    return ",".join(["", _q(date), _q(description), _q(""), _q(""), _q(amount), _q(debit)])


def write_statement(path: Path, lines: Iterable[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def write_rules(path: Path, rules: Sequence[tuple[str, str]]) -> Path:
    payload = {"AccountFromDescription": [{"Account": a, "Regex": r} for a, r in rules]}
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def read_rows(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()
