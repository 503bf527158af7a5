"""Data models for ``bankcsv``.

- :class:`Transaction`: one normalized statement line, immutable once built.
- :class:`StatementLayout`: the vendor layout selected by a header marker row.
- :class:`ParserState`: the running date/counter state shared across every
  input file of a run.
- :class:`AccountRule` / :class:`Config`: the validated rule file.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single statement line normalized for the ledger.

    ``value`` is kept as the exact signed string read from the statement
    (negative means money leaving the source account) so the ledger repeats it
    verbatim. ``account`` is the destination account assigned by the
    classifier; ``None`` means unclassified. ``src_account`` is stamped on by
    the orchestrator, once per run.
    """

    id: str
    date: date
    description: str
    value: str
    account: str | None = None
    src_account: str = ""

    @property
    def classified(self) -> bool:
        return bool(self.account)


class StatementLayout(Enum):
    """Vendor statement layouts, keyed by the first field of the header row."""

    CREDIT = "Masked Card Number"
    DEBIT = "Posted Account"


@dataclass(slots=True)
class ParserState:
    """Running state threaded through the parser call by call.

    The counter is the 1-based sequence number of the current transaction
    within its date. It is global to the run, not reset per file, so the same
    state object must be passed for every input in order.
    """

    last_date: date | None = None
    counter: int = 0

    def advance(self, tx_date: date) -> int:
        """Record a transaction on ``tx_date`` and return its sequence number."""

        if tx_date != self.last_date:
            self.last_date = tx_date
            self.counter = 1
        else:
            self.counter += 1
        return self.counter


# ---------------------------------------------------------------------------
# Rule file
# ---------------------------------------------------------------------------


class AccountRule(BaseModel):
    """Assign ``account`` to transactions whose description matches ``regex``."""

    model_config = ConfigDict(strict=True, frozen=True, extra="ignore", populate_by_name=True)

    account: str = Field(alias="Account")
    regex: str = Field(alias="Regex")


class Config(BaseModel):
    """Top-level schema of the JSON rule file.

    Rule order is significant: every matching rule overrides the ones before
    it, so the last match wins.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    account_from_description: list[AccountRule] = Field(
        default_factory=list, alias="AccountFromDescription"
    )


__all__ = ["AccountRule", "Config", "ParserState", "StatementLayout", "Transaction"]
