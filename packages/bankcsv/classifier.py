"""Assign destination accounts from ordered description rules.

Every rule is evaluated against the description with :func:`re.search`
semantics. Rules are not short-circuited: each match overwrites the previous
assignment, so the last matching rule in file order wins.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import replace

from .errors import RuleError
from .models import AccountRule, Transaction


def assign_account(description: str, rules: Iterable[AccountRule]) -> str | None:
    """Return the account of the last rule matching ``description``, if any."""

    account: str | None = None
    for rule in rules:
        try:
            matched = re.search(rule.regex, description) is not None
        except re.error as exc:
            raise RuleError(
                f"invalid regex {rule.regex!r} for account {rule.account!r}: {exc}"
            ) from exc
        if matched:
            account = rule.account
    return account


def classify(tx: Transaction, rules: Iterable[AccountRule]) -> Transaction:
    """Return a copy of ``tx`` with its destination account assigned."""

    return replace(tx, account=assign_account(tx.description, rules))


__all__ = ["assign_account", "classify"]
