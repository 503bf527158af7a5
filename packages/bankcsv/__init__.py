"""Public interface for the ``bankcsv`` package.

Symbol re-exports only; see the individual modules for behavior.
"""

from .classifier import assign_account, classify
from .config import load_config, parse_config
from .errors import (
    ConfigError,
    ConversionError,
    InputFileError,
    MalformedRowError,
    OutputError,
    RuleError,
    UnknownFormatError,
)
from .ledger import LedgerWriter, invert_value
from .models import AccountRule, Config, ParserState, StatementLayout, Transaction
from .parser import iter_transactions, parse_row, parse_rows
from .pipeline import ConversionReport, convert, convert_stream, handoff

__all__ = [
    # Pipeline
    "convert",
    "convert_stream",
    "handoff",
    "ConversionReport",
    # Stages
    "iter_transactions",
    "parse_row",
    "parse_rows",
    "assign_account",
    "classify",
    "LedgerWriter",
    "invert_value",
    "load_config",
    "parse_config",
    # Models
    "AccountRule",
    "Config",
    "ParserState",
    "StatementLayout",
    "Transaction",
    # Errors
    "ConversionError",
    "ConfigError",
    "InputFileError",
    "MalformedRowError",
    "OutputError",
    "RuleError",
    "UnknownFormatError",
]
