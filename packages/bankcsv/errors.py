"""Exceptions raised by the conversion pipeline.

Every error here is fatal for a run: nothing is retried and nothing is skipped.
Errors propagate up to the CLI entry point, which reports them and exits
non-zero. ``ConversionError`` is the common base so callers can catch the
whole family in one place.
"""

from __future__ import annotations


class ConversionError(RuntimeError):
    """Base class for errors that abort a conversion run."""


class ConfigError(ConversionError):
    """The rule file could not be read, decoded, or validated."""


class InputFileError(ConversionError):
    """An input statement file could not be opened or read."""


class MalformedRowError(ConversionError, ValueError):
    """A statement row is not valid CSV, is too short, or has a bad date."""


class UnknownFormatError(ConversionError):
    """A header marker row names a statement layout we do not recognize."""


class RuleError(ConversionError):
    """A classification rule carries a regex that does not compile."""


class OutputError(ConversionError):
    """The ledger sink could not be created, written, flushed, or closed."""


__all__ = [
    "ConfigError",
    "ConversionError",
    "InputFileError",
    "MalformedRowError",
    "OutputError",
    "RuleError",
    "UnknownFormatError",
]
