"""Typer-based console interface for ``bankcsv``.

Usage::

    bankcsv [-o OUTPUT] SRC_ACCOUNT CONFIG INPUT...

``.env`` in the working directory is loaded (without overriding the existing
environment) before logging is configured, so ``BANKCSV_LOG_LEVEL`` can be set
there. Conversion logic lives in :mod:`bankcsv.pipeline`; this module only
parses arguments and maps errors to exit codes.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv

from .errors import ConversionError
from .logging_setup import configure_logging

USAGE = "Usage: bankcsv [-o OUTPUT] <srcAccount> <json config file> <inputs...>"

app = typer.Typer(
    add_completion=False,
    help=(
        "Convert bank statement CSV exports into a double-entry CSV ledger, "
        "assigning destination accounts from the regex rules in CONFIG."
    ),
)


@app.command()
def convert_cmd(
    args: Annotated[
        list[str] | None,
        typer.Argument(metavar="SRC_ACCOUNT CONFIG INPUT...", show_default=False),
    ] = None,
    output: Annotated[
        str, typer.Option("-o", "--output", help="Output file; '-' writes to stdout.")
    ] = "-",
    log_level: Annotated[
        str | None,
        typer.Option(help="Log level (falls back to BANKCSV_LOG_LEVEL, then INFO)."),
    ] = None,
) -> None:
    """Convert statements for SRC_ACCOUNT using the rules in CONFIG."""

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e

    args = args or []
    if len(args) < 3:
        print("Wrong number of arguments", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        raise typer.Exit(1)

    src_account, config_path, *inputs = args

    # Deferred import keeps --help fast
    from .pipeline import convert

    try:
        convert(src_account, config_path, inputs, output=output)
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        raise typer.Exit(1) from e


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
