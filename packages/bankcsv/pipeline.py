"""Conversion orchestration: statements in, double-entry ledger out.

The parser runs as the single producer behind :func:`handoff`; the caller's
thread is the only consumer and does classification and emission strictly
in arrival order. Any :class:`~bankcsv.errors.ConversionError` aborts the run
and propagates to the caller. The only recovered condition is a transaction no
rule matches: it is logged as a warning and written without a destination row.
"""

from __future__ import annotations

import contextlib
import queue
import sys
import threading
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from os import PathLike
from pathlib import Path
from typing import IO, TypeVar

from .classifier import classify
from .config import load_config
from .errors import OutputError
from .ledger import LedgerWriter
from .logging_setup import get_logger
from .models import AccountRule
from .parser import iter_transactions

logger = get_logger("bankcsv.pipeline")

T = TypeVar("T")

# End-of-input marker pushed by the producer, on success and on failure.
_DONE = object()


def handoff(iterable: Iterable[T]) -> Iterator[T]:
    """Drain ``iterable`` on a worker thread and yield its items here, in order.

    The worker pushes into an unbounded queue. An exception raised by the
    producer is re-raised to the consumer after the items produced before it.
    Closing this generator early signals the producer to stop.
    """

    items: queue.Queue[object] = queue.Queue()
    stop = threading.Event()

    def _produce() -> None:
        it = iter(iterable)
        try:
            for item in it:
                if stop.is_set():
                    return
                items.put(item)
        finally:
            close = getattr(it, "close", None)
            if close is not None:
                close()
            items.put(_DONE)

    with ThreadPoolExecutor(max_workers=1, thread_name_prefix="bankcsv-parse") as pool:
        fut = pool.submit(_produce)
        try:
            while True:
                item = items.get()
                if item is _DONE:
                    break
                yield item  # type: ignore[misc]
        finally:
            stop.set()
        fut.result()


@dataclass(slots=True)
class ConversionReport:
    """Counts for one run; ``unclassified`` lists descriptions in input order."""

    transactions: int = 0
    classified: int = 0
    unclassified: list[str] = field(default_factory=list)


def convert_stream(
    src_account: str,
    rules: Sequence[AccountRule],
    inputs: Iterable[str | PathLike[str]],
    sink: IO[str],
) -> ConversionReport:
    """Convert ``inputs`` into ledger rows written to an already-open ``sink``."""

    writer = LedgerWriter(sink)
    report = ConversionReport()
    with contextlib.closing(handoff(iter_transactions(inputs))) as txs:
        for tx in txs:
            tx = classify(replace(tx, src_account=src_account), rules)
            if tx.classified:
                report.classified += 1
            else:
                logger.warning("could not assign account to %s", _printable(tx.description))
                report.unclassified.append(tx.description)
            writer.add(tx)
            report.transactions += 1
    writer.finish()
    return report


def _printable(text: str) -> str:
    """Render undecodable input bytes as U+FFFD for log output."""

    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _stdout() -> IO[str]:
    # Undecodable input bytes must reach stdout as-is, like a named output.
    reconfigure = getattr(sys.stdout, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="surrogateescape")
    return sys.stdout


def convert(
    src_account: str,
    config_path: str | PathLike[str],
    inputs: Sequence[str | PathLike[str]],
    *,
    output: str | PathLike[str] = "-",
) -> ConversionReport:
    """Run a full conversion.

    ``output`` of ``"-"`` writes to stdout; any other value is created or
    truncated. A named output file is closed on every path and removed when
    the run fails, so an aborted run leaves no partial ledger behind.
    """

    cfg = load_config(config_path)
    rules = cfg.account_from_description

    if str(output) == "-":
        report = convert_stream(src_account, rules, inputs, _stdout())
    else:
        path = Path(output)
        try:
            out = path.open("w", encoding="utf-8", errors="surrogateescape", newline="")
        except OSError as exc:
            raise OutputError(f"error creating {path}: {exc}") from exc
        try:
            report = convert_stream(src_account, rules, inputs, out)
        except BaseException:
            # The conversion error takes precedence over a failing close.
            with contextlib.suppress(OSError):
                out.close()
            path.unlink(missing_ok=True)
            raise
        try:
            out.close()
        except OSError as exc:
            path.unlink(missing_ok=True)
            raise OutputError(f"error closing {path}: {exc}") from exc

    logger.info(
        "converted %d transaction(s): %d classified, %d unclassified",
        report.transactions,
        report.classified,
        len(report.unclassified),
    )
    return report


__all__ = ["ConversionReport", "convert", "convert_stream", "handoff"]
